"""Session commands (login, logout, whoami)."""

from datetime import datetime, UTC

import click


@click.command("login")
@click.argument("username")
@click.option("--role", default="staff", show_default=True, help="Role of the user")
@click.pass_context
def login(ctx, username: str, role: str):
    """Start a session as USERNAME."""
    session = ctx.obj["session"]
    session.save_user(
        {"username": username, "role": role, "loggedInAt": datetime.now(UTC).isoformat()}
    )
    click.echo(f"Logged in as {username}")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """End the current session."""
    session = ctx.obj["session"]
    if not session.is_logged_in():
        click.echo("Not logged in.")
        return
    session.clear()
    click.echo("Logged out.")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the logged-in user."""
    user = ctx.obj["session"].get_user()
    if user is None:
        click.echo("Not logged in.")
        return
    click.echo(f"{user.get('username')} ({user.get('role', 'staff')})")


def register_commands(cli):
    """Register session commands with main CLI."""
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)
