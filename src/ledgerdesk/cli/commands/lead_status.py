"""CRM lead status settings commands."""

import click
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.lead_status import LeadStatusService


@click.group()
def lead_status_group():
    """Manage CRM lead statuses."""
    pass


@lead_status_group.command("add")
@click.argument("name", metavar="STATUS_NAME")
@click.option("--description", help="Description")
@click.option("--order", default=1, type=int, show_default=True, help="Display order")
@click.option("--inactive", is_flag=True, help="Create the status as inactive")
@click.option("--default", "is_default", is_flag=True, help="Mark as the default status")
@click.pass_context
def add_lead_status(ctx, name: str, description: str | None, order: int, inactive: bool, is_default: bool):
    """Add a lead status.

    Examples:
        ledgerdesk lead-status add "New" --order 1 --default
        ledgerdesk lead-status add "Qualified" --order 2 --description "Budget confirmed"
    """
    service = LeadStatusService(ctx.obj["db"])
    try:
        status_id = service.add_lead_status(
            lead_status=name,
            description=description,
            order=order,
            is_active=not inactive,
            is_default=is_default,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Added lead status '{name.strip()}' (ID: {status_id})")


@lead_status_group.command("list")
@click.option("--search", help="Match name or description")
@click.pass_context
def list_lead_statuses(ctx, search: str | None):
    """List lead statuses in display order."""
    service = LeadStatusService(ctx.obj["db"])
    statuses = service.search_lead_statuses(search or "")
    if not statuses:
        click.echo("No lead statuses found.")
        return

    click.echo(f"\n{'Order':>5}  {'Status':<20} {'Active':<7} {'Default':<8} {'ID':<32}  Description")
    click.echo("-" * 100)
    for status in statuses:
        click.echo(
            f"{status.order:>5}  {status.lead_status:<20} {'yes' if status.is_active else 'no':<7} "
            f"{'yes' if status.is_default else 'no':<8} {status.id:<32}  {status.description or ''}"
        )


@lead_status_group.command("update")
@click.argument("lead_status_id", metavar="STATUS_ID")
@click.option("--name", help="New status name")
@click.option("--description", help="New description")
@click.option("--order", type=int, help="New display order")
@click.option("--active/--inactive", default=None, help="Activate or deactivate")
@click.option("--default/--no-default", "is_default", default=None, help="Set or clear default flag")
@click.pass_context
def update_lead_status(
    ctx,
    lead_status_id: str,
    name: str | None,
    description: str | None,
    order: int | None,
    active: bool | None,
    is_default: bool | None,
):
    """Update a lead status. Only the given fields change."""
    candidates = {
        "lead_status": name,
        "description": description,
        "order": order,
        "is_active": active,
        "is_default": is_default,
    }
    changes = {key: value for key, value in candidates.items() if value is not None}
    if not changes:
        click.echo("Error: Nothing to update", err=True)
        ctx.exit(1)

    service = LeadStatusService(ctx.obj["db"])
    try:
        service.update_lead_status(lead_status_id, changes)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated lead status {lead_status_id}")


@lead_status_group.command("delete")
@click.argument("lead_status_id", metavar="STATUS_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_lead_status(ctx, lead_status_id: str, yes: bool):
    """Delete a lead status."""
    service = LeadStatusService(ctx.obj["db"])
    status = service.get_lead_status(lead_status_id)
    if status is None:
        click.echo(f"Error: Lead status {lead_status_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete lead status '{status.lead_status}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_lead_status(lead_status_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted lead status '{status.lead_status}'")


def register_commands(cli):
    """Register lead status commands with main CLI."""
    cli.add_command(lead_status_group, name="lead-status")
