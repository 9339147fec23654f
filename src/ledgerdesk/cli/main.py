"""Main CLI entry point."""

import logging
import sys

import click
from ledgerdesk.database.factories import create_session_store, create_sqlite_database

# Import and register all commands at module level
from ledgerdesk.cli.commands import (
    account,
    transaction,
    sale,
    sales_return,
    expense,
    lead_status,
    session,
)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(log_level: str) -> None:
    """Configure root logging for the CLI process."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERDESK_DB_PATH environment variable)",
    envvar="LEDGERDESK_DB_PATH",
)
@click.option(
    "--session-path",
    type=click.Path(),
    help="Path to session file (overrides LEDGERDESK_SESSION_PATH environment variable)",
    envvar="LEDGERDESK_SESSION_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERDESK_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, session_path: str | None, log_level: str):
    """Ledgerdesk - business ledger for accounts, sales, returns and expenses.

    Keeps account transactions, sales, sales returns, expense ledger entries
    and CRM lead statuses, and computes balances and tax totals from them.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

    # Open stores only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["session"] = create_session_store(session_path=session_path)
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
sale.register_commands(cli)
sales_return.register_commands(cli)
expense.register_commands(cli)
lead_status.register_commands(cli)
session.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
