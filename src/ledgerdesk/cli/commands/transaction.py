"""Transaction management commands."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.date_filters import parse_amount_or_exit, parse_date_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.balance import TransactionKind, signed_effect
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.transaction import TransactionService

KNOWN_TYPES = ", ".join(kind.value for kind in TransactionKind if kind is not TransactionKind.UNKNOWN)


@click.group()
def transaction_group():
    """Manage ledger transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", help="Unsigned amount (use with --type)")
@click.option("--type", "txn_type", help=f"Transaction type ({KNOWN_TYPES}, or any other tag)")
@click.option("--debit", help="Debit amount (use with --credit)")
@click.option("--credit", help="Credit amount (use with --debit)")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    amount: str | None,
    txn_type: str | None,
    debit: str | None,
    credit: str | None,
    date: str | None,
    description: str | None,
) -> None:
    """Record a transaction against an account.

    Give either --amount with --type, or --debit with --credit.

    Examples:
        ledgerdesk transaction add --account Cash --amount 200 --type income
        ledgerdesk transaction add --account Cash --debit 50 --credit 0
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    txn_amount = parse_amount_or_exit(ctx, amount)
    txn_debit = parse_amount_or_exit(ctx, debit, "debit")
    txn_credit = parse_amount_or_exit(ctx, credit, "credit")
    txn_date = parse_date_or_exit(ctx, date)

    try:
        transaction_id = service.create_transaction(
            account_id=account_id,
            amount=txn_amount,
            type=txn_type,
            debit=txn_debit,
            credit=txn_credit,
            date=txn_date,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created transaction {transaction_id}")


@transaction_group.command("list")
@click.option("--account", help="Account name or ID")
@click.pass_context
def list_transactions(ctx, account: str | None) -> None:
    """List transactions with their signed effect on the balance."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    transactions = service.list_transactions(account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'Date':<12} {'Type':<18} {'Effect':>14}  Description")
    click.echo("-" * 80)
    for txn in transactions:
        txn_date = txn.date.isoformat() if txn.date else "-"
        txn_type = "debit/credit" if txn.has_debit_credit else (txn.type or "-")
        click.echo(
            f"{txn_date:<12} {txn_type:<18} {signed_effect(txn):>14,.2f}  {txn.description or ''}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
