"""Account management commands."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.date_filters import parse_amount_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.balance import BalanceService
from ledgerdesk.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--opening-balance", default="0", help="Balance before any recorded activity (default 0)")
@click.pass_context
def create_account(ctx, name: str, opening_balance: str):
    """Create a new account.

    Examples:
        ledgerdesk account create "Cash"
        ledgerdesk account create "HDFC Current" --opening-balance 25000
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    balance = parse_amount_or_exit(ctx, opening_balance, "opening balance")

    try:
        account_id = service.create_account(name=name, opening_balance=balance)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name.strip()}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their current balance."""
    db = ctx.obj["db"]
    service = AccountService(db)
    balance_service = BalanceService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for acc in accounts:
        result = balance_service.calculate_balance(acc.id)
        balance = f"{result.value:>12,.2f}" if result.ok else f"{'unavailable':>12s}"
        click.echo(f"ID: {acc.id} | {acc.name:20s} | Balance: {balance}")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option(
    "--dedupe-sales",
    is_flag=True,
    help="Count a sale booked under both payment account fields only once",
)
@click.option("--breakdown", is_flag=True, help="Show opening balance, transactions and sales separately")
@click.pass_context
def account_balance(ctx, account: str, dedupe_sales: bool, breakdown: bool):
    """Show the current balance of an account.

    ACCOUNT can be an account name or ID.

    Examples:
        ledgerdesk account balance "Cash"
        ledgerdesk account balance "Cash" --breakdown --dedupe-sales
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, account_service, account)

    result = BalanceService(db).calculate_balance(account_id, dedupe_sales=dedupe_sales)
    if not result.ok:
        click.echo(f"Error: Could not compute balance: {result.error}", err=True)
        click.echo(f"Balance: {result.value_or_zero():,.2f}")
        ctx.exit(1)

    account_obj = account_service.get_account(account_id)
    click.echo(f"Account: {account_obj.name}")
    if breakdown:
        click.echo(f"Opening balance:  {result.opening_balance:>14,.2f}")
        click.echo(f"Transactions:     {result.transactions_total:>14,.2f}")
        click.echo(f"Sales:            {result.sales_total:>14,.2f}")
        click.echo("-" * 32)
    click.echo(f"Balance: {result.value:,.2f}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
