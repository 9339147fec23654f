"""Sale commands."""

import click
from ledgerdesk.cli.account_resolution import resolve_account_or_exit
from ledgerdesk.cli.date_filters import parse_amount_or_exit, parse_date_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.account import AccountService
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.sale import SaleService
from ledgerdesk.domain.session import LeadToSaleHandoff


@click.group()
def sale_group():
    """Record and list sales."""
    pass


@sale_group.command("prefill")
@click.option("--customer", required=True, help="Customer name from the lead")
@click.option("--lead-id", help="ID of the lead being converted")
@click.option("--contact", help="Customer phone or email")
@click.pass_context
def prefill_sale(ctx, customer: str, lead_id: str | None, contact: str | None):
    """Hand lead details to the next 'sale add'.

    The details are used once and then discarded.
    """
    handoff = LeadToSaleHandoff(ctx.obj["session"])
    handoff.set_lead_data({"customer": customer, "leadId": lead_id, "contact": contact})
    click.echo(f"Next sale will be prefilled for '{customer}'")


@sale_group.command("add")
@click.option("--account", required=True, help="Payment account name or ID")
@click.option("--amount", required=True, help="Payment amount")
@click.option("--invoice", help="Invoice number")
@click.option("--date", help="Sale date (YYYY-MM-DD or relative like 'today')")
@click.option("--customer", help="Customer name (defaults to prefilled lead, if any)")
@click.option(
    "--legacy-field",
    is_flag=True,
    help="Store the account under the legacy 'paymentAccount' field",
)
@click.pass_context
def add_sale(
    ctx,
    account: str,
    amount: str,
    invoice: str | None,
    date: str | None,
    customer: str | None,
    legacy_field: bool,
):
    """Record a sale paid into an account.

    Examples:
        ledgerdesk sale add --account Cash --amount 300 --invoice INV-001
    """
    db = ctx.obj["db"]
    service = SaleService(db)
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    payment_amount = parse_amount_or_exit(ctx, amount, "payment amount")
    sale_date = parse_date_or_exit(ctx, date, "sale date")

    handoff = LeadToSaleHandoff(ctx.obj["session"])
    lead_data = handoff.peek_lead_data()
    if customer is None and lead_data is not None:
        customer = lead_data.get("customer")

    try:
        sale_id = service.create_sale(
            payment_account_id=account_id,
            payment_amount=payment_amount,
            invoice_no=invoice,
            sale_date=sale_date,
            customer=customer,
            legacy_field=legacy_field,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    # Lead data is consumed only by a created sale
    if lead_data is not None:
        handoff.take_lead_data()

    click.echo(f"Created sale {sale_id}")
    if customer:
        click.echo(f"Customer: {customer}")


@sale_group.command("list")
@click.option("--account", help="Payment account name or ID")
@click.pass_context
def list_sales(ctx, account: str | None):
    """List sales, optionally those paid into one account."""
    db = ctx.obj["db"]
    service = SaleService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    sales = service.list_sales(account_id=account_id)
    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"\n{'Date':<12} {'Invoice':<14} {'Customer':<20} {'Amount':>12}")
    click.echo("-" * 62)
    for s in sales:
        sale_date = s.sale_date.isoformat() if s.sale_date else "-"
        click.echo(
            f"{sale_date:<12} {s.invoice_no or '-':<14} {s.customer or '-':<20} {s.payment_amount:>12,.2f}"
        )


def register_commands(cli):
    """Register sale commands with main CLI."""
    cli.add_command(sale_group, name="sale")
