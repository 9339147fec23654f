"""Sales return commands."""

from datetime import date

import click
from ledgerdesk.cli.date_filters import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_cli_date_range,
)
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.sales_return import SalesReturnService


@click.group()
def return_group():
    """Record sales returns and report returned tax."""
    pass


@return_group.command("create")
@click.option("--date", "return_date", default="today", help="Return date (default today)")
@click.option(
    "--item-tax",
    "item_taxes",
    multiple=True,
    help="Tax amount of one returned item (repeat for each item)",
)
@click.option("--full", "is_full_return", is_flag=True, help="The whole sale was returned")
@click.option("--shipping-tax", default="0", help="Shipping tax refunded (full returns only)")
@click.option("--sale-id", help="ID of the original sale")
@click.option("--invoice", help="Invoice number of the original sale")
@click.option("--reason", help="Return reason")
@click.pass_context
def create_return(
    ctx,
    return_date: str,
    item_taxes: tuple[str, ...],
    is_full_return: bool,
    shipping_tax: str,
    sale_id: str | None,
    invoice: str | None,
    reason: str | None,
):
    """Record a sales return and its tax impact.

    Examples:
        ledgerdesk return create --item-tax 10 --item-tax 15 --full --shipping-tax 5
        ledgerdesk return create --invoice INV-001 --item-tax 12.50 --reason "Damaged"
    """
    service = SalesReturnService(ctx.obj["db"])
    parsed_date = parse_date_or_exit(ctx, return_date, "return date")
    items = [{"taxAmount": parse_amount_or_exit(ctx, tax, "item tax")} for tax in item_taxes]
    shipping = parse_amount_or_exit(ctx, shipping_tax, "shipping tax")

    user = ctx.obj["session"].get_user()
    processed_by = user.get("username") if user else None

    try:
        return_id = service.create_return(
            return_date=parsed_date,
            returned_items=items,
            is_full_return=is_full_return,
            shipping_tax_refunded=shipping,
            original_sale_id=sale_id,
            invoice_no=invoice,
            return_reason=reason,
            processed_by=processed_by,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    created = service.get_return(return_id)
    click.echo(f"Created sales return {return_id}")
    click.echo(f"Product tax returned:  {created.total_product_tax_returned:,.2f}")
    click.echo(f"Shipping tax returned: {created.total_shipping_tax_returned:,.2f}")
    click.echo(f"Total tax impact:      {created.total_tax_impact:,.2f}")


@return_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.pass_context
def list_returns(ctx, start_date: str | None, end_date: str | None):
    """List sales returns."""
    service = SalesReturnService(ctx.obj["db"])
    start = parse_date_or_exit(ctx, start_date, "start date")
    end = parse_date_or_exit(ctx, end_date, "end date")

    if start is None and end is None:
        returns = service.list_returns()
    else:
        returns = service.list_returns_by_date_range(start or date.min, end or date.max)

    if not returns:
        click.echo("No sales returns found.")
        return

    click.echo(f"\n{'Date':<12} {'Invoice':<14} {'Full':<5} {'Items':>5} {'Tax impact':>12}")
    click.echo("-" * 52)
    for r in returns:
        full = "yes" if r.is_full_return else "no"
        click.echo(
            f"{r.return_date.isoformat():<12} {r.invoice_no or '-':<14} {full:<5} "
            f"{len(r.returned_items):>5} {r.total_tax_impact:>12,.2f}"
        )


@return_group.command("tax-summary")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--this-month", is_flag=True, help="Current month")
@click.option("--this-year", is_flag=True, help="Current year")
@click.option("--this-week", is_flag=True, help="Current week")
@click.option("--last-month", is_flag=True, help="Previous month")
@click.option("--last-year", is_flag=True, help="Previous year")
@click.option("--last-week", is_flag=True, help="Previous week")
@click.pass_context
def tax_summary(
    ctx,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    this_week: bool,
    last_month: bool,
    last_year: bool,
    last_week: bool,
):
    """Show tax returned through sales returns in a date range.

    Defaults to the current month.
    """
    service = SalesReturnService(ctx.obj["db"])
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "this-week": this_week,
            "last-month": last_month,
            "last-year": last_year,
            "last-week": last_week,
        },
        default_range=(date.today().replace(day=1), date.today()),
    )
    start = start or date.min
    end = end or date.max

    total_tax = service.get_total_tax_returned(start, end)
    shipping_tax = service.get_total_shipping_tax_returned(start, end)

    label_start = start.isoformat() if start != date.min else "beginning"
    label_end = end.isoformat() if end != date.max else "now"
    click.echo(f"Sales return tax from {label_start} to {label_end}")
    click.echo(f"Total tax returned:    {total_tax:,.2f}")
    click.echo(f"Shipping tax returned: {shipping_tax:,.2f}")


def register_commands(cli):
    """Register sales return commands with main CLI."""
    cli.add_command(return_group, name="return")
