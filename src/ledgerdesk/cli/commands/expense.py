"""Expense ledger commands."""

import click
from ledgerdesk.cli.date_filters import parse_amount_or_exit, parse_date_or_exit
from ledgerdesk.cli.error_handling import handle_domain_error
from ledgerdesk.domain.errors import DomainError
from ledgerdesk.domain.expense_ledger import (
    ENTRY_TYPE_DISPLAY,
    ExpenseService,
    entry_type_display,
)


@click.group()
def expense_group():
    """Manage the expense ledger (expenses, purchases, bills, payments, refunds)."""
    pass


@expense_group.command("add")
@click.option("--amount", required=True, help="Total amount")
@click.option(
    "--type",
    "entry_type",
    default="expense",
    show_default=True,
    help=f"Entry type ({', '.join(ENTRY_TYPE_DISPLAY)})",
)
@click.option("--date", help="Entry date (YYYY-MM-DD or relative like 'today')")
@click.option("--reference", help="Reference number")
@click.option("--category", help="Expense category name")
@click.option("--location", help="Business location name")
@click.option("--tax", help="Total tax amount")
@click.option("--cgst", help="CGST amount (defaults to half the tax)")
@click.option("--sgst", help="SGST amount (defaults to half the tax)")
@click.option("--igst", help="IGST amount")
@click.option("--payment-method", help="Payment method")
@click.option("--payment-status", help="Payment status (Paid, Partial, Unpaid)")
@click.pass_context
def add_expense(
    ctx,
    amount: str,
    entry_type: str,
    date: str | None,
    reference: str | None,
    category: str | None,
    location: str | None,
    tax: str | None,
    cgst: str | None,
    sgst: str | None,
    igst: str | None,
    payment_method: str | None,
    payment_status: str | None,
):
    """Record an expense ledger entry.

    Examples:
        ledgerdesk expense add --amount 1180 --tax 180 --category Rent --reference EXP-7
        ledgerdesk expense add --type purchase --amount 500 --igst 90
    """
    service = ExpenseService(ctx.obj["db"])

    try:
        entry_id = service.add_expense(
            total_amount=parse_amount_or_exit(ctx, amount),
            entry_type=entry_type,
            date=parse_date_or_exit(ctx, date),
            reference_no=reference,
            category_name=category,
            business_location_name=location,
            tax_amount=parse_amount_or_exit(ctx, tax, "tax"),
            cgst_amount=parse_amount_or_exit(ctx, cgst, "CGST"),
            sgst_amount=parse_amount_or_exit(ctx, sgst, "SGST"),
            igst_amount=parse_amount_or_exit(ctx, igst, "IGST"),
            payment_method=payment_method,
            payment_status=payment_status,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {entry_type_display(entry_type).lower()} entry {entry_id}")


@expense_group.command("list")
@click.option("--search", default="", help="Match reference, payment method, location or category")
@click.option("--page", default=1, type=int, show_default=True, help="Page number")
@click.pass_context
def list_expenses(ctx, search: str, page: int):
    """Show the expense ledger, ten entries per page, with totals.

    Totals cover every entry matching --search, not just the page shown.
    """
    view = ExpenseService(ctx.obj["db"]).load_ledger_view()
    view.search(search)

    if not view.filtered_entries:
        click.echo("No expense entries found.")
        return

    if not view.change_page(page):
        click.echo(f"Error: Page {page} does not exist (1-{view.total_pages})", err=True)
        ctx.exit(1)

    click.echo(
        f"\n{'Date':<12} {'Reference':<12} {'Type':<9} {'Category':<16} {'Location':<14} "
        f"{'Amount':>11} {'Tax':>9} {'CGST':>9} {'SGST':>9} {'IGST':>9} {'Method':<8} {'Status':<8}"
    )
    click.echo("-" * 140)
    for entry in view.paginated_entries:
        entry_date = entry.date.isoformat() if entry.date else "-"
        click.echo(
            f"{entry_date:<12} {entry.reference_no or '-':<12} {entry_type_display(entry.entry_type):<9} "
            f"{entry.category_name:<16} {entry.business_location_name:<14} "
            f"{entry.total_amount:>11,.2f} {entry.tax_amount:>9,.2f} {entry.cgst_amount:>9,.2f} "
            f"{entry.sgst_amount:>9,.2f} {entry.igst_amount:>9,.2f} "
            f"{entry.payment_method:<8} {entry.payment_status:<8}"
        )
    click.echo("-" * 140)
    click.echo(
        f"Showing {view.start_entry_number} to {view.max_entry_number} of "
        f"{len(view.filtered_entries)} entries | Pages: "
        + " ".join(f"[{n}]" if n == view.current_page else str(n) for n in view.page_numbers())
    )
    click.echo(f"Total amount: {view.total_amount():,.2f}")
    click.echo(f"Total tax:    {view.total_tax_amount():,.2f}")
    click.echo(f"Total CGST:   {view.total_cgst_amount():,.2f}")
    click.echo(f"Total SGST:   {view.total_sgst_amount():,.2f}")
    click.echo(f"Total IGST:   {view.total_igst_amount():,.2f}")


def register_commands(cli):
    """Register expense commands with main CLI."""
    cli.add_command(expense_group, name="expense")
