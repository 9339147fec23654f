"""Expense ledger domain service and view.

The ledger combines expenses, purchases, bills, payments and refunds into
one list of CombinedEntry rows. Search, pagination and totals operate on
that normalized list.
"""

import logging
import math
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import CombinedEntry, ExpenseRecord
from ledgerdesk.domain.errors import ValidationError, negative_amount

logger = logging.getLogger(__name__)

ENTRIES_PER_PAGE = 10
MAX_PAGE_LINKS = 5
PLACEHOLDER = "-"

ENTRY_TYPE_DISPLAY = {
    "expense": "Expense",
    "purchase": "Purchase",
    "bill": "Bill",
    "payment": "Payment",
    "refund": "Refund",
}


def entry_type_display(entry_type: Optional[str]) -> str:
    """Return the display label of an entry type; unknown types pass through."""
    if not entry_type:
        return PLACEHOLDER
    return ENTRY_TYPE_DISPLAY.get(entry_type.lower(), entry_type)


def normalize_entry(expense: ExpenseRecord) -> CombinedEntry:
    """Normalize a stored entry into a CombinedEntry.

    A missing or zero CGST/SGST amount defaults to half the tax amount.
    """
    tax_amount = expense.tax_amount or Decimal("0")
    half_tax = tax_amount / 2
    return CombinedEntry(
        date=expense.date,
        reference_no=expense.reference_no,
        entry_type=expense.entry_type or "expense",
        category_name=expense.category_name or PLACEHOLDER,
        business_location_name=expense.business_location_name or PLACEHOLDER,
        total_amount=expense.total_amount or Decimal("0"),
        tax_amount=tax_amount,
        cgst_amount=expense.cgst_amount or half_tax,
        sgst_amount=expense.sgst_amount or half_tax,
        igst_amount=expense.igst_amount or Decimal("0"),
        payment_method=expense.payment_method or PLACEHOLDER,
        payment_status=expense.payment_status or PLACEHOLDER,
    )


def _matches(entry: CombinedEntry, term: str) -> bool:
    fields = (
        entry.reference_no,
        entry.payment_method,
        entry.business_location_name,
        entry.category_name,
    )
    return any(value is not None and term in value.lower() for value in fields)


class ExpenseLedgerView:
    """Searchable, paginated view over normalized ledger entries.

    Totals cover the entries matching the current search, not the whole
    ledger.
    """

    def __init__(self, entries: Iterable[CombinedEntry], entries_per_page: int = ENTRIES_PER_PAGE):
        self.entries = list(entries)
        self.entries_per_page = entries_per_page
        self.current_page = 1
        self.search_term = ""

    def search(self, term: str) -> None:
        """Set the search term and go back to the first page."""
        self.search_term = term
        self.current_page = 1

    @property
    def filtered_entries(self) -> list[CombinedEntry]:
        term = self.search_term.lower()
        return [entry for entry in self.entries if _matches(entry, term)]

    @property
    def paginated_entries(self) -> list[CombinedEntry]:
        start = (self.current_page - 1) * self.entries_per_page
        return self.filtered_entries[start : start + self.entries_per_page]

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self.filtered_entries) / self.entries_per_page)

    @property
    def start_entry_number(self) -> int:
        return (self.current_page - 1) * self.entries_per_page + 1

    @property
    def max_entry_number(self) -> int:
        return min(self.current_page * self.entries_per_page, len(self.filtered_entries))

    def page_numbers(self) -> list[int]:
        """Return up to five page numbers around the current page."""
        total_pages = self.total_pages
        span = MAX_PAGE_LINKS - 1
        start_page = max(1, self.current_page - 2)
        end_page = min(total_pages, self.current_page + 2)

        if end_page - start_page < span:
            if start_page == 1:
                end_page = min(total_pages, start_page + span)
            else:
                start_page = max(1, end_page - span)

        return list(range(start_page, end_page + 1))

    def change_page(self, page: int) -> bool:
        """Move to ``page`` if it exists. Returns whether the page changed."""
        if 1 <= page <= self.total_pages:
            self.current_page = page
            return True
        return False

    def _total(self, attr: str) -> Decimal:
        return sum((getattr(entry, attr) for entry in self.filtered_entries), Decimal("0"))

    def total_amount(self) -> Decimal:
        return self._total("total_amount")

    def total_tax_amount(self) -> Decimal:
        return self._total("tax_amount")

    def total_cgst_amount(self) -> Decimal:
        return self._total("cgst_amount")

    def total_sgst_amount(self) -> Decimal:
        return self._total("sgst_amount")

    def total_igst_amount(self) -> Decimal:
        return self._total("igst_amount")


class ExpenseService:
    """Service for recording expense ledger entries and building the ledger view."""

    def __init__(self, db: Database):
        """Initialize expense service.

        Args:
            db: Database instance
        """
        self.db = db

    def add_expense(
        self,
        total_amount: Decimal,
        entry_type: str = "expense",
        date: Optional[date] = None,
        reference_no: Optional[str] = None,
        category_name: Optional[str] = None,
        business_location_name: Optional[str] = None,
        tax_amount: Optional[Decimal] = None,
        cgst_amount: Optional[Decimal] = None,
        sgst_amount: Optional[Decimal] = None,
        igst_amount: Optional[Decimal] = None,
        payment_method: Optional[str] = None,
        payment_status: Optional[str] = None,
    ) -> str:
        """Record an expense ledger entry.

        Returns:
            Entry ID

        Raises:
            ValidationError: If any amount is negative
        """
        amounts = {
            "Total amount": total_amount,
            "Tax amount": tax_amount,
            "CGST amount": cgst_amount,
            "SGST amount": sgst_amount,
            "IGST amount": igst_amount,
        }
        for field_name, value in amounts.items():
            if value is not None and value < 0:
                raise ValidationError(negative_amount(field_name))

        return self.db.create_expense(
            total_amount=total_amount,
            entry_type=entry_type.lower() if entry_type else None,
            date=date,
            reference_no=reference_no,
            category_name=category_name,
            business_location_name=business_location_name,
            tax_amount=tax_amount,
            cgst_amount=cgst_amount,
            sgst_amount=sgst_amount,
            igst_amount=igst_amount,
            payment_method=payment_method,
            payment_status=payment_status,
        )

    def list_expenses(self) -> list[ExpenseRecord]:
        """List stored entries, newest first."""
        return self.db.list_expenses()

    def load_ledger_view(self) -> ExpenseLedgerView:
        """Build the ledger view over all entries.

        Store failures are logged and give an empty view.
        """
        try:
            expenses = self.db.list_expenses()
        except SQLAlchemyError:
            logger.exception("Error loading expense ledger")
            expenses = []
        return ExpenseLedgerView(normalize_entry(e) for e in expenses)
