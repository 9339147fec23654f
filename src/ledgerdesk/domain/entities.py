"""Domain model entities for ledgerdesk.

These are pure data classes representing business records, independent of
the storage schema. Field names are pythonic; the mapping to the stored
field names (``openingBalance``, ``paymentAccountId`` ...) lives in the
database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Mapping, Optional

from ledgerdesk.utils.amount_parser import safe_decimal


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: str
    name: str
    opening_balance: Decimal
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Ledger transaction domain entity.

    A transaction carries its effect either as ``debit``/``credit`` or as an
    unsigned ``amount`` plus a ``type`` tag.
    """

    id: str
    account_id: str
    date: Optional[date]
    amount: Optional[Decimal]
    type: Optional[str]
    debit: Optional[Decimal]
    credit: Optional[Decimal]
    description: Optional[str]
    created_at: datetime

    @property
    def has_debit_credit(self) -> bool:
        return self.debit is not None and self.credit is not None


@dataclass(frozen=True)
class Sale:
    """Sale domain entity.

    ``payment_account`` is the legacy name of ``payment_account_id``; older
    records carry one or the other, occasionally both.
    """

    id: str
    invoice_no: Optional[str]
    sale_date: Optional[date]
    customer: Optional[str]
    payment_account_id: Optional[str]
    payment_account: Optional[str]
    payment_amount: Decimal
    created_at: datetime


@dataclass(frozen=True)
class ReturnedItem:
    """One line of a sales return."""

    product_id: Optional[str] = None
    name: Optional[str] = None
    quantity: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")


def returned_item_from_payload(payload: Mapping[str, Any]) -> ReturnedItem:
    """Build a ReturnedItem from a ``returnedItems`` element.

    Keys are the stored names (``productId``, ``unitPrice``, ``taxAmount`` ...).
    Missing or non-numeric amounts become zero.
    """
    product_id = payload.get("productId")
    name = payload.get("name")
    return ReturnedItem(
        product_id=str(product_id) if product_id is not None else None,
        name=str(name) if name is not None else None,
        quantity=safe_decimal(payload.get("quantity")),
        unit_price=safe_decimal(payload.get("unitPrice")),
        tax_amount=safe_decimal(payload.get("taxAmount")),
    )


@dataclass(frozen=True)
class SalesReturn:
    """Sales return domain entity with its denormalized tax totals."""

    id: str
    original_sale_id: Optional[str]
    invoice_no: Optional[str]
    return_date: date
    returned_items: tuple[ReturnedItem, ...]
    is_full_return: bool
    shipping_tax_refunded: Decimal
    total_product_tax_returned: Decimal
    total_shipping_tax_returned: Decimal
    total_tax_impact: Decimal
    return_reason: Optional[str]
    processed_by: Optional[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ExpenseRecord:
    """Stored expense ledger entry (expense, purchase, bill, payment, refund).

    Every field except the identifiers may be missing on older records.
    """

    id: str
    date: Optional[date] = None
    reference_no: Optional[str] = None
    entry_type: Optional[str] = None
    category_name: Optional[str] = None
    business_location_name: Optional[str] = None
    total_amount: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None
    cgst_amount: Optional[Decimal] = None
    sgst_amount: Optional[Decimal] = None
    igst_amount: Optional[Decimal] = None
    payment_method: Optional[str] = None
    payment_status: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class CombinedEntry:
    """Normalized expense ledger row used by the ledger view."""

    date: Optional[date]
    reference_no: Optional[str]
    entry_type: str
    category_name: str
    business_location_name: str
    total_amount: Decimal
    tax_amount: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    igst_amount: Decimal
    payment_method: str
    payment_status: str


@dataclass(frozen=True)
class LeadStatus:
    """CRM lead status setting."""

    id: str
    lead_status: str
    description: Optional[str]
    order: int
    is_active: bool
    is_default: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class ReturnTaxTotals:
    """Tax totals computed for a sales return at creation time."""

    total_product_tax_returned: Decimal
    total_shipping_tax_returned: Decimal
    total_tax_impact: Decimal


@dataclass(frozen=True)
class BalanceResult:
    """Outcome of an account balance computation.

    ``error`` is set when the computation failed; ``value`` is then zero and
    must not be read as a real balance.
    """

    account_id: str
    value: Decimal = Decimal("0")
    opening_balance: Decimal = Decimal("0")
    transactions_total: Decimal = Decimal("0")
    sales_total: Decimal = Decimal("0")
    error: Optional[str] = None
    counted_sale_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or_zero(self) -> Decimal:
        """Return the balance, or zero when the computation failed."""
        return self.value if self.ok else Decimal("0")
