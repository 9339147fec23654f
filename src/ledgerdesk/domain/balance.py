"""Account balance computation.

An account's balance is never stored. It is recomputed from the opening
balance, the signed effects of the account's transactions and the payments
of sales booked to it.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import BalanceResult, Sale, Transaction
from ledgerdesk.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class TransactionKind(str, Enum):
    """Known transaction type tags, plus UNKNOWN for anything else."""

    EXPENSE = "expense"
    TRANSFER_OUT = "transfer_out"
    PURCHASE_PAYMENT = "purchase_payment"
    DEPOSIT_OUT = "deposit_out"
    INCOME = "income"
    TRANSFER_IN = "transfer_in"
    DEPOSIT = "deposit"
    SALE = "sale"
    PURCHASE_RETURN = "purchase_return"
    UNKNOWN = "unknown"


DECREASING_KINDS = frozenset(
    {
        TransactionKind.EXPENSE,
        TransactionKind.TRANSFER_OUT,
        TransactionKind.PURCHASE_PAYMENT,
        TransactionKind.DEPOSIT_OUT,
    }
)

INCREASING_KINDS = frozenset(
    {
        TransactionKind.INCOME,
        TransactionKind.TRANSFER_IN,
        TransactionKind.DEPOSIT,
        TransactionKind.SALE,
        TransactionKind.PURCHASE_RETURN,
    }
)

# Substrings that mark an unrecognised type as money leaving the account.
OUTFLOW_MARKERS = ("expense", "payment")


@dataclass(frozen=True)
class TransactionClass:
    """Classified transaction type; ``raw_type`` is kept for UNKNOWN kinds."""

    kind: TransactionKind
    raw_type: Optional[str] = None


def classify_transaction_type(raw_type: Optional[str]) -> TransactionClass:
    """Classify a stored type tag.

    Matching is exact and case-sensitive. The literal tag ``unknown`` and any
    unrecognised tag both classify as UNKNOWN with the raw tag kept.
    """
    try:
        kind = TransactionKind(raw_type)
    except ValueError:
        return TransactionClass(TransactionKind.UNKNOWN, raw_type)
    if kind is TransactionKind.UNKNOWN:
        return TransactionClass(kind, raw_type)
    return TransactionClass(kind)


def unknown_type_sign(raw_type: Optional[str]) -> int:
    """Sign for an unrecognised type: -1 if it looks like an outflow, else +1."""
    if raw_type and any(marker in raw_type for marker in OUTFLOW_MARKERS):
        return -1
    return 1


def transaction_sign(transaction_class: TransactionClass) -> int:
    """Map every classified type to +1 or -1."""
    if transaction_class.kind in DECREASING_KINDS:
        return -1
    if transaction_class.kind in INCREASING_KINDS:
        return 1
    return unknown_type_sign(transaction_class.raw_type)


def signed_effect(transaction: Transaction) -> Decimal:
    """Return the transaction's contribution to its account balance.

    ``credit - debit`` when both are present, whatever the type; otherwise
    the amount signed by the type.
    """
    if transaction.has_debit_credit:
        return transaction.credit - transaction.debit

    amount = transaction.amount or Decimal("0")
    return transaction_sign(classify_transaction_type(transaction.type)) * amount


def sum_transaction_effects(transactions: Iterable[Transaction]) -> Decimal:
    return sum((signed_effect(txn) for txn in transactions), Decimal("0"))


def sum_sale_payments(
    sale_groups: Iterable[Iterable[Sale]], dedupe: bool = False
) -> tuple[Decimal, tuple[str, ...]]:
    """Sum payment amounts over the result sets of several sale queries.

    Args:
        sale_groups: One iterable of sales per query
        dedupe: If True, a sale found by more than one query counts once

    Returns:
        Tuple of (total, IDs of the sales counted, in counting order)
    """
    total = Decimal("0")
    counted: list[str] = []
    seen: set[str] = set()
    for sales in sale_groups:
        for sale in sales:
            if dedupe and sale.id in seen:
                continue
            seen.add(sale.id)
            counted.append(sale.id)
            total += sale.payment_amount
    return total, tuple(counted)


class BalanceService:
    """Service computing account balances."""

    def __init__(self, db: Database):
        """Initialize balance service.

        Args:
            db: Database instance
        """
        self.db = db

    def calculate_balance(self, account_id: str, dedupe_sales: bool = False) -> BalanceResult:
        """Compute the current balance of an account.

        Sales are found through both ``paymentAccountId`` and the legacy
        ``paymentAccount`` field. By default a sale carrying both fields is
        counted twice, matching existing reports; pass ``dedupe_sales=True``
        to count every sale once.

        Args:
            account_id: Account ID
            dedupe_sales: Count a sale matched by both fields once

        Returns:
            BalanceResult. On a store failure the result carries ``error``
            and a zero value; the failure is logged, not raised.

        Raises:
            ValidationError: If account_id is empty
        """
        if not account_id:
            raise ValidationError("Account ID is required")

        try:
            account = self.db.get_account(account_id)
            transactions = self.db.list_transactions(account_id=account_id)
            sales_by_id = self.db.list_sales(payment_account_id=account_id)
            sales_by_legacy_field = self.db.list_sales(payment_account=account_id)
        except SQLAlchemyError as e:
            logger.exception("Error calculating account balance for %s", account_id)
            return BalanceResult(account_id=account_id, error=str(e))

        opening_balance = account.opening_balance if account is not None else Decimal("0")
        transactions_total = sum_transaction_effects(transactions)
        sales_total, counted_sale_ids = sum_sale_payments(
            (sales_by_id, sales_by_legacy_field), dedupe=dedupe_sales
        )

        if not dedupe_sales and len(set(counted_sale_ids)) != len(counted_sale_ids):
            logger.warning(
                "Account %s: sales booked under both payment account fields were counted twice",
                account_id,
            )

        return BalanceResult(
            account_id=account_id,
            value=opening_balance + transactions_total + sales_total,
            opening_balance=opening_balance,
            transactions_total=transactions_total,
            sales_total=sales_total,
            counted_sale_ids=counted_sale_ids,
        )

    def get_calculated_account_balance(self, account_id: str) -> Decimal:
        """Return the balance for display, zero if it could not be computed."""
        return self.calculate_balance(account_id).value_or_zero()
