"""Sales return domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import (
    ReturnedItem,
    ReturnTaxTotals,
    SalesReturn,
    returned_item_from_payload,
)
from ledgerdesk.domain.errors import ValidationError, negative_amount
from ledgerdesk.utils.amount_parser import safe_decimal

logger = logging.getLogger(__name__)


def compute_return_tax(
    returned_items: Iterable[ReturnedItem],
    is_full_return: bool,
    shipping_tax_refunded: Decimal,
) -> ReturnTaxTotals:
    """Compute the tax returned by a sales return.

    Shipping tax is refunded only on full returns; partial returns refund
    product tax alone.
    """
    product_tax = sum((item.tax_amount for item in returned_items), Decimal("0"))
    shipping_tax = shipping_tax_refunded if is_full_return else Decimal("0")
    return ReturnTaxTotals(
        total_product_tax_returned=product_tax,
        total_shipping_tax_returned=shipping_tax,
        total_tax_impact=product_tax + shipping_tax,
    )


class SalesReturnService:
    """Service for recording sales returns and querying returned tax."""

    def __init__(self, db: Database):
        """Initialize sales return service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_return(
        self,
        return_date: date,
        returned_items: Sequence[Mapping[str, Any]],
        is_full_return: bool = False,
        shipping_tax_refunded: Any = None,
        original_sale_id: Optional[str] = None,
        invoice_no: Optional[str] = None,
        return_reason: Optional[str] = None,
        processed_by: Optional[str] = None,
    ) -> str:
        """Record a sales return with its tax totals.

        Args:
            return_date: Date of the return
            returned_items: Item payloads with ``taxAmount`` (and optionally
                ``productId``, ``name``, ``quantity``, ``unitPrice``); missing or
                non-numeric values count as zero
            is_full_return: Whether the whole sale was returned
            shipping_tax_refunded: Shipping tax refunded on a full return
            original_sale_id: Optional ID of the returned sale
            invoice_no: Optional invoice number of the returned sale
            return_reason: Optional reason
            processed_by: Optional user who processed the return

        Returns:
            Sales return ID

        Raises:
            ValidationError: If shipping tax is negative
        """
        items = [returned_item_from_payload(item) for item in returned_items]
        shipping_tax = safe_decimal(shipping_tax_refunded)
        if shipping_tax < 0:
            raise ValidationError(negative_amount("Shipping tax refunded"))

        totals = compute_return_tax(items, is_full_return, shipping_tax)

        return_id = self.db.create_sales_return(
            return_date=return_date,
            returned_items=items,
            is_full_return=is_full_return,
            shipping_tax_refunded=shipping_tax,
            total_product_tax_returned=totals.total_product_tax_returned,
            total_shipping_tax_returned=totals.total_shipping_tax_returned,
            total_tax_impact=totals.total_tax_impact,
            original_sale_id=original_sale_id,
            invoice_no=invoice_no,
            return_reason=return_reason,
            processed_by=processed_by,
        )
        logger.info("Recorded sales return %s (tax impact %s)", return_id, totals.total_tax_impact)
        return return_id

    def get_return(self, return_id: str) -> Optional[SalesReturn]:
        """Get a sales return by ID."""
        return self.db.get_sales_return(return_id)

    def list_returns(self) -> list[SalesReturn]:
        """List all sales returns, newest first."""
        return self.db.list_sales_returns()

    def list_returns_by_date_range(self, start_date: date, end_date: date) -> list[SalesReturn]:
        """List sales returns dated within ``[start_date, end_date]``."""
        return self.db.list_sales_returns(start_date=start_date, end_date=end_date)

    def get_total_tax_returned(self, start_date: date, end_date: date) -> Decimal:
        """Sum product and shipping tax returned in ``[start_date, end_date]``.

        Store failures are logged and give zero.
        """
        try:
            returns = self.db.list_sales_returns(start_date=start_date, end_date=end_date)
        except SQLAlchemyError:
            logger.exception("Error fetching sales returns for %s to %s", start_date, end_date)
            return Decimal("0")

        return sum(
            (r.total_product_tax_returned + r.total_shipping_tax_returned for r in returns),
            Decimal("0"),
        )

    def get_total_shipping_tax_returned(self, start_date: date, end_date: date) -> Decimal:
        """Sum shipping tax returned by full returns in ``[start_date, end_date]``.

        Store failures are logged and give zero.
        """
        try:
            returns = self.db.list_sales_returns(
                start_date=start_date, end_date=end_date, is_full_return=True
            )
        except SQLAlchemyError:
            logger.exception(
                "Error fetching full sales returns for %s to %s", start_date, end_date
            )
            return Decimal("0")

        return sum((r.total_shipping_tax_returned for r in returns), Decimal("0"))
