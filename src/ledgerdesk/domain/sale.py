"""Sale domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import Sale as SaleEntity
from ledgerdesk.domain.errors import ValidationError, negative_amount


class SaleService:
    """Service for recording sales against a payment account."""

    def __init__(self, db: Database):
        """Initialize sale service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_sale(
        self,
        payment_account_id: str,
        payment_amount: Decimal,
        invoice_no: Optional[str] = None,
        sale_date: Optional[date] = None,
        customer: Optional[str] = None,
        legacy_field: bool = False,
    ) -> str:
        """Create a sale.

        Args:
            payment_account_id: Account that received the payment
            payment_amount: Amount received
            invoice_no: Optional invoice number
            sale_date: Optional sale date
            customer: Optional customer name
            legacy_field: Store the account under the legacy ``paymentAccount`` field

        Returns:
            Sale ID

        Raises:
            ValidationError: If account is missing or amount is negative
        """
        if not payment_account_id:
            raise ValidationError("Payment account is required")
        if payment_amount < 0:
            raise ValidationError(negative_amount("Payment amount"))

        account_fields = (
            {"payment_account": payment_account_id}
            if legacy_field
            else {"payment_account_id": payment_account_id}
        )
        return self.db.create_sale(
            payment_amount=payment_amount,
            invoice_no=invoice_no,
            sale_date=sale_date,
            customer=customer,
            **account_fields,
        )

    def list_sales(self, account_id: Optional[str] = None) -> list[SaleEntity]:
        """List sales, optionally those paid into one account under either field."""
        if account_id is None:
            return self.db.list_sales()

        sales = {sale.id: sale for sale in self.db.list_sales(payment_account_id=account_id)}
        for sale in self.db.list_sales(payment_account=account_id):
            sales.setdefault(sale.id, sale)
        return list(sales.values())
