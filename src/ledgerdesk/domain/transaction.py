"""Transaction domain service."""

from typing import Optional
from datetime import date
from decimal import Decimal
from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import Transaction as TransactionEntity
from ledgerdesk.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    negative_amount,
)


class TransactionService:
    """Service for recording ledger transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        account_id: str,
        amount: Optional[Decimal] = None,
        type: Optional[str] = None,
        debit: Optional[Decimal] = None,
        credit: Optional[Decimal] = None,
        date: Optional[date] = None,
        description: Optional[str] = None,
    ) -> str:
        """Create a transaction.

        The effect is given either as ``debit`` and ``credit`` or as an
        unsigned ``amount`` with a ``type`` tag, never both.

        Args:
            account_id: Account ID
            amount: Unsigned amount (with ``type``)
            type: Transaction type tag, e.g. ``expense`` or ``income``
            debit: Debit amount (with ``credit``)
            credit: Credit amount (with ``debit``)
            date: Optional transaction date
            description: Optional description

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the effect is missing, ambiguous or negative
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        uses_debit_credit = debit is not None or credit is not None
        uses_amount_type = amount is not None or type is not None

        if uses_debit_credit and uses_amount_type:
            raise ValidationError("Give either debit and credit, or amount and type, not both")
        if uses_debit_credit:
            if debit is None or credit is None:
                raise ValidationError("Debit and credit must be given together")
        elif amount is None or not type:
            raise ValidationError("Amount and type are required")

        for field_name, value in (("Amount", amount), ("Debit", debit), ("Credit", credit)):
            if value is not None and value < 0:
                raise ValidationError(negative_amount(field_name))

        return self.db.create_transaction(
            account_id=account_id,
            amount=amount,
            type=type.strip() if type else None,
            debit=debit,
            credit=credit,
            date=date,
            description=description,
        )

    def list_transactions(self, account_id: Optional[str] = None) -> list[TransactionEntity]:
        """List transactions, optionally for a single account."""
        return self.db.list_transactions(account_id=account_id)
