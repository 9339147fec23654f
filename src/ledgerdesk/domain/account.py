"""Account domain service."""

from decimal import Decimal
from typing import Optional
from ledgerdesk.database.base import Database
from ledgerdesk.domain.entities import Account as AccountEntity
from ledgerdesk.domain.errors import (
    ConflictError,
    ValidationError,
    duplicate_account_name,
)


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, opening_balance: Decimal = Decimal("0")) -> str:
        """Create a new account.

        Args:
            name: Account name
            opening_balance: Balance before any tracked activity (may be negative)

        Returns:
            Account ID

        Raises:
            ValidationError: If name is empty
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name is required")

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        return self.db.create_account(name=name, opening_balance=opening_balance)

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()
