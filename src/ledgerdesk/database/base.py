"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any, Sequence
from datetime import date
from decimal import Decimal

from ledgerdesk.domain.entities import (
    Account,
    Transaction,
    Sale,
    ReturnedItem,
    SalesReturn,
    ExpenseRecord,
    LeadStatus,
)


class Database(ABC):
    """Abstract record store for ledgerdesk.

    Every ``create_*`` call appends a record under a generated identifier and
    returns that identifier. ``list_*`` filters are equality predicates, except
    for the inclusive date bounds on sales returns.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, opening_balance: Decimal = Decimal("0")) -> str:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by name."""
        pass

    # Transaction operations
    @abstractmethod
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
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def list_transactions(self, account_id: Optional[str] = None) -> list[Transaction]:
        """List transactions, optionally only those of one account."""
        pass

    # Sale operations
    @abstractmethod
    def create_sale(
        self,
        payment_amount: Decimal,
        payment_account_id: Optional[str] = None,
        payment_account: Optional[str] = None,
        invoice_no: Optional[str] = None,
        sale_date: Optional[date] = None,
        customer: Optional[str] = None,
    ) -> str:
        """Create a sale. Returns sale ID."""
        pass

    @abstractmethod
    def list_sales(
        self,
        payment_account_id: Optional[str] = None,
        payment_account: Optional[str] = None,
    ) -> list[Sale]:
        """List sales matching the given payment account field(s)."""
        pass

    # Sales return operations
    @abstractmethod
    def create_sales_return(
        self,
        return_date: date,
        returned_items: Sequence[ReturnedItem],
        is_full_return: bool,
        shipping_tax_refunded: Decimal,
        total_product_tax_returned: Decimal,
        total_shipping_tax_returned: Decimal,
        total_tax_impact: Decimal,
        original_sale_id: Optional[str] = None,
        invoice_no: Optional[str] = None,
        return_reason: Optional[str] = None,
        processed_by: Optional[str] = None,
    ) -> str:
        """Create a sales return with its computed totals. Returns return ID."""
        pass

    @abstractmethod
    def get_sales_return(self, return_id: str) -> Optional[SalesReturn]:
        """Get sales return by ID."""
        pass

    @abstractmethod
    def list_sales_returns(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        is_full_return: Optional[bool] = None,
    ) -> list[SalesReturn]:
        """List sales returns with ``start_date <= returnDate <= end_date``.

        Args:
            start_date: Optional inclusive lower bound
            end_date: Optional inclusive upper bound
            is_full_return: If set, only returns with this flag value
        """
        pass

    # Expense ledger operations
    @abstractmethod
    def create_expense(self, **fields: Any) -> str:
        """Create an expense ledger entry. Returns entry ID.

        Accepts the optional fields of ExpenseRecord (except ``id`` and
        ``created_at``).
        """
        pass

    @abstractmethod
    def list_expenses(self) -> list[ExpenseRecord]:
        """List expense ledger entries, newest first."""
        pass

    # Lead status operations
    @abstractmethod
    def create_lead_status(
        self,
        lead_status: str,
        description: Optional[str] = None,
        order: int = 1,
        is_active: bool = True,
        is_default: bool = False,
    ) -> str:
        """Create a lead status. Returns lead status ID."""
        pass

    @abstractmethod
    def get_lead_status(self, lead_status_id: str) -> Optional[LeadStatus]:
        """Get lead status by ID."""
        pass

    @abstractmethod
    def list_lead_statuses(self) -> list[LeadStatus]:
        """List lead statuses ordered by ``order`` ascending."""
        pass

    @abstractmethod
    def update_lead_status(self, lead_status_id: str, changes: dict[str, Any]) -> None:
        """Apply field changes to a lead status and stamp ``updatedAt``."""
        pass

    @abstractmethod
    def delete_lead_status(self, lead_status_id: str) -> None:
        """Delete a lead status."""
        pass
