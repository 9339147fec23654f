"""Mapper functions to convert between domain models and SQLAlchemy models.

Numeric columns may hold NULL on older rows; they pass through
``safe_decimal`` so the domain never sees a missing required amount.
"""

from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ledgerdesk.domain import entities as domain
from ledgerdesk.domain.entities import returned_item_from_payload
from ledgerdesk.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
    Sale as ORMSale,
    SalesReturn as ORMSalesReturn,
    Expense as ORMExpense,
    LeadStatus as ORMLeadStatus,
)
from ledgerdesk.utils.amount_parser import safe_decimal


def _optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else safe_decimal(value)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        opening_balance=safe_decimal(orm_account.opening_balance),
        created_at=orm_account.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        amount=_optional_decimal(orm_transaction.amount),
        type=orm_transaction.type,
        debit=_optional_decimal(orm_transaction.debit),
        credit=_optional_decimal(orm_transaction.credit),
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
    )


def sale_to_domain(orm_sale: ORMSale) -> domain.Sale:
    """Convert SQLAlchemy Sale model to domain Sale entity."""
    return domain.Sale(
        id=orm_sale.id,
        invoice_no=orm_sale.invoice_no,
        sale_date=orm_sale.sale_date,
        customer=orm_sale.customer,
        payment_account_id=orm_sale.payment_account_id,
        payment_account=orm_sale.payment_account,
        payment_amount=safe_decimal(orm_sale.payment_amount),
        created_at=orm_sale.created_at,
    )


def returned_items_to_payload(items: Iterable[domain.ReturnedItem]) -> list[dict[str, Any]]:
    """Convert ReturnedItems to the stored ``returnedItems`` JSON shape."""
    return [
        {
            "productId": item.product_id,
            "name": item.name,
            "quantity": str(item.quantity),
            "unitPrice": str(item.unit_price),
            "taxAmount": str(item.tax_amount),
        }
        for item in items
    ]


def sales_return_to_domain(orm_return: ORMSalesReturn) -> domain.SalesReturn:
    """Convert SQLAlchemy SalesReturn model to domain SalesReturn entity."""
    items = orm_return.returned_items or []
    return domain.SalesReturn(
        id=orm_return.id,
        original_sale_id=orm_return.original_sale_id,
        invoice_no=orm_return.invoice_no,
        return_date=orm_return.return_date,
        returned_items=tuple(
            returned_item_from_payload(item) for item in items if isinstance(item, Mapping)
        ),
        is_full_return=bool(orm_return.is_full_return),
        shipping_tax_refunded=safe_decimal(orm_return.shipping_tax_refunded),
        total_product_tax_returned=safe_decimal(orm_return.total_product_tax_returned),
        total_shipping_tax_returned=safe_decimal(orm_return.total_shipping_tax_returned),
        total_tax_impact=safe_decimal(orm_return.total_tax_impact),
        return_reason=orm_return.return_reason,
        processed_by=orm_return.processed_by,
        created_at=orm_return.created_at,
        updated_at=orm_return.updated_at,
    )


def expense_to_domain(orm_expense: ORMExpense) -> domain.ExpenseRecord:
    """Convert SQLAlchemy Expense model to domain ExpenseRecord entity."""
    return domain.ExpenseRecord(
        id=orm_expense.id,
        date=orm_expense.date,
        reference_no=orm_expense.reference_no,
        entry_type=orm_expense.entry_type,
        category_name=orm_expense.category_name,
        business_location_name=orm_expense.business_location_name,
        total_amount=_optional_decimal(orm_expense.total_amount),
        tax_amount=_optional_decimal(orm_expense.tax_amount),
        cgst_amount=_optional_decimal(orm_expense.cgst_amount),
        sgst_amount=_optional_decimal(orm_expense.sgst_amount),
        igst_amount=_optional_decimal(orm_expense.igst_amount),
        payment_method=orm_expense.payment_method,
        payment_status=orm_expense.payment_status,
        created_at=orm_expense.created_at,
    )


def lead_status_to_domain(orm_status: ORMLeadStatus) -> domain.LeadStatus:
    """Convert SQLAlchemy LeadStatus model to domain LeadStatus entity."""
    return domain.LeadStatus(
        id=orm_status.id,
        lead_status=orm_status.lead_status,
        description=orm_status.description,
        order=orm_status.order,
        is_active=bool(orm_status.is_active),
        is_default=bool(orm_status.is_default),
        created_at=orm_status.created_at,
        updated_at=orm_status.updated_at,
    )
