"""SQLAlchemy models for the ledgerdesk store.

Table and column names are the store's wire contract (``accounts``,
``paymentAccountId`` ...) and must stay as they are; Python attribute names
are snake_case.
"""

import uuid
from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    JSON,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def new_document_id() -> str:
    """Generate an identifier for a newly appended record."""
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True, default=new_document_id)
    name = Column(String, unique=True, nullable=False)
    opening_balance = Column("openingBalance", Numeric(12, 2), default=0, nullable=True)
    created_at = Column("createdAt", DateTime, default=_utcnow, nullable=False)

    transactions = relationship("Transaction", back_populates="account")


class Transaction(Base):
    """Ledger transaction model.

    Either ``debit`` and ``credit`` are both set, or ``amount`` and ``type``.
    """

    __tablename__ = "transactions"

    id = Column(String, primary_key=True, default=new_document_id)
    account_id = Column("accountId", String, ForeignKey("accounts.id"), nullable=False, index=True)
    date = Column(Date, nullable=True)
    amount = Column(Numeric(12, 2), nullable=True)
    type = Column(String, nullable=True)
    debit = Column(Numeric(12, 2), nullable=True)
    credit = Column(Numeric(12, 2), nullable=True)
    description = Column(String, nullable=True)
    created_at = Column("createdAt", DateTime, default=_utcnow, nullable=False)

    account = relationship("Account", back_populates="transactions")


class Sale(Base):
    """Sale model carrying both the current and the legacy payment account field."""

    __tablename__ = "sales"

    id = Column(String, primary_key=True, default=new_document_id)
    invoice_no = Column("invoiceNo", String, nullable=True)
    sale_date = Column("saleDate", Date, nullable=True)
    customer = Column(String, nullable=True)
    payment_account_id = Column("paymentAccountId", String, nullable=True, index=True)
    payment_account = Column("paymentAccount", String, nullable=True, index=True)
    payment_amount = Column("paymentAmount", Numeric(12, 2), default=0, nullable=True)
    created_at = Column("createdAt", DateTime, default=_utcnow, nullable=False)


class SalesReturn(Base):
    """Sales return model with denormalized tax totals."""

    __tablename__ = "salesReturns"

    id = Column(String, primary_key=True, default=new_document_id)
    original_sale_id = Column("originalSaleId", String, nullable=True)
    invoice_no = Column("invoiceNo", String, nullable=True)
    return_date = Column("returnDate", Date, nullable=False, index=True)
    returned_items = Column("returnedItems", JSON, default=list, nullable=False)
    is_full_return = Column("isFullReturn", Boolean, default=False, nullable=False)
    shipping_tax_refunded = Column("shippingTaxRefunded", Numeric(12, 2), default=0, nullable=True)
    total_product_tax_returned = Column("totalProductTaxReturned", Numeric(12, 2), default=0, nullable=True)
    total_shipping_tax_returned = Column("totalShippingTaxReturned", Numeric(12, 2), default=0, nullable=True)
    total_tax_impact = Column("totalTaxImpact", Numeric(12, 2), default=0, nullable=True)
    return_reason = Column("returnReason", String, nullable=True)
    processed_by = Column("processedBy", String, nullable=True)
    created_at = Column("createdAt", DateTime, default=_utcnow, nullable=False)
    updated_at = Column("updatedAt", DateTime, default=_utcnow, nullable=False)


class Expense(Base):
    """Expense ledger entry model; most fields are optional."""

    __tablename__ = "expenses"

    id = Column(String, primary_key=True, default=new_document_id)
    date = Column(Date, nullable=True)
    reference_no = Column("referenceNo", String, nullable=True)
    entry_type = Column("entryType", String, nullable=True)
    category_name = Column("categoryName", String, nullable=True)
    business_location_name = Column("businessLocationName", String, nullable=True)
    total_amount = Column("totalAmount", Numeric(12, 2), nullable=True)
    tax_amount = Column("taxAmount", Numeric(12, 2), nullable=True)
    cgst_amount = Column("cgstAmount", Numeric(12, 2), nullable=True)
    sgst_amount = Column("sgstAmount", Numeric(12, 2), nullable=True)
    igst_amount = Column("igstAmount", Numeric(12, 2), nullable=True)
    payment_method = Column("paymentMethod", String, nullable=True)
    payment_status = Column("paymentStatus", String, nullable=True)
    created_at = Column("createdAt", DateTime, default=_utcnow, nullable=False)


class LeadStatus(Base):
    """CRM lead status setting model."""

    __tablename__ = "leadStatuses"

    id = Column(String, primary_key=True, default=new_document_id)
    lead_status = Column("leadStatus", String, nullable=False)
    description = Column(String, nullable=True)
    order = Column(Integer, default=1, nullable=False)
    is_active = Column("isActive", Boolean, default=True, nullable=False)
    is_default = Column("isDefault", Boolean, default=False, nullable=False)
    created_at = Column("createdAt", DateTime, default=_utcnow, nullable=False)
    updated_at = Column("updatedAt", DateTime, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
