"""SQLAlchemy models for ledgerly database."""

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
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Company(Base):
    """Company model owning journal entries and invoices."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    chart_accounts = relationship(
        "ChartAccount", back_populates="company", cascade="all, delete-orphan"
    )
    journal_entries = relationship(
        "JournalEntry", back_populates="company", cascade="all, delete-orphan"
    )
    invoices = relationship("Invoice", back_populates="company", cascade="all, delete-orphan")


class ChartAccount(Base):
    """Explicit account classification."""

    __tablename__ = "chart_accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    name = Column(String, nullable=False)
    account_class = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("company_id", "name", name="uq_company_account_name"),)

    # Relationships
    company = relationship("Company", back_populates="chart_accounts")


class JournalEntry(Base):
    """Double-entry journal entry model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False, default="")
    debit_account = Column(String, nullable=False)
    credit_account = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    # Tags joined with ";"
    tags = Column(String, nullable=True)
    gst_type = Column(String, nullable=True)
    gst_rate = Column(Numeric(5, 2), nullable=True)
    taxable_amount = Column(Numeric(12, 2), nullable=True)
    igst_amount = Column(Numeric(12, 2), nullable=True)
    cgst_amount = Column(Numeric(12, 2), nullable=True)
    sgst_amount = Column(Numeric(12, 2), nullable=True)
    vat_amount = Column(Numeric(12, 2), nullable=True)
    is_inter_state = Column(Boolean, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    company = relationship("Company", back_populates="journal_entries")


class Invoice(Base):
    """Invoice model."""

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False)
    invoice_number = Column(String, nullable=False)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=True)
    billing_address = Column(String, nullable=True)
    customer_gstin = Column(String, nullable=True)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=True)
    items_summary = Column(String, nullable=True)
    sub_total = Column(Numeric(12, 2), nullable=False)
    total_gst_amount = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String, nullable=False, default="draft")
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("company_id", "invoice_number", name="uq_company_invoice_number"),
    )

    # Relationships
    company = relationship("Company", back_populates="invoices")
    line_items = relationship(
        "InvoiceLineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLineItem.position",
    )


class InvoiceLineItem(Base):
    """Invoice line item model."""

    __tablename__ = "invoice_line_items"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False)
    position = Column(Integer, nullable=False)
    description = Column(String, nullable=False)
    quantity = Column(Numeric(12, 2), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    hsn_sac_code = Column(String, nullable=True)
    gst_rate = Column(Numeric(5, 2), nullable=True)

    # Relationships
    invoice = relationship("Invoice", back_populates="line_items")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
