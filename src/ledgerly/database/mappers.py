"""Mapper functions to convert between domain models and SQLAlchemy models."""

from ledgerly.domain import entities as domain
from ledgerly.database.models import (
    Company as ORMCompany,
    ChartAccount as ORMChartAccount,
    JournalEntry as ORMJournalEntry,
    Invoice as ORMInvoice,
    InvoiceLineItem as ORMInvoiceLineItem,
)

TAG_SEPARATOR = ";"


def join_tags(tags: tuple[str, ...]) -> str | None:
    """Store tags as a single separated string."""
    return TAG_SEPARATOR.join(tags) if tags else None


def split_tags(value: str | None) -> tuple[str, ...]:
    """Inverse of :func:`join_tags`."""
    if not value:
        return ()
    return tuple(tag for tag in value.split(TAG_SEPARATOR) if tag)


def company_to_domain(orm_company: ORMCompany) -> domain.Company:
    """Convert SQLAlchemy Company model to domain Company entity."""
    return domain.Company(
        id=orm_company.id,
        name=orm_company.name,
        created_at=orm_company.created_at,
    )


def chart_account_to_domain(orm_account: ORMChartAccount) -> domain.ChartAccount:
    """Convert SQLAlchemy ChartAccount model to domain ChartAccount entity."""
    return domain.ChartAccount(
        id=orm_account.id,
        company_id=orm_account.company_id,
        name=orm_account.name,
        account_class=domain.AccountClass(orm_account.account_class),
        created_at=orm_account.created_at,
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    return domain.JournalEntry(
        id=orm_entry.id,
        company_id=orm_entry.company_id,
        date=orm_entry.date,
        description=orm_entry.description or "",
        debit_account=orm_entry.debit_account,
        credit_account=orm_entry.credit_account,
        amount=orm_entry.amount,
        created_at=orm_entry.created_at,
        tags=split_tags(orm_entry.tags),
        gst_type=domain.GstType(orm_entry.gst_type) if orm_entry.gst_type else None,
        gst_rate=orm_entry.gst_rate,
        taxable_amount=orm_entry.taxable_amount,
        igst_amount=orm_entry.igst_amount,
        cgst_amount=orm_entry.cgst_amount,
        sgst_amount=orm_entry.sgst_amount,
        vat_amount=orm_entry.vat_amount,
        is_inter_state=orm_entry.is_inter_state,
    )


def line_item_to_domain(orm_item: ORMInvoiceLineItem) -> domain.LineItem:
    """Convert SQLAlchemy InvoiceLineItem model to domain LineItem entity."""
    return domain.LineItem(
        description=orm_item.description,
        quantity=orm_item.quantity,
        unit_price=orm_item.unit_price,
        amount=orm_item.amount,
        hsn_sac_code=orm_item.hsn_sac_code,
        gst_rate=orm_item.gst_rate,
    )


def invoice_to_domain(orm_invoice: ORMInvoice) -> domain.Invoice:
    """Convert SQLAlchemy Invoice model to domain Invoice entity."""
    return domain.Invoice(
        id=orm_invoice.id,
        company_id=orm_invoice.company_id,
        invoice_number=orm_invoice.invoice_number,
        customer_name=orm_invoice.customer_name,
        invoice_date=orm_invoice.invoice_date,
        status=domain.InvoiceStatus(orm_invoice.status),
        sub_total=orm_invoice.sub_total,
        total_gst_amount=orm_invoice.total_gst_amount,
        total_amount=orm_invoice.total_amount,
        created_at=orm_invoice.created_at,
        line_items=tuple(line_item_to_domain(item) for item in orm_invoice.line_items),
        items_summary=orm_invoice.items_summary,
        due_date=orm_invoice.due_date,
        customer_email=orm_invoice.customer_email,
        billing_address=orm_invoice.billing_address,
        customer_gstin=orm_invoice.customer_gstin,
        notes=orm_invoice.notes,
    )
