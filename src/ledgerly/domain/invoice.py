"""Invoice totals and invoice domain service."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional
from uuid import uuid4

from ledgerly.domain.entities import (
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    InvoiceTotals,
    LineItem,
)
from ledgerly.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    company_not_found,
    duplicate_invoice_number,
    invoice_not_found,
)
from ledgerly.utils.amount_parser import ZERO, round_money, to_decimal
from ledgerly.utils.date_parser import parse_iso_date_or_none

if TYPE_CHECKING:
    from ledgerly.database.base import Database

logger = logging.getLogger(__name__)

MIN_QUANTITY = Decimal("0.01")
HUNDRED = Decimal("100")


def validate_line_item(item: LineItem) -> None:
    """Check quantity, unit price and GST rate bounds.

    Raises:
        ValidationError: If the line item is out of bounds
    """
    if not item.description or not item.description.strip():
        raise ValidationError("Line item description is required")
    for value in (item.quantity, item.unit_price, item.gst_rate, item.amount):
        if isinstance(value, Decimal) and not value.is_finite():
            raise ValidationError(
                f"Line item '{item.description}' has a non-finite value {value}"
            )
    if item.quantity is None or item.quantity < MIN_QUANTITY:
        raise ValidationError(
            f"Quantity for '{item.description}' must be at least {MIN_QUANTITY}"
        )
    if item.unit_price is None or item.unit_price < 0:
        raise ValidationError(
            f"Unit price for '{item.description}' must not be negative"
        )
    if item.gst_rate is not None and not (0 <= item.gst_rate <= HUNDRED):
        raise ValidationError(
            f"GST rate for '{item.description}' must be between 0 and 100"
        )


def compute_invoice_totals(
    line_items: Iterable[LineItem], summary_total: Optional[Decimal] = None
) -> InvoiceTotals:
    """Compute per-line amounts and document totals.

    Args:
        line_items: Line items, each possibly missing ``amount``
        summary_total: Pre-tax total used when there are no line items

    Returns:
        InvoiceTotals with every line's amount filled in

    Raises:
        ValidationError: If any line item is invalid. A line is never dropped
            from an invoice total.
    """
    priced: list[LineItem] = []
    for item in line_items:
        validate_line_item(item)
        if item.amount is None:
            item = replace(item, amount=round_money(item.quantity * item.unit_price))
        priced.append(item)

    if not priced:
        sub_total = round_money(summary_total if summary_total is not None else ZERO)
        return InvoiceTotals(
            line_items=(),
            sub_total=sub_total,
            total_gst_amount=round_money(ZERO),
            total_amount=sub_total,
        )

    sub_total = round_money(sum((item.amount for item in priced), ZERO))
    total_gst = round_money(
        sum(
            (
                item.amount * item.gst_rate / HUNDRED
                for item in priced
                if item.gst_rate is not None
            ),
            ZERO,
        )
    )
    return InvoiceTotals(
        line_items=tuple(priced),
        sub_total=sub_total,
        total_gst_amount=total_gst,
        total_amount=round_money(sub_total + total_gst),
    )


def generate_invoice_number() -> str:
    """Return a fresh unique invoice number."""
    return f"INV-{uuid4().hex[:12].upper()}"


def parse_invoice_status(value: Optional[str | InvoiceStatus]) -> InvoiceStatus:
    """Parse an invoice status, defaulting to draft.

    Raises:
        ValidationError: If the status is not recognised
    """
    if value is None or value == "":
        return InvoiceStatus.DRAFT
    if isinstance(value, InvoiceStatus):
        return value
    try:
        return InvoiceStatus(value.strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in InvoiceStatus)
        raise ValidationError(f"Unknown invoice status '{value}'. Use one of: {allowed}")


def prepare_invoice(
    customer_name: Optional[str] = None,
    line_items: Iterable[LineItem] = (),
    items_summary: Optional[str] = None,
    summary_total: Optional[Decimal] = None,
    invoice_number: Optional[str] = None,
    invoice_date: Optional[str | date] = None,
    due_date: Optional[str | date] = None,
    status: Optional[str | InvoiceStatus] = None,
    customer_email: Optional[str] = None,
    billing_address: Optional[str] = None,
    customer_gstin: Optional[str] = None,
    notes: Optional[str] = None,
    today: Optional[date] = None,
) -> InvoiceDraft:
    """Normalise raw invoice input into a draft with computed totals.

    - The invoice number defaults to a fresh unique string.
    - The invoice date defaults to today when absent or not ``YYYY-MM-DD``.
    - A due date that is not ``YYYY-MM-DD`` is discarded.
    - The items summary is kept only when there are no line items.

    Raises:
        ValidationError: If there are neither line items nor a summary, a line
            item is invalid, or the status is unknown
    """
    today = today or date.today()
    items = tuple(line_items)
    if not items and not (items_summary and items_summary.strip()):
        raise ValidationError("An invoice needs line items or an items summary")

    totals = compute_invoice_totals(items, summary_total=summary_total)

    if isinstance(invoice_date, date):
        resolved_date = invoice_date
    else:
        resolved_date = parse_iso_date_or_none(invoice_date) or today

    if isinstance(due_date, date):
        resolved_due = due_date
    else:
        resolved_due = parse_iso_date_or_none(due_date)
        if due_date and resolved_due is None:
            logger.warning("Discarding malformed due date %r", due_date)

    return InvoiceDraft(
        invoice_number=(invoice_number or "").strip() or generate_invoice_number(),
        customer_name=(customer_name or "").strip() or "N/A",
        invoice_date=resolved_date,
        status=parse_invoice_status(status),
        sub_total=totals.sub_total,
        total_gst_amount=totals.total_gst_amount,
        total_amount=totals.total_amount,
        line_items=totals.line_items,
        items_summary=None if totals.line_items else items_summary,
        due_date=resolved_due,
        customer_email=customer_email,
        billing_address=billing_address,
        customer_gstin=customer_gstin,
        notes=notes,
    )


def parse_line_item(text: str) -> LineItem:
    """Parse a CLI line item of the form ``description:qty:price[:rate[:hsn]]``.

    Raises:
        ValidationError: If the text is malformed
    """
    parts = [part.strip() for part in text.split(":")]
    if len(parts) < 3 or len(parts) > 5:
        raise ValidationError(
            f"Invalid line item '{text}': expected description:qty:price[:rate[:hsn]]"
        )
    try:
        quantity = to_decimal(parts[1])
        unit_price = to_decimal(parts[2])
        gst_rate = to_decimal(parts[3]) if len(parts) > 3 and parts[3] else None
    except ValueError as e:
        raise ValidationError(f"Invalid line item '{text}': {e}")
    return LineItem(
        description=parts[0],
        quantity=quantity,
        unit_price=unit_price,
        gst_rate=gst_rate,
        hsn_sac_code=parts[4] if len(parts) > 4 and parts[4] else None,
    )


class InvoiceService:
    """Service for managing invoices."""

    def __init__(self, db: Database):
        """Initialize invoice service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_invoice(self, company_id: int, draft: InvoiceDraft) -> int:
        """Store a prepared invoice.

        Args:
            company_id: Owning company ID
            draft: Invoice prepared by :func:`prepare_invoice`

        Returns:
            Invoice ID

        Raises:
            NotFoundError: If the company doesn't exist
            ConflictError: If the invoice number is already used
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

        for existing in self.db.fetch_invoices(company_id):
            if existing.invoice_number == draft.invoice_number:
                raise ConflictError(
                    duplicate_invoice_number(draft.invoice_number, company_id)
                )

        invoice_id = self.db.create_invoice(company_id, draft)
        logger.info("Created invoice %s (%s)", invoice_id, draft.invoice_number)
        return invoice_id

    def get_invoice(self, company_id: int, invoice_id: int) -> Optional[Invoice]:
        """Get invoice by ID within a company."""
        return self.db.fetch_invoice(company_id, invoice_id)

    def require_invoice(self, company_id: int, invoice_id: int) -> Invoice:
        """Get invoice by ID or raise NotFoundError."""
        invoice = self.db.fetch_invoice(company_id, invoice_id)
        if invoice is None:
            raise NotFoundError(invoice_not_found(invoice_id))
        return invoice

    def list_invoices(
        self, company_id: int, status: Optional[str | InvoiceStatus] = None
    ) -> list[Invoice]:
        """List a company's invoices, optionally filtered by status."""
        invoices = self.db.fetch_invoices(company_id)
        if status is None:
            return invoices
        wanted = parse_invoice_status(status)
        return [invoice for invoice in invoices if invoice.status == wanted]

    def set_status(
        self, company_id: int, invoice_id: int, status: str | InvoiceStatus
    ) -> None:
        """Set an invoice's status. Any transition is allowed."""
        self.require_invoice(company_id, invoice_id)
        self.db.update_invoice_status(invoice_id, parse_invoice_status(status))
