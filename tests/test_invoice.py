"""Tests for invoice totals, invoice preparation and the invoice service."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerly.domain.entities import InvoiceStatus, LineItem
from ledgerly.domain.errors import ConflictError, NotFoundError, ValidationError
from ledgerly.domain.invoice import (
    compute_invoice_totals,
    parse_line_item,
    prepare_invoice,
)


def _item(qty, price, rate=None, description="Widget"):
    return LineItem(
        description=description,
        quantity=Decimal(qty),
        unit_price=Decimal(price),
        gst_rate=Decimal(rate) if rate is not None else None,
    )


def test_totals_single_line():
    """Test 10 x 50 at 18% gives 500 + 90 = 590."""
    totals = compute_invoice_totals([_item("10", "50", "18")])
    assert totals.line_items[0].amount == Decimal("500.00")
    assert totals.sub_total == Decimal("500.00")
    assert totals.total_gst_amount == Decimal("90.00")
    assert totals.total_amount == Decimal("590.00")


def test_totals_mixed_rates():
    """Test lines without a rate add no tax."""
    totals = compute_invoice_totals(
        [_item("2", "19.99", "5"), _item("1.5", "10", None, "Hours")]
    )
    assert totals.sub_total == Decimal("54.98")
    # 39.98 * 5% = 1.999
    assert totals.total_gst_amount == Decimal("2.00")
    assert totals.total_amount == Decimal("56.98")


def test_totals_keep_supplied_amount():
    """Test a line amount already present is not recomputed."""
    item = LineItem(
        description="Discounted",
        quantity=Decimal("1"),
        unit_price=Decimal("100"),
        amount=Decimal("90"),
    )
    assert compute_invoice_totals([item]).sub_total == Decimal("90.00")


def test_totals_summary_only():
    """Test an invoice without lines uses the summary total."""
    totals = compute_invoice_totals([], summary_total=Decimal("2500"))
    assert totals.line_items == ()
    assert totals.sub_total == Decimal("2500.00")
    assert totals.total_gst_amount == Decimal("0.00")
    assert totals.total_amount == Decimal("2500.00")


def test_totals_empty():
    """Test an invoice with nothing on it totals zero."""
    totals = compute_invoice_totals([])
    assert totals.total_amount == Decimal("0")


@pytest.mark.parametrize(
    "item",
    [
        LineItem(description="Tiny", quantity=Decimal("0.001"), unit_price=Decimal("1")),
        LineItem(description="Refund", quantity=Decimal("1"), unit_price=Decimal("-5")),
        LineItem(description="Taxed", quantity=Decimal("1"), unit_price=Decimal("5"), gst_rate=Decimal("101")),
        LineItem(description="", quantity=Decimal("1"), unit_price=Decimal("5")),
        LineItem(description="Odd", quantity=Decimal("NaN"), unit_price=Decimal("5")),
        LineItem(description="Huge", quantity=Decimal("1"), unit_price=Decimal("Infinity")),
    ],
)
def test_totals_reject_invalid_line(item):
    """Test an invalid line fails the whole computation."""
    with pytest.raises(ValidationError):
        compute_invoice_totals([_item("1", "10"), item])


def test_prepare_invoice_defaults():
    """Test number, date and status defaults."""
    draft = prepare_invoice(line_items=[_item("1", "100")], today=date(2024, 6, 1))
    assert draft.invoice_number.startswith("INV-")
    assert draft.invoice_date == date(2024, 6, 1)
    assert draft.status == InvoiceStatus.DRAFT
    assert draft.customer_name == "N/A"
    assert draft.total_amount == Decimal("100.00")


def test_prepare_invoice_generates_unique_numbers():
    """Test generated invoice numbers differ."""
    first = prepare_invoice(items_summary="Work")
    second = prepare_invoice(items_summary="Work")
    assert first.invoice_number != second.invoice_number


def test_prepare_invoice_malformed_dates():
    """Test a malformed invoice date falls back to today and a bad due date is dropped."""
    draft = prepare_invoice(
        customer_name="Globex",
        line_items=[_item("1", "100")],
        invoice_date="01/06/2024",
        due_date="next friday",
        today=date(2024, 6, 1),
    )
    assert draft.invoice_date == date(2024, 6, 1)
    assert draft.due_date is None


def test_prepare_invoice_keeps_valid_dates():
    """Test strict YYYY-MM-DD dates are kept."""
    draft = prepare_invoice(
        line_items=[_item("1", "100")],
        invoice_date="2024-05-20",
        due_date="2024-06-19",
    )
    assert draft.invoice_date == date(2024, 5, 20)
    assert draft.due_date == date(2024, 6, 19)


def test_prepare_invoice_summary_dropped_with_line_items():
    """Test the items summary is kept only when there are no line items."""
    with_lines = prepare_invoice(line_items=[_item("1", "100")], items_summary="Stuff")
    without_lines = prepare_invoice(items_summary="Stuff", summary_total=Decimal("40"))
    assert with_lines.items_summary is None
    assert without_lines.items_summary == "Stuff"
    assert without_lines.total_amount == Decimal("40.00")


def test_prepare_invoice_requires_content():
    """Test an invoice with neither lines nor summary is rejected."""
    with pytest.raises(ValidationError, match="line items or an items summary"):
        prepare_invoice(customer_name="Globex")


def test_prepare_invoice_rejects_unknown_status():
    """Test only the five statuses are accepted."""
    with pytest.raises(ValidationError, match="Unknown invoice status"):
        prepare_invoice(items_summary="Work", status="archived")


def test_parse_line_item():
    """Test the CLI line item syntax."""
    item = parse_line_item("Consulting:10:50:18:9983")
    assert item.description == "Consulting"
    assert item.quantity == Decimal("10")
    assert item.unit_price == Decimal("50")
    assert item.gst_rate == Decimal("18")
    assert item.hsn_sac_code == "9983"

    plain = parse_line_item("Hosting:1:20")
    assert plain.gst_rate is None
    assert plain.hsn_sac_code is None


@pytest.mark.parametrize(
    "text",
    [
        "Consulting",
        "Consulting:ten:50",
        "a:1:2:3:4:5",
        "Widget:NaN:5",
        "Widget:1:Infinity",
        "Widget:1:5:-inf",
    ],
)
def test_parse_line_item_invalid(text):
    """Test malformed line items are rejected."""
    with pytest.raises(ValidationError, match="Invalid line item"):
        parse_line_item(text)


def test_create_and_fetch_invoice(invoice_service, sample_company):
    """Test an invoice round-trips through the database with its line items."""
    draft = prepare_invoice(
        customer_name="Globex",
        line_items=[_item("10", "50", "18", "Consulting"), _item("1", "25", None, "Hosting")],
        invoice_number="INV-001",
        invoice_date="2024-06-01",
        customer_gstin="29ABCDE1234F1Z5",
    )
    invoice_id = invoice_service.create_invoice(sample_company.id, draft)

    invoice = invoice_service.get_invoice(sample_company.id, invoice_id)
    assert invoice.invoice_number == "INV-001"
    assert invoice.customer_gstin == "29ABCDE1234F1Z5"
    assert [item.description for item in invoice.line_items] == ["Consulting", "Hosting"]
    assert invoice.sub_total == Decimal("525.00")
    assert invoice.total_gst_amount == Decimal("90.00")
    assert invoice.total_amount == Decimal("615.00")
    assert invoice.status == InvoiceStatus.DRAFT


def test_create_invoice_duplicate_number(invoice_service, sample_company):
    """Test invoice numbers are unique within a company."""
    draft = prepare_invoice(items_summary="Work", invoice_number="INV-7")
    invoice_service.create_invoice(sample_company.id, draft)
    with pytest.raises(ConflictError, match="INV-7"):
        invoice_service.create_invoice(sample_company.id, draft)


def test_create_invoice_unknown_company(invoice_service):
    """Test an invoice needs an existing company."""
    with pytest.raises(NotFoundError):
        invoice_service.create_invoice(999, prepare_invoice(items_summary="Work"))


def test_invoice_is_scoped_to_company(invoice_service, company_service, sample_company):
    """Test an invoice is not visible from another company."""
    other_id = company_service.create_company("Other Co")
    invoice_id = invoice_service.create_invoice(
        sample_company.id, prepare_invoice(items_summary="Work")
    )
    assert invoice_service.get_invoice(other_id, invoice_id) is None
    assert invoice_service.list_invoices(other_id) == []


def test_set_status_any_transition(invoice_service, sample_company):
    """Test any status can follow any other."""
    invoice_id = invoice_service.create_invoice(
        sample_company.id, prepare_invoice(items_summary="Work", status="paid")
    )
    invoice_service.set_status(sample_company.id, invoice_id, "draft")
    assert invoice_service.require_invoice(sample_company.id, invoice_id).status == InvoiceStatus.DRAFT
    invoice_service.set_status(sample_company.id, invoice_id, InvoiceStatus.VOID)
    assert invoice_service.require_invoice(sample_company.id, invoice_id).status == InvoiceStatus.VOID


def test_list_invoices_by_status(invoice_service, sample_company):
    """Test filtering invoices by status."""
    invoice_service.create_invoice(sample_company.id, prepare_invoice(items_summary="A", status="sent"))
    invoice_service.create_invoice(sample_company.id, prepare_invoice(items_summary="B", status="paid"))

    sent = invoice_service.list_invoices(sample_company.id, status="sent")
    assert [invoice.items_summary for invoice in sent] == ["A"]
    assert len(invoice_service.list_invoices(sample_company.id)) == 2


def test_require_invoice_missing(invoice_service, sample_company):
    """Test a missing invoice raises NotFoundError."""
    with pytest.raises(NotFoundError, match="Invoice 42 not found"):
        invoice_service.require_invoice(sample_company.id, 42)
