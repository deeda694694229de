"""Tests for the GST/VAT split and tax summary."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerly.domain.classifier import AccountClassifier
from ledgerly.domain.entities import AccountClass, GstType, TaxBreakdown
from ledgerly.domain.errors import ValidationError
from ledgerly.domain.tax import build_tax_summary, split_tax


def test_split_igst_from_inclusive_amount():
    """Test an inter-state amount is split into taxable value and IGST."""
    result = split_tax(
        TaxBreakdown(amount=Decimal("1180"), gst_type=GstType.IGST, gst_rate=Decimal("18"))
    )
    assert result.taxable_amount == Decimal("1000.00")
    assert result.igst_amount == Decimal("180.00")
    assert result.cgst_amount is None
    assert result.total_tax == Decimal("180.00")


def test_split_cgst_sgst_halves():
    """Test intra-state tax is split evenly between CGST and SGST."""
    result = split_tax(
        TaxBreakdown(
            taxable_amount=Decimal("1000"),
            gst_type=GstType.CGST_SGST,
            gst_rate=Decimal("18"),
        )
    )
    assert result.cgst_amount == Decimal("90.00")
    assert result.sgst_amount == Decimal("90.00")
    assert result.igst_amount is None


def test_split_cgst_sgst_rounds_each_half():
    """Test each half is rounded on its own and may exceed the rounded total."""
    result = split_tax(
        TaxBreakdown(
            taxable_amount=Decimal("0.10"),
            gst_type=GstType.CGST_SGST,
            gst_rate=Decimal("5"),
        )
    )
    # tax = 0.005, round2(tax) = 0.01, each half 0.0025 -> 0.00
    assert result.cgst_amount == Decimal("0.00")
    assert result.sgst_amount == Decimal("0.00")

    result = split_tax(
        TaxBreakdown(
            taxable_amount=Decimal("0.30"),
            gst_type=GstType.CGST_SGST,
            gst_rate=Decimal("5"),
        )
    )
    # tax = 0.015, round2(tax) = 0.02, each half 0.0075 -> 0.01
    assert result.cgst_amount + result.sgst_amount == Decimal("0.02")

    result = split_tax(
        TaxBreakdown(
            taxable_amount=Decimal("0.50"),
            gst_type=GstType.CGST_SGST,
            gst_rate=Decimal("5"),
        )
    )
    # tax = 0.025, round2(tax) = 0.03, each half 0.0125 -> 0.01
    assert result.cgst_amount + result.sgst_amount == Decimal("0.02")


def test_split_vat():
    """Test VAT is computed on the taxable amount."""
    result = split_tax(
        TaxBreakdown(taxable_amount=Decimal("200"), gst_type=GstType.VAT, gst_rate=Decimal("20"))
    )
    assert result.vat_amount == Decimal("40.00")


def test_split_infers_type_from_inter_state_flag():
    """Test the regime is inferred when only the inter-state flag is given."""
    inter = split_tax(
        TaxBreakdown(amount=Decimal("112"), gst_rate=Decimal("12"), is_inter_state=True)
    )
    intra = split_tax(
        TaxBreakdown(amount=Decimal("112"), gst_rate=Decimal("12"), is_inter_state=False)
    )
    assert inter.gst_type == GstType.IGST
    assert inter.igst_amount == Decimal("12.00")
    assert intra.gst_type == GstType.CGST_SGST
    assert intra.cgst_amount == Decimal("6.00")
    assert intra.sgst_amount == Decimal("6.00")


def test_split_none_type_sets_taxable_to_amount():
    """Test no tax is computed when the regime is none."""
    result = split_tax(
        TaxBreakdown(amount=Decimal("500"), gst_type=GstType.NONE, gst_rate=Decimal("18"))
    )
    assert result.taxable_amount == Decimal("500")
    assert result.total_tax == Decimal("0")


def test_split_without_rate_sets_taxable_to_amount():
    """Test a missing or zero rate leaves the amount untaxed."""
    assert split_tax(TaxBreakdown(amount=Decimal("75"))).taxable_amount == Decimal("75")
    zero = split_tax(
        TaxBreakdown(amount=Decimal("75"), gst_type=GstType.IGST, gst_rate=Decimal("0"))
    )
    assert zero.taxable_amount == Decimal("75")
    assert zero.igst_amount is None


def test_split_keeps_supplied_components():
    """Test component amounts supplied by the caller are never overwritten."""
    result = split_tax(
        TaxBreakdown(
            taxable_amount=Decimal("1000"),
            gst_type=GstType.CGST_SGST,
            gst_rate=Decimal("18"),
            cgst_amount=Decimal("91"),
            sgst_amount=Decimal("89"),
        )
    )
    assert result.cgst_amount == Decimal("91")
    assert result.sgst_amount == Decimal("89")


def test_split_treats_zero_component_as_absent():
    """Test a zero component is filled in."""
    result = split_tax(
        TaxBreakdown(
            taxable_amount=Decimal("100"),
            gst_type=GstType.IGST,
            gst_rate=Decimal("18"),
            igst_amount=Decimal("0"),
        )
    )
    assert result.igst_amount == Decimal("18.00")


@pytest.mark.parametrize(
    "breakdown",
    [
        TaxBreakdown(amount=Decimal("1180"), gst_type=GstType.IGST, gst_rate=Decimal("18")),
        TaxBreakdown(amount=Decimal("1180"), gst_type=GstType.CGST_SGST, gst_rate=Decimal("18")),
        TaxBreakdown(amount=Decimal("99.99"), gst_rate=Decimal("5"), is_inter_state=False),
        TaxBreakdown(taxable_amount=Decimal("0.30"), gst_type=GstType.CGST_SGST, gst_rate=Decimal("5")),
        TaxBreakdown(amount=Decimal("120"), gst_type=GstType.VAT, gst_rate=Decimal("20")),
        TaxBreakdown(amount=Decimal("50"), gst_type=GstType.NONE),
        TaxBreakdown(amount=Decimal("50")),
        TaxBreakdown(),
    ],
)
def test_split_is_idempotent(breakdown):
    """Test splitting an already split breakdown changes nothing."""
    once = split_tax(breakdown)
    assert split_tax(once) == once


def test_split_rejects_negative_amount():
    """Test negative amounts are rejected."""
    with pytest.raises(ValidationError, match="must not be negative"):
        split_tax(TaxBreakdown(amount=Decimal("-10"), gst_rate=Decimal("18")))


@pytest.mark.parametrize("rate", ["-1", "100.01", "150"])
def test_split_rejects_rate_out_of_range(rate):
    """Test rates outside 0-100 are rejected."""
    with pytest.raises(ValidationError, match="between 0 and 100"):
        split_tax(TaxBreakdown(amount=Decimal("10"), gst_rate=Decimal(rate)))


def test_tax_summary_collected_and_paid(make_entry):
    """Test tax collected on sales and paid on purchases."""
    entries = [
        make_entry(
            "2024-04-02", "Cash", "Sales Revenue", "1180",
            gst_type=GstType.CGST_SGST, gst_rate=Decimal("18"),
            taxable_amount=Decimal("1000"), cgst_amount=Decimal("90"), sgst_amount=Decimal("90"),
        ),
        make_entry(
            "2024-04-05", "Office Supplies", "Cash", "590",
            gst_type=GstType.IGST, gst_rate=Decimal("18"),
        ),
        make_entry("2024-04-30", "GST Payable", "Bank", "40"),
        make_entry("2024-05-01", "Cash", "Sales Revenue", "500"),
    ]

    summary = build_tax_summary(
        entries, start_date=date(2024, 4, 1), end_date=date(2024, 4, 30)
    )

    assert summary.taxable_revenue == Decimal("1000.00")
    assert summary.tax_collected == Decimal("180.00")
    # 90 on supplies plus the 40 settlement
    assert summary.tax_paid == Decimal("130.00")
    assert summary.net_tax == Decimal("50.00")


def test_tax_summary_uses_classifier(make_entry):
    """Test the chart of accounts decides what counts as a sale."""
    entries = [
        make_entry(
            "2024-04-02", "Cash", "Stripe Payouts", "110",
            gst_type=GstType.VAT, gst_rate=Decimal("10"),
        ),
    ]
    assert build_tax_summary(entries).tax_collected == Decimal("0.00")

    classifier = AccountClassifier({"Stripe Payouts": AccountClass.INCOME})
    summary = build_tax_summary(entries, classifier=classifier)
    assert summary.tax_collected == Decimal("10.00")
    assert summary.taxable_revenue == Decimal("100.00")


def test_tax_summary_empty():
    """Test an empty journal gives a zeroed summary."""
    summary = build_tax_summary([])
    assert summary.tax_collected == Decimal("0")
    assert summary.tax_paid == Decimal("0")
    assert summary.net_tax == Decimal("0")
