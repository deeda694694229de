"""GST/VAT split arithmetic.

``split_tax`` fills in whatever part of a breakdown can be derived and leaves
everything the caller supplied alone, so running it on its own output changes
nothing. A component amount of zero counts as absent.
"""

import logging
import re
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerly.domain.classifier import AccountClassifier, DEFAULT_CLASSIFIER
from ledgerly.domain.entities import (
    AccountClass,
    GstType,
    JournalEntry,
    TaxBreakdown,
    TaxSummary,
)
from ledgerly.domain.errors import ValidationError
from ledgerly.domain.snapshot import in_date_range, screen_entries
from ledgerly.utils.amount_parser import ZERO, round_money

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
TAX_ACCOUNT_PATTERN = re.compile(r"\b(gst|vat)\b", re.IGNORECASE)


def _present(value: Optional[Decimal]) -> bool:
    return value is not None and value != 0


def _validate(breakdown: TaxBreakdown) -> None:
    if breakdown.gst_rate is not None and not (0 <= breakdown.gst_rate <= HUNDRED):
        raise ValidationError(
            f"GST rate must be between 0 and 100, got {breakdown.gst_rate}"
        )
    for field_name in (
        "amount",
        "taxable_amount",
        "igst_amount",
        "cgst_amount",
        "sgst_amount",
        "vat_amount",
    ):
        value = getattr(breakdown, field_name)
        if value is not None and value < 0:
            raise ValidationError(f"{field_name} must not be negative, got {value}")


def split_tax(breakdown: TaxBreakdown) -> TaxBreakdown:
    """Derive the taxable amount and tax components of a breakdown.

    Args:
        breakdown: Breakdown with whatever fields are already known

    Returns:
        New breakdown with derivable fields filled in

    Raises:
        ValidationError: If an amount is negative or the rate is outside 0-100
    """
    _validate(breakdown)
    result = breakdown
    rate = result.gst_rate

    if result.gst_type is None and _present(rate) and result.is_inter_state is not None:
        inferred = GstType.IGST if result.is_inter_state else GstType.CGST_SGST
        result = replace(result, gst_type=inferred)

    if result.gst_type == GstType.NONE or not _present(rate):
        if result.amount is not None:
            result = replace(result, taxable_amount=result.amount)
        return result

    if result.taxable_amount is None and result.amount is not None:
        result = replace(
            result, taxable_amount=round_money(result.amount / (1 + rate / HUNDRED))
        )
    if result.taxable_amount is None:
        return result

    tax = result.taxable_amount * rate / HUNDRED
    has_dual = _present(result.cgst_amount) or _present(result.sgst_amount)

    if result.gst_type == GstType.CGST_SGST:
        if not has_dual and not _present(result.igst_amount):
            half = round_money(tax / 2)
            result = replace(result, cgst_amount=half, sgst_amount=half)
    elif result.gst_type == GstType.IGST:
        if not _present(result.igst_amount) and not has_dual:
            result = replace(result, igst_amount=round_money(tax))
    elif result.gst_type == GstType.VAT:
        if not _present(result.vat_amount):
            result = replace(result, vat_amount=round_money(tax))

    return result


def tax_breakdown_for_entry(entry: JournalEntry) -> TaxBreakdown:
    """Build the breakdown recorded on a journal entry."""
    return TaxBreakdown(
        amount=entry.amount,
        taxable_amount=entry.taxable_amount,
        gst_type=entry.gst_type,
        gst_rate=entry.gst_rate,
        igst_amount=entry.igst_amount,
        cgst_amount=entry.cgst_amount,
        sgst_amount=entry.sgst_amount,
        vat_amount=entry.vat_amount,
        is_inter_state=entry.is_inter_state,
    )


def build_tax_summary(
    entries: Iterable[JournalEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    classifier: Optional[AccountClassifier] = None,
) -> TaxSummary:
    """Summarise tax collected on sales and tax paid on purchases.

    Tax is collected on entries crediting an income account. Otherwise tax
    is paid on entries debiting an expense or asset account, and entries
    debiting an account whose name mentions GST or VAT (settlements with
    the tax authority) count in full as tax paid.
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    usable, _ = screen_entries(entries, "tax summary")
    taxable_revenue = ZERO
    collected = ZERO
    paid = ZERO

    for entry in usable:
        if not in_date_range(entry.date, start_date, end_date):
            continue
        try:
            breakdown = split_tax(tax_breakdown_for_entry(entry))
        except ValidationError as e:
            logger.warning("tax summary: skipping entry %s: %s", entry.id, e)
            continue

        if classifier.classify(entry.credit_account) == AccountClass.INCOME:
            taxable_revenue += breakdown.taxable_amount or entry.amount
            collected += breakdown.total_tax
        elif TAX_ACCOUNT_PATTERN.search(entry.debit_account):
            paid += entry.amount
        elif classifier.classify(entry.debit_account) in (
            AccountClass.EXPENSE,
            AccountClass.ASSET,
        ):
            paid += breakdown.total_tax

    return TaxSummary(
        start_date=start_date,
        end_date=end_date,
        taxable_revenue=round_money(taxable_revenue),
        tax_collected=round_money(collected),
        tax_paid=round_money(paid),
    )
