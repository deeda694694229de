"""Journal entry domain service and journal queries."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ledgerly.domain.entities import (
    GstType,
    JournalEntry,
    JournalQueryResult,
    TaxBreakdown,
)
from ledgerly.domain.errors import (
    NotFoundError,
    ValidationError,
    company_not_found,
    entry_not_found,
)
from ledgerly.domain.snapshot import in_date_range, screen_entries
from ledgerly.domain.tax import split_tax
from ledgerly.utils.amount_parser import ZERO, round_money

if TYPE_CHECKING:
    from ledgerly.database.base import Database

logger = logging.getLogger(__name__)

DEFAULT_QUERY_LIMIT = 5


def query_journal(
    entries: Iterable[JournalEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    account: Optional[str] = None,
    keywords: Optional[str] = None,
    limit: int = DEFAULT_QUERY_LIMIT,
) -> JournalQueryResult:
    """Filter journal entries and summarise the matches.

    Args:
        entries: Journal snapshot
        start_date: First day included, or None
        end_date: Last day included, or None
        account: Case-insensitive substring of the debit or credit account
        keywords: Case-insensitive substring of the description
        limit: Number of example entries kept in the result

    Returns:
        JournalQueryResult with the most recent matches first. ``match_count``
        and ``total_amount`` cover every match, not just the examples.
    """
    usable, _ = screen_entries(entries, "journal query")
    account_needle = account.lower() if account else None
    keyword_needle = keywords.lower() if keywords else None

    matches = []
    for entry in usable:
        if not in_date_range(entry.date, start_date, end_date):
            continue
        if account_needle and not (
            account_needle in entry.debit_account.lower()
            or account_needle in entry.credit_account.lower()
        ):
            continue
        if keyword_needle and keyword_needle not in (entry.description or "").lower():
            continue
        matches.append(entry)

    matches.sort(key=lambda entry: (entry.date, entry.id or 0), reverse=True)
    total = round_money(sum((entry.amount for entry in matches), ZERO))
    count = len(matches)

    if count:
        noun = "entry" if count == 1 else "entries"
        summary = f"Found {count} journal {noun} totaling {total} matching your criteria."
    else:
        summary = "No journal entries found matching your criteria."

    return JournalQueryResult(
        match_count=count,
        total_amount=total,
        entries=tuple(matches[: max(limit, 0)]),
        summary=summary,
    )


class JournalService:
    """Service for managing journal entries."""

    def __init__(self, db: Database):
        """Initialize journal service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entry(
        self,
        company_id: int,
        date: date,
        description: str,
        debit_account: str,
        credit_account: str,
        amount: Decimal,
        tags: Iterable[str] = (),
        gst_type: Optional[GstType] = None,
        gst_rate: Optional[Decimal] = None,
        taxable_amount: Optional[Decimal] = None,
        is_inter_state: Optional[bool] = None,
    ) -> int:
        """Record a journal entry.

        The GST breakdown, when a rate or type is given, is completed with
        :func:`split_tax` before the entry is stored.

        Args:
            company_id: Owning company ID
            date: Entry date
            description: Entry description
            debit_account: Account debited
            credit_account: Account credited
            amount: Positive amount
            tags: Optional free-form tags
            gst_type: Optional tax regime
            gst_rate: Optional tax rate in percent
            taxable_amount: Optional pre-tax amount
            is_inter_state: Optional inter-state flag used to infer the regime

        Returns:
            Journal entry ID

        Raises:
            NotFoundError: If the company doesn't exist
            ValidationError: If the entry is malformed
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

        debit_account = (debit_account or "").strip()
        credit_account = (credit_account or "").strip()
        if not debit_account or not credit_account:
            raise ValidationError("Both a debit and a credit account are required")
        if debit_account == credit_account:
            raise ValidationError(
                f"Debit and credit account must differ, got '{debit_account}' for both"
            )
        if amount is None or amount <= 0:
            raise ValidationError(f"Amount must be positive, got {amount}")
        if date is None:
            raise ValidationError("Entry date is required")

        tax = None
        if gst_type is not None or gst_rate is not None or taxable_amount is not None:
            tax = split_tax(
                TaxBreakdown(
                    amount=amount,
                    taxable_amount=taxable_amount,
                    gst_type=gst_type,
                    gst_rate=gst_rate,
                    is_inter_state=is_inter_state,
                )
            )

        entry_id = self.db.create_journal_entry(
            company_id=company_id,
            date=date,
            description=(description or "").strip(),
            debit_account=debit_account,
            credit_account=credit_account,
            amount=round_money(amount),
            tags=tuple(tag.strip() for tag in tags if tag and tag.strip()),
            tax=tax,
        )
        logger.debug(
            "Created journal entry %s: %s / %s %s",
            entry_id,
            debit_account,
            credit_account,
            amount,
        )
        return entry_id

    def get_entry(self, company_id: int, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry by ID within a company."""
        entry = self.db.get_journal_entry(entry_id)
        if entry is None or entry.company_id != company_id:
            return None
        return entry

    def list_entries(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account: Optional[str] = None,
    ) -> list[JournalEntry]:
        """List a company's entries in date order.

        Args:
            company_id: Company ID
            start_date: First day included, or None
            end_date: Last day included, or None
            account: Exact account name on either side, or None

        Returns:
            Entries sorted by date, creation time and id
        """
        entries = [
            entry
            for entry in self.db.fetch_journal_entries(company_id)
            if in_date_range(entry.date, start_date, end_date)
            and (account is None or account in (entry.debit_account, entry.credit_account))
        ]
        return sorted(entries, key=lambda e: (e.date, e.created_at, e.id))

    def delete_entry(self, company_id: int, entry_id: int) -> None:
        """Delete a journal entry of a company.

        Raises:
            NotFoundError: If the entry doesn't exist or belongs to another company
        """
        if self.get_entry(company_id, entry_id) is None:
            raise NotFoundError(entry_not_found(entry_id))
        self.db.delete_journal_entry(entry_id)
        logger.info("Deleted journal entry %s", entry_id)
