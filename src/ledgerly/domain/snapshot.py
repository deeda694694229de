"""Screening of journal snapshots before they reach a report builder.

Reports are exploration tools: a malformed entry is skipped and reported,
the rest of the snapshot is still used.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerly.domain.entities import JournalEntry

logger = logging.getLogger(__name__)


def entry_problem(entry: JournalEntry) -> Optional[str]:
    """Describe what is wrong with an entry, or return None if it is usable."""
    if not isinstance(entry.date, date):
        return f"Entry {entry.id}: missing or invalid date"
    if not entry.debit_account or not entry.credit_account:
        return f"Entry {entry.id}: missing debit or credit account"
    if not isinstance(entry.amount, Decimal) or not entry.amount.is_finite():
        return f"Entry {entry.id}: invalid amount {entry.amount!r}"
    if entry.amount <= 0:
        return f"Entry {entry.id}: amount must be positive, got {entry.amount}"
    return None


def screen_entries(
    entries: Iterable[JournalEntry], report: str
) -> tuple[list[JournalEntry], tuple[str, ...]]:
    """Split a snapshot into usable entries and skip messages.

    Args:
        entries: Journal snapshot
        report: Report name used in log messages

    Returns:
        Tuple of (usable entries, skip messages)
    """
    usable: list[JournalEntry] = []
    skipped: list[str] = []
    for entry in entries:
        problem = entry_problem(entry)
        if problem is None:
            usable.append(entry)
        else:
            logger.warning("%s: skipping %s", report, problem)
            skipped.append(problem)
    return usable, tuple(skipped)


def in_date_range(
    entry_date: date, start_date: Optional[date], end_date: Optional[date]
) -> bool:
    """Inclusive date range test with open bounds."""
    if start_date is not None and entry_date < start_date:
        return False
    if end_date is not None and entry_date > end_date:
        return False
    return True
