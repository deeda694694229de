"""Trial balance aggregation."""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from ledgerly.domain.entities import AccountBalance, JournalEntry, TrialBalance
from ledgerly.domain.snapshot import screen_entries
from ledgerly.utils.amount_parser import ZERO, round_money

logger = logging.getLogger(__name__)


def build_trial_balance(entries: Iterable[JournalEntry]) -> TrialBalance:
    """Fold journal entries into per-account debit and credit totals.

    Account names are matched exactly, so "Cash" and "cash" are two accounts.
    Every entry adds the same amount to both sides, so an unbalanced result
    means a defect upstream. It is reported as a warning, never raised.

    Args:
        entries: Journal snapshot

    Returns:
        TrialBalance with rows sorted by account name
    """
    usable, skipped = screen_entries(entries, "trial balance")
    totals: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {"debit": ZERO, "credit": ZERO}
    )

    for entry in usable:
        totals[entry.debit_account]["debit"] += entry.amount
        totals[entry.credit_account]["credit"] += entry.amount

    rows = tuple(
        AccountBalance(
            account_name=name,
            debit=round_money(data["debit"]),
            credit=round_money(data["credit"]),
        )
        for name, data in sorted(
            totals.items(), key=lambda item: (item[0].casefold(), item[0])
        )
    )
    total_debits = round_money(sum((data["debit"] for data in totals.values()), ZERO))
    total_credits = round_money(
        sum((data["credit"] for data in totals.values()), ZERO)
    )

    warnings: tuple[str, ...] = ()
    if total_debits != total_credits:
        message = (
            f"Trial balance does not balance: debits {total_debits} vs "
            f"credits {total_credits} (difference {total_debits - total_credits})"
        )
        logger.warning(message)
        warnings = (message,)

    return TrialBalance(
        rows=rows,
        total_debits=total_debits,
        total_credits=total_credits,
        warnings=warnings,
        skipped=skipped,
    )
