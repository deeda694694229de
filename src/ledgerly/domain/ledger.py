"""Ledger view for a single account."""

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional

from ledgerly.domain.classifier import AccountClassifier, DEFAULT_CLASSIFIER
from ledgerly.domain.entities import (
    JournalEntry,
    LedgerTransaction,
    LedgerView,
    NormalBalance,
)
from ledgerly.domain.snapshot import in_date_range, screen_entries
from ledgerly.utils.amount_parser import ZERO, round_money


def _sort_key(entry: JournalEntry) -> tuple:
    return (entry.date, entry.created_at or datetime.min, entry.id or 0)


def build_ledger_view(
    entries: Iterable[JournalEntry],
    account: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    normal_balance: Optional[NormalBalance] = None,
    classifier: Optional[AccountClassifier] = None,
) -> LedgerView:
    """List an account's entries in order with a running balance.

    The balance starts at zero and moves up on the account's normal side:
    debits increase asset, expense, drawing and unclassified accounts,
    credits increase liability, equity and income accounts. An entry with
    the account on both sides applies both movements.

    Args:
        entries: Journal snapshot
        account: Exact account name
        start_date: First day included, or None
        end_date: Last day included, or None
        search: Case-insensitive description substring, or None
        normal_balance: Force a sign convention instead of the account's class
        classifier: Classifier used to find the account's normal balance

    Returns:
        LedgerView ordered by date, creation time and id
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    side = normal_balance or classifier.normal_balance(account)
    usable, skipped = screen_entries(entries, f"ledger for {account}")
    needle = search.lower() if search else None

    selected = [
        entry
        for entry in usable
        if account in (entry.debit_account, entry.credit_account)
        and in_date_range(entry.date, start_date, end_date)
        and (needle is None or needle in (entry.description or "").lower())
    ]

    balance = ZERO
    rows = []
    for entry in sorted(selected, key=_sort_key):
        debit: Optional[Decimal] = None
        credit: Optional[Decimal] = None
        if entry.debit_account == account:
            debit = entry.amount
            balance += entry.amount if side == NormalBalance.DEBIT else -entry.amount
        if entry.credit_account == account:
            credit = entry.amount
            balance += entry.amount if side == NormalBalance.CREDIT else -entry.amount
        rows.append(
            LedgerTransaction(
                id=entry.id,
                date=entry.date,
                description=entry.description,
                debit=debit,
                credit=credit,
                balance=round_money(balance),
                tags=entry.tags,
            )
        )

    return LedgerView(
        account_name=account,
        normal_balance=side,
        transactions=tuple(rows),
        skipped=skipped,
    )
