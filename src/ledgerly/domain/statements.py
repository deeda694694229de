"""Balance sheet and profit & loss builders."""

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from ledgerly.domain.classifier import AccountClassifier, DEFAULT_CLASSIFIER
from ledgerly.domain.entities import (
    AccountClass,
    BalanceSheetReport,
    ClassifiedAccount,
    JournalEntry,
    ProfitLossItem,
    ProfitLossReport,
)
from ledgerly.domain.snapshot import in_date_range, screen_entries
from ledgerly.utils.amount_parser import ZERO, round_money

logger = logging.getLogger(__name__)

TOLERANCE = Decimal("0.01")


def net_balances(entries: Iterable[JournalEntry]) -> dict[str, Decimal]:
    """Net balance per account: debits positive, credits negative."""
    balances: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries:
        balances[entry.debit_account] += entry.amount
        balances[entry.credit_account] -= entry.amount
    return dict(balances)


def _section(accounts: list[ClassifiedAccount]) -> tuple[ClassifiedAccount, ...]:
    return tuple(sorted(accounts, key=lambda acc: (acc.name.casefold(), acc.name)))


def _total(accounts: Iterable[ClassifiedAccount]) -> Decimal:
    return round_money(sum((acc.balance for acc in accounts), ZERO))


def build_balance_sheet(
    entries: Iterable[JournalEntry],
    classifier: Optional[AccountClassifier] = None,
) -> BalanceSheetReport:
    """Build a classified balance sheet with an equity roll-forward.

    Income and expense accounts are not listed; they are folded into net
    income, which is carried into ending equity together with beginning
    equity and drawings.

    An asset with a credit balance is presented as a liability and a
    liability with a debit balance as an asset. Such accounts are moved to
    the opposite section rather than dropped, so every listed balance is
    positive in its section and assets still equal liabilities plus equity.

    Args:
        entries: Journal snapshot
        classifier: Classifier to use, defaults to the keyword heuristic

    Returns:
        BalanceSheetReport. If assets differ from liabilities plus equity by
        more than 0.01 the report carries a warning with the discrepancy.
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    usable, skipped = screen_entries(entries, "balance sheet")

    assets: list[ClassifiedAccount] = []
    liabilities: list[ClassifiedAccount] = []
    beginning_equity: list[ClassifiedAccount] = []
    drawings: list[ClassifiedAccount] = []
    unclassified: list[ClassifiedAccount] = []
    net_income = ZERO

    for name, net in net_balances(usable).items():
        account_class = classifier.classify(name)
        if account_class in (AccountClass.INCOME, AccountClass.EXPENSE):
            net_income -= net
            continue
        if net == 0:
            continue

        if account_class in (AccountClass.ASSET, AccountClass.LIABILITY):
            if net > 0:
                assets.append(ClassifiedAccount(name, round_money(net)))
            else:
                liabilities.append(ClassifiedAccount(name, round_money(-net)))
        elif account_class == AccountClass.BEGINNING_EQUITY:
            beginning_equity.append(ClassifiedAccount(name, round_money(-net)))
        elif account_class == AccountClass.DRAWING:
            drawings.append(ClassifiedAccount(name, round_money(net)))
        else:
            unclassified.append(ClassifiedAccount(name, round_money(net)))

    total_assets = _total(assets)
    total_liabilities = _total(liabilities)
    total_beginning_equity = _total(beginning_equity)
    total_drawings = _total(drawings)
    net_income = round_money(net_income)
    ending_equity = round_money(total_beginning_equity + net_income - total_drawings)

    report = BalanceSheetReport(
        assets=_section(assets),
        liabilities=_section(liabilities),
        beginning_equity=_section(beginning_equity),
        drawings=_section(drawings),
        unclassified=_section(unclassified),
        total_assets=total_assets,
        total_liabilities=total_liabilities,
        total_beginning_equity=total_beginning_equity,
        total_drawings=total_drawings,
        net_income=net_income,
        ending_equity=ending_equity,
        skipped=skipped,
    )

    if abs(report.difference) > TOLERANCE:
        message = (
            f"Balance sheet does not reconcile: assets {total_assets} vs "
            f"liabilities and equity {total_liabilities + ending_equity} "
            f"(difference {report.difference})"
        )
        if unclassified:
            message += f"; unclassified accounts net {report.total_unclassified}"
        logger.warning(message)
        report = replace(report, warnings=(message,))
    return report


def _items(buckets: dict[str, Decimal]) -> tuple[ProfitLossItem, ...]:
    return tuple(
        ProfitLossItem(account_name=name, amount=round_money(amount))
        for name, amount in sorted(
            buckets.items(), key=lambda item: (-item[1], item[0])
        )
    )


def build_profit_and_loss(
    entries: Iterable[JournalEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    classifier: Optional[AccountClassifier] = None,
) -> ProfitLossReport:
    """Build a profit & loss statement for an inclusive date range.

    A credit to an income account is revenue; a debit to an expense
    account is an expense. Either bound may be omitted.

    Args:
        entries: Journal snapshot
        start_date: First day included, or None
        end_date: Last day included, or None
        classifier: Classifier to use, defaults to the keyword heuristic

    Returns:
        ProfitLossReport with items sorted by descending amount
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    usable, skipped = screen_entries(entries, "profit and loss")

    revenue: dict[str, Decimal] = defaultdict(lambda: ZERO)
    expenses: dict[str, Decimal] = defaultdict(lambda: ZERO)

    for entry in usable:
        if not in_date_range(entry.date, start_date, end_date):
            continue
        if classifier.classify(entry.credit_account) == AccountClass.INCOME:
            revenue[entry.credit_account] += entry.amount
        if classifier.classify(entry.debit_account) == AccountClass.EXPENSE:
            expenses[entry.debit_account] += entry.amount

    return ProfitLossReport(
        start_date=start_date,
        end_date=end_date,
        revenue_items=_items(revenue),
        expense_items=_items(expenses),
        total_revenue=round_money(sum(revenue.values(), ZERO)),
        total_expenses=round_money(sum(expenses.values(), ZERO)),
        skipped=skipped,
    )
