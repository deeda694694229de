"""Dashboard summary and report service."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from ledgerly.domain.classifier import (
    AccountClassifier,
    DEFAULT_CLASSIFIER,
    is_cash_account,
)
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.entities import (
    AccountClass,
    BalanceSheetReport,
    DashboardSummary,
    JournalEntry,
    JournalQueryResult,
    LedgerView,
    MonthlyNetIncome,
    NormalBalance,
    ProfitLossReport,
    TaxSummary,
    TrialBalance,
)
from ledgerly.domain.errors import NotFoundError, company_not_found
from ledgerly.domain.journal import DEFAULT_QUERY_LIMIT, query_journal
from ledgerly.domain.ledger import build_ledger_view
from ledgerly.domain.snapshot import in_date_range, screen_entries
from ledgerly.domain.statements import build_balance_sheet, build_profit_and_loss
from ledgerly.domain.tax import build_tax_summary
from ledgerly.domain.trial_balance import build_trial_balance
from ledgerly.utils.amount_parser import ZERO, round_money

if TYPE_CHECKING:
    from ledgerly.database.base import Database


def build_dashboard_summary(
    entries: Iterable[JournalEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    classifier: Optional[AccountClassifier] = None,
) -> DashboardSummary:
    """Headline revenue, expense and cash figures for a period.

    Revenue and expenses follow the profit & loss rules. The burn rate is
    the cash paid out: amounts credited to a cash or bank account, except
    transfers between two such accounts. Months are keyed ``YYYY-MM`` and
    listed in calendar order.
    """
    classifier = classifier or DEFAULT_CLASSIFIER
    usable, _ = screen_entries(entries, "dashboard")

    revenue = ZERO
    expenses = ZERO
    burn = ZERO
    count = 0
    monthly: dict[str, dict[str, Decimal]] = defaultdict(
        lambda: {"income": ZERO, "expense": ZERO}
    )

    for entry in usable:
        if not in_date_range(entry.date, start_date, end_date):
            continue
        count += 1
        month = monthly[entry.date.strftime("%Y-%m")]

        if classifier.classify(entry.credit_account) == AccountClass.INCOME:
            revenue += entry.amount
            month["income"] += entry.amount
        if classifier.classify(entry.debit_account) == AccountClass.EXPENSE:
            expenses += entry.amount
            month["expense"] += entry.amount
        if is_cash_account(entry.credit_account) and not is_cash_account(
            entry.debit_account
        ):
            burn += entry.amount

    return DashboardSummary(
        start_date=start_date,
        end_date=end_date,
        total_revenue=round_money(revenue),
        total_expenses=round_money(expenses),
        transaction_count=count,
        burn_rate=round_money(burn),
        monthly=tuple(
            MonthlyNetIncome(
                year_month=key,
                income=round_money(totals["income"]),
                expense=round_money(totals["expense"]),
            )
            for key, totals in sorted(monthly.items())
        ),
    )


class ReportService:
    """Service that builds reports from a company's journal.

    Every call reads a fresh snapshot from the database and runs one
    builder over it; nothing is cached between calls.
    """

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def classifier_for(self, company_id: int) -> AccountClassifier:
        """Build a classifier from the company's chart of accounts."""
        return ChartOfAccountsService(self.db).build_classifier(company_id)

    def _snapshot(self, company_id: int) -> list[JournalEntry]:
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))
        return self.db.fetch_journal_entries(company_id)

    def trial_balance(self, company_id: int) -> TrialBalance:
        """Build the company's trial balance."""
        return build_trial_balance(self._snapshot(company_id))

    def balance_sheet(self, company_id: int) -> BalanceSheetReport:
        """Build the company's balance sheet."""
        entries = self._snapshot(company_id)
        return build_balance_sheet(entries, classifier=self.classifier_for(company_id))

    def profit_and_loss(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> ProfitLossReport:
        """Build the company's profit & loss statement for a period."""
        entries = self._snapshot(company_id)
        return build_profit_and_loss(
            entries,
            start_date=start_date,
            end_date=end_date,
            classifier=self.classifier_for(company_id),
        )

    def ledger(
        self,
        company_id: int,
        account: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        search: Optional[str] = None,
        normal_balance: Optional[NormalBalance] = None,
    ) -> LedgerView:
        """Build the ledger view of one account."""
        entries = self._snapshot(company_id)
        return build_ledger_view(
            entries,
            account,
            start_date=start_date,
            end_date=end_date,
            search=search,
            normal_balance=normal_balance,
            classifier=self.classifier_for(company_id),
        )

    def dashboard(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> DashboardSummary:
        """Build the dashboard summary for a period."""
        entries = self._snapshot(company_id)
        return build_dashboard_summary(
            entries,
            start_date=start_date,
            end_date=end_date,
            classifier=self.classifier_for(company_id),
        )

    def tax_summary(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> TaxSummary:
        """Summarise tax collected and paid for a period."""
        entries = self._snapshot(company_id)
        return build_tax_summary(
            entries,
            start_date=start_date,
            end_date=end_date,
            classifier=self.classifier_for(company_id),
        )

    def query(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account: Optional[str] = None,
        keywords: Optional[str] = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> JournalQueryResult:
        """Query the company's journal."""
        return query_journal(
            self._snapshot(company_id),
            start_date=start_date,
            end_date=end_date,
            account=account,
            keywords=keywords,
            limit=limit,
        )
