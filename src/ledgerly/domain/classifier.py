"""Account classification.

Every builder resolves account names through this module. A company's chart
of accounts (explicit ``name -> class`` mappings) is consulted first; names
missing from the chart fall back to a keyword heuristic.

Keyword matching is a case-insensitive substring test. When a name matches
several keyword sets the conflicts are resolved in two steps:

1. A match on income, expense, drawing or beginning equity rules out asset
   and liability; a match on income or expense rules out drawing. A
   cost-of-sales phrase ("Cost of Sales", "COGS") rules out income.
2. Any remaining tie goes to the first class in ``TIE_BREAK_ORDER``.
"""

from typing import Mapping, Optional

from ledgerly.domain.entities import AccountClass, NormalBalance
from ledgerly.domain.errors import ValidationError, unknown_account_class

ASSET_KEYWORDS = (
    "cash",
    "bank",
    "receivable",
    "inventory",
    "equipment",
    "building",
    "land",
    "prepaid",
    "asset",
    "computer",
    "vehicle",
    "furniture",
    "goodwill",
    "patent",
    "investment",
    "input tax",
    "company account",
)

LIABILITY_KEYWORDS = (
    "payable",
    "loan",
    "debt",
    "unearned",
    "deferred",
    "liability",
    "creditor",
    "accrued",
    "mortgage",
    "overdraft",
)

BEGINNING_EQUITY_KEYWORDS = (
    "equity",
    "capital",
    "retained earnings",
    "owner's contribution",
    "owners contribution",
    "opening balance",
)

DRAWING_KEYWORDS = (
    "drawing",
    "owner's draw",
    "owners draw",
    "withdrawal",
)

INCOME_KEYWORDS = (
    "revenue",
    "sales",
    "income",
    "service fee",
    "interest received",
    "deposit",
    "commission",
    "dividend",
    "gain",
)

EXPENSE_KEYWORDS = (
    "expense",
    "cost",
    "supply",
    "supplies",
    "rent",
    "salary",
    "wages",
    "utility",
    "utilities",
    "purchase",
    "advertising",
    "maintenance",
    "insurance",
    "interest paid",
    "fee",
    "software",
    "development",
    "services",
    "consulting",
    "contractor",
    "design",
    "travel",
    "subscription",
    "depreciation",
    "amortization",
    "postage",
    "printing",
    "repairs",
    "loss",
    "cogs",
)

COST_OF_SALES_KEYWORDS = ("cost of", "cogs")

CASH_KEYWORDS = ("cash", "bank", "company account")

KEYWORDS: dict[AccountClass, tuple[str, ...]] = {
    AccountClass.ASSET: ASSET_KEYWORDS,
    AccountClass.LIABILITY: LIABILITY_KEYWORDS,
    AccountClass.BEGINNING_EQUITY: BEGINNING_EQUITY_KEYWORDS,
    AccountClass.DRAWING: DRAWING_KEYWORDS,
    AccountClass.INCOME: INCOME_KEYWORDS,
    AccountClass.EXPENSE: EXPENSE_KEYWORDS,
}

TIE_BREAK_ORDER = (
    AccountClass.LIABILITY,
    AccountClass.ASSET,
    AccountClass.DRAWING,
    AccountClass.INCOME,
    AccountClass.EXPENSE,
    AccountClass.BEGINNING_EQUITY,
)

CREDIT_NORMAL_CLASSES = frozenset(
    {AccountClass.LIABILITY, AccountClass.BEGINNING_EQUITY, AccountClass.INCOME}
)

ACCOUNT_CLASS_ALIASES = {
    "equity": AccountClass.BEGINNING_EQUITY,
    "beginning_equity": AccountClass.BEGINNING_EQUITY,
    "draw": AccountClass.DRAWING,
    "drawings": AccountClass.DRAWING,
    "revenue": AccountClass.INCOME,
    "other": AccountClass.UNCLASSIFIED,
}


def matching_classes(name: str) -> set[AccountClass]:
    """Return every class whose keyword set matches the name."""
    lower_name = name.lower()
    return {
        account_class
        for account_class, keywords in KEYWORDS.items()
        if any(keyword in lower_name for keyword in keywords)
    }


def classify_account(name: str) -> AccountClass:
    """Classify an account name with the keyword heuristic.

    Total and deterministic: names matching no keyword are Unclassified.
    """
    matches = matching_classes(name or "")

    if matches & {
        AccountClass.INCOME,
        AccountClass.EXPENSE,
        AccountClass.DRAWING,
        AccountClass.BEGINNING_EQUITY,
    }:
        matches -= {AccountClass.ASSET, AccountClass.LIABILITY}
    if matches & {AccountClass.INCOME, AccountClass.EXPENSE}:
        matches.discard(AccountClass.DRAWING)
    if any(keyword in (name or "").lower() for keyword in COST_OF_SALES_KEYWORDS):
        matches.discard(AccountClass.INCOME)

    for account_class in TIE_BREAK_ORDER:
        if account_class in matches:
            return account_class
    return AccountClass.UNCLASSIFIED


def normal_balance_for(account_class: AccountClass) -> NormalBalance:
    """Return the side that increases accounts of a class."""
    if account_class in CREDIT_NORMAL_CLASSES:
        return NormalBalance.CREDIT
    return NormalBalance.DEBIT


def is_cash_account(name: str) -> bool:
    """Check whether an account name looks like cash or a bank account."""
    lower_name = (name or "").lower()
    return any(keyword in lower_name for keyword in CASH_KEYWORDS)


def parse_account_class(value: str) -> AccountClass:
    """Parse a user-supplied class name such as "asset" or "equity".

    Raises:
        ValidationError: If the value names no class
    """
    key = value.strip().lower()
    try:
        return AccountClass(key.replace("_", "-"))
    except ValueError:
        pass
    if key in ACCOUNT_CLASS_ALIASES:
        return ACCOUNT_CLASS_ALIASES[key]
    raise ValidationError(unknown_account_class(value))


class AccountClassifier:
    """Classifier backed by an optional chart of accounts."""

    def __init__(self, chart: Optional[Mapping[str, AccountClass]] = None):
        """Initialize classifier.

        Args:
            chart: Explicit account name to class mappings. Names are matched
                exactly first, then case-insensitively.
        """
        self.chart = dict(chart or {})
        self._folded = {name.casefold(): cls for name, cls in self.chart.items()}

    def classify(self, name: str) -> AccountClass:
        """Classify an account, preferring the chart over keywords."""
        if name in self.chart:
            return self.chart[name]
        folded = (name or "").casefold()
        if folded in self._folded:
            return self._folded[folded]
        return classify_account(name)

    def normal_balance(self, name: str) -> NormalBalance:
        """Return the normal balance side of an account."""
        return normal_balance_for(self.classify(name))


DEFAULT_CLASSIFIER = AccountClassifier()
