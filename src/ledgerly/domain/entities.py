"""Domain model entities for ledgerly.

These are pure data classes representing bookkeeping concepts, independent of
the database schema. Stored records (companies, journal entries, invoices) and
derived reports (trial balance, statements, ledger views) both live here; the
derived ones are recomputed on demand and never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountClass(str, Enum):
    """Canonical account classes used by the statement builders."""

    ASSET = "asset"
    LIABILITY = "liability"
    BEGINNING_EQUITY = "beginning-equity"
    DRAWING = "drawing"
    INCOME = "income"
    EXPENSE = "expense"
    UNCLASSIFIED = "unclassified"


class NormalBalance(str, Enum):
    """Side that increases an account."""

    DEBIT = "debit"
    CREDIT = "credit"


class GstType(str, Enum):
    """Tax regime of a line item or journal entry."""

    IGST = "igst"
    CGST_SGST = "cgst-sgst"
    VAT = "vat"
    NONE = "none"


class InvoiceStatus(str, Enum):
    """Invoice status. Any value may be set at any time."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    VOID = "void"


@dataclass(frozen=True)
class Company:
    """Company (tenant) owning entries and invoices."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class ChartAccount:
    """Explicit account classification recorded for a company."""

    id: int
    company_id: int
    name: str
    account_class: AccountClass
    created_at: datetime


@dataclass(frozen=True)
class JournalEntry:
    """Double-entry journal entry. Never mutated once stored."""

    id: int
    company_id: int
    date: date
    description: str
    debit_account: str
    credit_account: str
    amount: Decimal
    created_at: datetime
    tags: tuple[str, ...] = ()
    gst_type: Optional[GstType] = None
    gst_rate: Optional[Decimal] = None
    taxable_amount: Optional[Decimal] = None
    igst_amount: Optional[Decimal] = None
    cgst_amount: Optional[Decimal] = None
    sgst_amount: Optional[Decimal] = None
    vat_amount: Optional[Decimal] = None
    is_inter_state: Optional[bool] = None


@dataclass(frozen=True)
class LineItem:
    """Invoice line item. ``amount`` is derived when absent."""

    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Optional[Decimal] = None
    hsn_sac_code: Optional[str] = None
    gst_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class Invoice:
    """Invoice domain entity."""

    id: int
    company_id: int
    invoice_number: str
    customer_name: str
    invoice_date: date
    status: InvoiceStatus
    sub_total: Decimal
    total_gst_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    line_items: tuple[LineItem, ...] = ()
    items_summary: Optional[str] = None
    due_date: Optional[date] = None
    customer_email: Optional[str] = None
    billing_address: Optional[str] = None
    customer_gstin: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class InvoiceDraft:
    """Normalised invoice ready to be stored."""

    invoice_number: str
    customer_name: str
    invoice_date: date
    status: InvoiceStatus
    sub_total: Decimal
    total_gst_amount: Decimal
    total_amount: Decimal
    line_items: tuple[LineItem, ...] = ()
    items_summary: Optional[str] = None
    due_date: Optional[date] = None
    customer_email: Optional[str] = None
    billing_address: Optional[str] = None
    customer_gstin: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class InvoiceTotals:
    """Computed invoice totals with amounts filled in on every line."""

    line_items: tuple[LineItem, ...]
    sub_total: Decimal
    total_gst_amount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class TaxBreakdown:
    """GST/VAT breakdown of a monetary amount."""

    amount: Optional[Decimal] = None
    taxable_amount: Optional[Decimal] = None
    gst_type: Optional[GstType] = None
    gst_rate: Optional[Decimal] = None
    igst_amount: Optional[Decimal] = None
    cgst_amount: Optional[Decimal] = None
    sgst_amount: Optional[Decimal] = None
    vat_amount: Optional[Decimal] = None
    is_inter_state: Optional[bool] = None

    @property
    def total_tax(self) -> Decimal:
        """Sum of all component amounts present."""
        components = (
            self.igst_amount,
            self.cgst_amount,
            self.sgst_amount,
            self.vat_amount,
        )
        return sum((c for c in components if c is not None), Decimal("0"))


@dataclass(frozen=True)
class AccountBalance:
    """Trial balance row."""

    account_name: str
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance report."""

    rows: tuple[AccountBalance, ...]
    total_debits: Decimal
    total_credits: Decimal
    warnings: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def difference(self) -> Decimal:
        return self.total_debits - self.total_credits

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0


@dataclass(frozen=True)
class ClassifiedAccount:
    """Account presented on a statement with its section-normal balance."""

    name: str
    balance: Decimal


@dataclass(frozen=True)
class BalanceSheetReport:
    """Classified balance sheet with equity roll-forward."""

    assets: tuple[ClassifiedAccount, ...]
    liabilities: tuple[ClassifiedAccount, ...]
    beginning_equity: tuple[ClassifiedAccount, ...]
    drawings: tuple[ClassifiedAccount, ...]
    unclassified: tuple[ClassifiedAccount, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    total_beginning_equity: Decimal
    total_drawings: Decimal
    net_income: Decimal
    ending_equity: Decimal
    warnings: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()

    @property
    def difference(self) -> Decimal:
        """Assets minus liabilities and equity."""
        return self.total_assets - (self.total_liabilities + self.ending_equity)

    @property
    def total_unclassified(self) -> Decimal:
        return sum((acc.balance for acc in self.unclassified), Decimal("0"))

    @property
    def is_reconciled(self) -> bool:
        return abs(self.difference) <= Decimal("0.01")


@dataclass(frozen=True)
class ProfitLossItem:
    """Revenue or expense total for one account."""

    account_name: str
    amount: Decimal


@dataclass(frozen=True)
class ProfitLossReport:
    """Profit & loss statement for a date range."""

    start_date: Optional[date]
    end_date: Optional[date]
    revenue_items: tuple[ProfitLossItem, ...]
    expense_items: tuple[ProfitLossItem, ...]
    total_revenue: Decimal
    total_expenses: Decimal
    skipped: tuple[str, ...] = ()

    @property
    def net_profit(self) -> Decimal:
        return self.total_revenue - self.total_expenses


@dataclass(frozen=True)
class LedgerTransaction:
    """Ledger row with running balance."""

    id: int
    date: date
    description: str
    debit: Optional[Decimal]
    credit: Optional[Decimal]
    balance: Decimal
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class LedgerView:
    """Ledger for a single account."""

    account_name: str
    normal_balance: NormalBalance
    transactions: tuple[LedgerTransaction, ...]
    skipped: tuple[str, ...] = ()

    @property
    def closing_balance(self) -> Decimal:
        if not self.transactions:
            return Decimal("0")
        return self.transactions[-1].balance


@dataclass(frozen=True)
class JournalQueryResult:
    """Summary of journal entries matching a query."""

    match_count: int
    total_amount: Decimal
    entries: tuple[JournalEntry, ...]
    summary: str


@dataclass(frozen=True)
class MonthlyNetIncome:
    """Income and expense totals for one calendar month."""

    year_month: str
    income: Decimal
    expense: Decimal

    @property
    def net_income(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True)
class DashboardSummary:
    """Headline figures for a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    total_revenue: Decimal
    total_expenses: Decimal
    transaction_count: int
    burn_rate: Decimal
    monthly: tuple[MonthlyNetIncome, ...] = field(default_factory=tuple)

    @property
    def net_profit(self) -> Decimal:
        return self.total_revenue - self.total_expenses


@dataclass(frozen=True)
class TaxSummary:
    """Tax collected and paid over a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    taxable_revenue: Decimal
    tax_collected: Decimal
    tax_paid: Decimal

    @property
    def net_tax(self) -> Decimal:
        """Positive when payable, negative when refundable."""
        return self.tax_collected - self.tax_paid
