"""Domain layer for ledgerly application."""

from ledgerly.domain.classifier import AccountClassifier, classify_account
from ledgerly.domain.invoice import compute_invoice_totals, prepare_invoice
from ledgerly.domain.journal import query_journal
from ledgerly.domain.ledger import build_ledger_view
from ledgerly.domain.reports import build_dashboard_summary
from ledgerly.domain.statements import build_balance_sheet, build_profit_and_loss
from ledgerly.domain.tax import build_tax_summary, split_tax
from ledgerly.domain.trial_balance import build_trial_balance

from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.company import CompanyService
from ledgerly.domain.invoice import InvoiceService
from ledgerly.domain.journal import JournalService
from ledgerly.domain.journal_import import JournalImportService
from ledgerly.domain.reports import ReportService

__all__ = [
    "AccountClassifier",
    "classify_account",
    "compute_invoice_totals",
    "prepare_invoice",
    "query_journal",
    "build_ledger_view",
    "build_dashboard_summary",
    "build_balance_sheet",
    "build_profit_and_loss",
    "build_tax_summary",
    "split_tax",
    "build_trial_balance",
    "ChartOfAccountsService",
    "CompanyService",
    "InvoiceService",
    "JournalService",
    "JournalImportService",
    "ReportService",
]
