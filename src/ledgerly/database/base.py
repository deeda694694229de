"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerly.domain.entities import (
    AccountClass,
    ChartAccount,
    Company,
    Invoice,
    InvoiceDraft,
    InvoiceStatus,
    JournalEntry,
    TaxBreakdown,
)


class Database(ABC):
    """Abstract database interface for ledgerly."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Company operations
    @abstractmethod
    def create_company(self, name: str) -> int:
        """Create a new company. Returns company ID."""
        pass

    @abstractmethod
    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID."""
        pass

    @abstractmethod
    def get_company_by_name(self, name: str) -> Optional[Company]:
        """Get company by exact name."""
        pass

    @abstractmethod
    def list_companies(self) -> list[Company]:
        """List all companies."""
        pass

    # Chart of accounts operations
    @abstractmethod
    def set_chart_account(
        self, company_id: int, name: str, account_class: AccountClass
    ) -> int:
        """Create or replace an account classification. Returns its ID."""
        pass

    @abstractmethod
    def list_chart_accounts(self, company_id: int) -> list[ChartAccount]:
        """List a company's account classifications."""
        pass

    # Journal entry operations
    @abstractmethod
    def create_journal_entry(
        self,
        company_id: int,
        date: date,
        description: str,
        debit_account: str,
        credit_account: str,
        amount: Decimal,
        tags: tuple[str, ...] = (),
        tax: Optional[TaxBreakdown] = None,
    ) -> int:
        """Create a journal entry. Returns entry ID."""
        pass

    @abstractmethod
    def get_journal_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        pass

    @abstractmethod
    def delete_journal_entry(self, entry_id: int) -> None:
        """Delete a journal entry."""
        pass

    @abstractmethod
    def fetch_journal_entries(self, company_id: int) -> list[JournalEntry]:
        """Fetch every journal entry of a company."""
        pass

    # Invoice operations
    @abstractmethod
    def create_invoice(self, company_id: int, draft: InvoiceDraft) -> int:
        """Store an invoice with its line items. Returns invoice ID."""
        pass

    @abstractmethod
    def fetch_invoices(self, company_id: int) -> list[Invoice]:
        """Fetch every invoice of a company."""
        pass

    @abstractmethod
    def fetch_invoice(self, company_id: int, invoice_id: int) -> Optional[Invoice]:
        """Fetch one invoice of a company."""
        pass

    @abstractmethod
    def update_invoice_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        """Set an invoice's status."""
        pass
