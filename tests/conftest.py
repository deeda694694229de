"""Shared pytest fixtures for ledgerly tests."""

import tempfile
import os
from datetime import date, datetime
from decimal import Decimal
from itertools import count
from pathlib import Path
import pytest

from ledgerly.database.factories import create_sqlite_database
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.company import CompanyService
from ledgerly.domain.entities import JournalEntry
from ledgerly.domain.invoice import InvoiceService
from ledgerly.domain.journal import JournalService
from ledgerly.domain.reports import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def company_service(temp_db):
    """Create a CompanyService with a temporary database."""
    return CompanyService(temp_db)


@pytest.fixture
def journal_service(temp_db):
    """Create a JournalService with a temporary database."""
    return JournalService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartOfAccountsService with a temporary database."""
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def invoice_service(temp_db):
    """Create an InvoiceService with a temporary database."""
    return InvoiceService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_company(company_service):
    """Create a sample company for testing."""
    company_id = company_service.create_company("Acme Traders")
    return company_service.get_company(company_id)


@pytest.fixture
def make_entry():
    """Build in-memory journal entries with sequential IDs."""
    ids = count(1)

    def _make(
        entry_date,
        debit_account,
        credit_account,
        amount,
        description="",
        **extra,
    ):
        entry_id = next(ids)
        if isinstance(entry_date, str):
            entry_date = date.fromisoformat(entry_date)
        return JournalEntry(
            id=entry_id,
            company_id=1,
            date=entry_date,
            description=description,
            debit_account=debit_account,
            credit_account=credit_account,
            amount=Decimal(str(amount)),
            created_at=datetime(2024, 1, 1, 0, 0, entry_id % 60),
            **extra,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
