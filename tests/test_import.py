"""Tests for CSV import of journal entries."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerly.domain.entities import GstType
from ledgerly.domain.errors import NotFoundError, ValidationError
from ledgerly.domain.journal_import import (
    JournalImportService,
    parse_flag,
    parse_gst_type,
)


@pytest.fixture
def import_service(temp_db):
    """Create a JournalImportService with a temporary database."""
    return JournalImportService(temp_db)


def _write(tmp_path, content, name="entries.csv"):
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return str(path)


def test_import_fixture(import_service, journal_service, sample_company, fixtures_dir):
    """Test importing the sample journal file."""
    result = import_service.import_csv(sample_company.id, str(fixtures_dir / "journal.csv"))

    assert result == {"imported": 5, "errors": []}
    entries = journal_service.list_entries(sample_company.id)
    assert len(entries) == 5

    funding = entries[0]
    assert funding.amount == Decimal("10000.00")
    assert funding.tags == ("funding",)

    rent = entries[1]
    assert rent.tags == ("rent", "office")

    consulting = entries[2]
    assert consulting.gst_type == GstType.CGST_SGST
    assert consulting.taxable_amount == Decimal("1000.00")
    assert consulting.cgst_amount == Decimal("90.00")

    laptop = entries[3]
    assert laptop.gst_type == GstType.IGST
    assert laptop.igst_amount == Decimal("152.54")


def test_import_skips_bad_rows(import_service, journal_service, sample_company, tmp_path):
    """Test bad rows are reported and the rest imported."""
    path = _write(
        tmp_path,
        "date,debit_account,credit_account,amount\n"
        "2024-01-01,Cash,Sales,100\n"
        "not a date,Cash,Sales,100\n"
        "2024-01-02,Cash,Sales,abc\n"
        "2024-01-03,Cash,,100\n"
        "2024-01-04,Cash,Cash,100\n"
        "2024-01-05,Rent,Cash,-20\n"
        "2024-01-06,Rent,Cash,20\n",
    )

    result = import_service.import_csv(sample_company.id, path)

    assert result["imported"] == 2
    assert len(result["errors"]) == 5
    assert result["errors"][0].startswith("Row 3:")
    assert result["errors"][2] == "Row 5: Missing credit_account"
    assert len(journal_service.list_entries(sample_company.id)) == 2


def test_import_rejects_non_iso_dates(import_service, journal_service, sample_company, tmp_path):
    """Test only YYYY-MM-DD dates are stored; other forms skip the row."""
    path = _write(
        tmp_path,
        "date,debit_account,credit_account,amount\n"
        "03/04/2024,Cash,Sales,100\n"
        "today,Cash,Sales,50\n"
        "2024-3-4,Cash,Sales,25\n"
        "2024-03-04,Cash,Sales,10\n",
    )

    result = import_service.import_csv(sample_company.id, path)

    assert result["imported"] == 1
    assert [error.split(":")[0] for error in result["errors"]] == ["Row 2", "Row 3", "Row 4"]
    assert all("expected YYYY-MM-DD" in error for error in result["errors"])
    entries = journal_service.list_entries(sample_company.id)
    assert [entry.date for entry in entries] == [date(2024, 3, 4)]


def test_import_semicolon_delimited(import_service, sample_company, tmp_path):
    """Test the delimiter is detected from the header."""
    path = _write(
        tmp_path,
        "DATE;DEBIT_ACCOUNT;CREDIT_ACCOUNT;AMOUNT\n2024-01-01;Cash;Sales;100\n",
    )
    assert import_service.import_csv(sample_company.id, path)["imported"] == 1


def test_import_missing_columns(import_service, sample_company, tmp_path):
    """Test a file without the required columns is rejected."""
    path = _write(tmp_path, "date,account,amount\n2024-01-01,Cash,100\n")
    with pytest.raises(ValidationError, match="debit_account, credit_account"):
        import_service.import_csv(sample_company.id, path)


def test_import_missing_file(import_service, sample_company, tmp_path):
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        import_service.import_csv(sample_company.id, str(tmp_path / "nope.csv"))


def test_import_unknown_company(import_service, fixtures_dir):
    """Test the company must exist."""
    with pytest.raises(NotFoundError):
        import_service.import_csv(99, str(fixtures_dir / "journal.csv"))


@pytest.mark.parametrize(
    "value, expected",
    [
        ("IGST", GstType.IGST),
        ("cgst/sgst", GstType.CGST_SGST),
        ("CGST+SGST", GstType.CGST_SGST),
        ("cgst_sgst", GstType.CGST_SGST),
        ("vat", GstType.VAT),
        ("", None),
        (None, None),
    ],
)
def test_parse_gst_type(value, expected):
    """Test GST type spellings."""
    assert parse_gst_type(value) == expected


def test_parse_gst_type_invalid():
    """Test unknown GST types are rejected."""
    with pytest.raises(ValidationError, match="Unknown GST type"):
        parse_gst_type("sales tax")


def test_parse_flag():
    """Test yes/no spellings."""
    assert parse_flag("Yes") is True
    assert parse_flag("inter-state") is True
    assert parse_flag("0") is False
    assert parse_flag("") is None
    with pytest.raises(ValidationError):
        parse_flag("maybe")
