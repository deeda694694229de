"""CSV import of journal entries."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from ledgerly.domain.entities import GstType
from ledgerly.domain.errors import NotFoundError, ValidationError, company_not_found
from ledgerly.domain.journal import JournalService
from ledgerly.utils.amount_parser import parse_amount
from ledgerly.utils.date_parser import parse_iso_date

if TYPE_CHECKING:
    from ledgerly.database.base import Database

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("date", "debit_account", "credit_account", "amount")
TAG_SEPARATOR = ";"
TRUE_VALUES = {"true", "yes", "y", "1", "inter", "inter-state"}
FALSE_VALUES = {"false", "no", "n", "0", "intra", "intra-state"}


def parse_gst_type(value: Optional[str]) -> Optional[GstType]:
    """Parse a GST type column value such as "igst" or "cgst/sgst".

    Raises:
        ValidationError: If the value is not a known regime
    """
    if not value:
        return None
    key = value.strip().lower().replace("/", "-").replace("_", "-").replace("+", "-")
    try:
        return GstType(key)
    except ValueError:
        allowed = ", ".join(t.value for t in GstType)
        raise ValidationError(f"Unknown GST type '{value}'. Use one of: {allowed}")


def parse_flag(value: Optional[str]) -> Optional[bool]:
    """Parse a yes/no column value, returning None when blank."""
    if not value:
        return None
    key = value.strip().lower()
    if key in TRUE_VALUES:
        return True
    if key in FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid yes/no value '{value}'")


class JournalImportService:
    """Service for importing journal entries from CSV files."""

    def __init__(self, db: Database):
        """Initialize journal import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.journal_service = JournalService(db)

    def import_csv(self, company_id: int, csv_file_path: str) -> dict[str, Any]:
        """Import journal entries from a CSV file.

        The file needs a header row with ``date``, ``debit_account``,
        ``credit_account`` and ``amount``. ``description``, ``tags``
        (separated by ``;``), ``gst_type``, ``gst_rate``, ``taxable_amount``
        and ``is_inter_state`` are optional. Column names are matched
        case-insensitively. Dates must be ``YYYY-MM-DD``; any other form
        skips the row.

        Args:
            company_id: Company receiving the entries
            csv_file_path: Path to CSV file

        Returns:
            Dict with import statistics:
            - imported: number of entries imported
            - errors: list of error messages for rows that were skipped

        Raises:
            NotFoundError: If the company doesn't exist
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        imported = 0
        errors: list[str] = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.readline()
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t|").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            columns = {name.strip().lower(): name for name in reader.fieldnames if name}
            missing = [col for col in REQUIRED_COLUMNS if col not in columns]
            if missing:
                raise ValidationError(
                    f"CSV file missing required columns: {', '.join(missing)}"
                )

            for row_num, row in enumerate(reader, start=2):
                values = {
                    key: (row.get(header) or "").strip()
                    for key, header in columns.items()
                }
                try:
                    self._import_row(company_id, values)
                    imported += 1
                except ValueError as e:
                    errors.append(f"Row {row_num}: {e}")

        logger.info(
            "Imported %d journal entries from %s (%d rows skipped)",
            imported,
            csv_path.name,
            len(errors),
        )
        return {"imported": imported, "errors": errors}

    def _import_row(self, company_id: int, values: dict[str, str]) -> int:
        for column in REQUIRED_COLUMNS:
            if not values.get(column):
                raise ValidationError(f"Missing {column}")

        gst_rate = values.get("gst_rate")
        taxable_amount = values.get("taxable_amount")
        tags = values.get("tags", "")

        return self.journal_service.create_entry(
            company_id=company_id,
            date=parse_iso_date(values["date"]),
            description=values.get("description", ""),
            debit_account=values["debit_account"],
            credit_account=values["credit_account"],
            amount=parse_amount(values["amount"]),
            tags=tags.split(TAG_SEPARATOR) if tags else (),
            gst_type=parse_gst_type(values.get("gst_type")),
            gst_rate=parse_amount(gst_rate.rstrip("%")) if gst_rate else None,
            taxable_amount=parse_amount(taxable_amount) if taxable_amount else None,
            is_inter_state=parse_flag(values.get("is_inter_state")),
        )
