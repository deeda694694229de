"""Company domain service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from ledgerly.domain.entities import Company
from ledgerly.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    company_not_found,
    duplicate_company,
)

if TYPE_CHECKING:
    from ledgerly.database.base import Database

logger = logging.getLogger(__name__)


class CompanyService:
    """Service for managing companies."""

    def __init__(self, db: Database):
        """Initialize company service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_company(self, name: str) -> int:
        """Create a new company.

        Args:
            name: Company name

        Returns:
            Company ID

        Raises:
            ValidationError: If the name is empty
            ConflictError: If a company with this name already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Company name is required")
        if self.db.get_company_by_name(name) is not None:
            raise ConflictError(duplicate_company(name))

        company_id = self.db.create_company(name)
        logger.info("Created company %s (%s)", company_id, name)
        return company_id

    def get_company(self, company_id: int) -> Optional[Company]:
        """Get company by ID."""
        return self.db.get_company(company_id)

    def list_companies(self) -> list[Company]:
        """List all companies."""
        return self.db.list_companies()

    def resolve(self, name_or_id: str) -> Company:
        """Find a company by numeric ID or by name.

        A numeric string is tried as an ID first, then as a name.

        Raises:
            NotFoundError: If no company matches
        """
        value = name_or_id.strip()
        if value.isdigit():
            company = self.db.get_company(int(value))
            if company is not None:
                return company
        company = self.db.get_company_by_name(value)
        if company is None:
            raise NotFoundError(company_not_found(value))
        return company
