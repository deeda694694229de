"""Chart of accounts domain service."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ledgerly.domain.classifier import AccountClassifier, parse_account_class
from ledgerly.domain.entities import AccountClass, ChartAccount
from ledgerly.domain.errors import NotFoundError, ValidationError, company_not_found

if TYPE_CHECKING:
    from ledgerly.database.base import Database

logger = logging.getLogger(__name__)


class ChartOfAccountsService:
    """Service for a company's explicit account classifications."""

    def __init__(self, db: Database):
        """Initialize chart of accounts service.

        Args:
            db: Database instance
        """
        self.db = db

    def set_account_class(
        self, company_id: int, name: str, account_class: str | AccountClass
    ) -> int:
        """Record the class of an account, replacing any earlier mapping.

        Args:
            company_id: Company ID
            name: Account name as used in journal entries
            account_class: Class or class name such as "asset" or "equity"

        Returns:
            Chart account ID

        Raises:
            NotFoundError: If the company doesn't exist
            ValidationError: If the name is empty or the class is unknown
        """
        if self.db.get_company(company_id) is None:
            raise NotFoundError(company_not_found(company_id))
        name = (name or "").strip()
        if not name:
            raise ValidationError("Account name is required")
        if not isinstance(account_class, AccountClass):
            account_class = parse_account_class(account_class)

        chart_id = self.db.set_chart_account(company_id, name, account_class)
        logger.debug("Classified account '%s' as %s", name, account_class.value)
        return chart_id

    def list_accounts(self, company_id: int) -> list[ChartAccount]:
        """List the company's chart of accounts sorted by name."""
        return sorted(
            self.db.list_chart_accounts(company_id),
            key=lambda account: account.name.casefold(),
        )

    def build_classifier(self, company_id: int) -> AccountClassifier:
        """Build a classifier that consults the company's chart first."""
        return AccountClassifier(
            {account.name: account.account_class for account in self.list_accounts(company_id)}
        )

    def classify(self, company_id: int, name: str) -> AccountClass:
        """Classify an account name for a company."""
        return self.build_classifier(company_id).classify(name)
