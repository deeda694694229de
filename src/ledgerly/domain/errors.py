"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def company_not_found(company: int | str) -> str:
    """Return message for missing company."""
    if isinstance(company, int):
        return f"Company {company} not found"
    return f"Company '{company}' not found"


def duplicate_company(name: str) -> str:
    """Return message for duplicate company name."""
    return f"Company with name '{name}' already exists"


def entry_not_found(entry_id: int) -> str:
    """Return message for missing journal entry."""
    return f"Journal entry {entry_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def duplicate_invoice_number(invoice_number: str, company_id: int) -> str:
    """Return message for duplicate invoice number."""
    return f"Invoice '{invoice_number}' already exists for company {company_id}"


def unknown_account_class(value: str) -> str:
    """Return message for an unrecognised account class name."""
    return f"Unknown account class '{value}'"
