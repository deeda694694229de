"""CLI helpers for resolving the active company."""

from __future__ import annotations

import click

from ledgerly.domain.company import CompanyService
from ledgerly.domain.errors import NotFoundError


def resolve_company_or_exit(ctx: click.Context) -> int:
    """Resolve the --company option to a company ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    company = ctx.obj.get("company")
    if not company:
        click.echo(
            "Error: No company selected. Use --company or set LEDGERLY_COMPANY.",
            err=True,
        )
        ctx.exit(1)

    try:
        return CompanyService(ctx.obj["db"]).resolve(company).id
    except NotFoundError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
