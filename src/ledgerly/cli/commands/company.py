"""Company management commands."""

import click
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.domain.company import CompanyService
from ledgerly.domain.errors import DomainError


@click.group()
def company_group():
    """Manage companies."""
    pass


@company_group.command("create")
@click.argument("name")
@click.pass_context
def create_company(ctx, name: str):
    """Create a new company."""
    service = CompanyService(ctx.obj["db"])
    try:
        company_id = service.create_company(name)
        click.echo(f"Created company '{name.strip()}' (ID: {company_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@company_group.command("list")
@click.pass_context
def list_companies(ctx):
    """List all companies."""
    service = CompanyService(ctx.obj["db"])
    companies = service.list_companies()

    if not companies:
        click.echo("No companies found.")
        return

    click.echo(f"{'ID':<6} {'Name':<40} {'Created':<20}")
    click.echo("-" * 66)
    for company in companies:
        created = company.created_at.strftime("%Y-%m-%d %H:%M")
        click.echo(f"{company.id:<6} {company.name:<40} {created:<20}")


def register_commands(cli):
    """Register company commands with main CLI."""
    cli.add_command(company_group, name="company")
