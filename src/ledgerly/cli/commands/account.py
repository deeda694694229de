"""Chart of accounts commands."""

import click
from ledgerly.cli.company_resolution import resolve_company_or_exit
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.classifier import classify_account, normal_balance_for
from ledgerly.domain.entities import AccountClass
from ledgerly.domain.errors import DomainError

CLASS_CHOICES = [c.value for c in AccountClass] + ["equity", "revenue"]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("set")
@click.argument("name")
@click.argument("account_class", metavar="CLASS", type=click.Choice(CLASS_CHOICES, case_sensitive=False))
@click.pass_context
def set_account(ctx, name: str, account_class: str):
    """Record the class of an account.

    Names recorded here take precedence over the keyword heuristic in every
    report.

    Examples:
        ledgerly --company Acme account set "Owner Funds" beginning-equity
        ledgerly --company Acme account set "Stripe Balance" asset
    """
    company_id = resolve_company_or_exit(ctx)
    service = ChartOfAccountsService(ctx.obj["db"])
    try:
        service.set_account_class(company_id, name, account_class)
        resolved = service.classify(company_id, name.strip())
        click.echo(f"Account '{name.strip()}' is now {resolved.value}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List the company's chart of accounts."""
    company_id = resolve_company_or_exit(ctx)
    service = ChartOfAccountsService(ctx.obj["db"])
    accounts = service.list_accounts(company_id)

    if not accounts:
        click.echo("No accounts in the chart of accounts.")
        return

    click.echo(f"{'Account':<40} {'Class':<18} {'Normal':<8}")
    click.echo("-" * 68)
    for account in accounts:
        normal = normal_balance_for(account.account_class).value
        click.echo(f"{account.name:<40} {account.account_class.value:<18} {normal:<8}")


@account_group.command("classify")
@click.argument("name")
@click.pass_context
def classify(ctx, name: str):
    """Show how an account name is classified.

    Uses the company's chart of accounts when a company is selected and
    the keyword heuristic otherwise.
    """
    if ctx.obj.get("company"):
        company_id = resolve_company_or_exit(ctx)
        account_class = ChartOfAccountsService(ctx.obj["db"]).classify(company_id, name)
    else:
        account_class = classify_account(name)
    normal = normal_balance_for(account_class).value
    click.echo(f"{name}: {account_class.value} (normal balance: {normal})")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
