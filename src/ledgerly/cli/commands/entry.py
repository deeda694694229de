"""Journal entry commands."""

import click
from ledgerly.cli.company_resolution import resolve_company_or_exit
from ledgerly.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.domain.entities import GstType
from ledgerly.domain.errors import DomainError
from ledgerly.domain.journal import JournalService
from ledgerly.domain.reports import ReportService
from ledgerly.utils.amount_parser import parse_amount
from ledgerly.utils.date_parser import parse_date


def _parse_amount_or_exit(ctx, value: str, label: str):
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


@click.group()
def entry_group():
    """Manage journal entries."""
    pass


@entry_group.command("add")
@click.option(
    "--date",
    "entry_date",
    required=True,
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--description", default="", help="Entry description")
@click.option("--debit", "debit_account", required=True, help="Account debited")
@click.option("--credit", "credit_account", required=True, help="Account credited")
@click.option("--amount", required=True, help="Positive amount (e.g., 1250.00)")
@click.option("--tag", "tags", multiple=True, help="Tag (may be repeated)")
@click.option(
    "--gst-type",
    type=click.Choice([t.value for t in GstType], case_sensitive=False),
    help="Tax regime",
)
@click.option("--gst-rate", help="Tax rate in percent (e.g., 18)")
@click.option("--taxable-amount", help="Pre-tax amount (derived from amount when omitted)")
@click.option(
    "--inter-state/--intra-state",
    "is_inter_state",
    default=None,
    help="Supply is inter-state (IGST) or intra-state (CGST + SGST)",
)
@click.pass_context
def add_entry(
    ctx,
    entry_date: str,
    description: str,
    debit_account: str,
    credit_account: str,
    amount: str,
    tags: tuple[str, ...],
    gst_type: str | None,
    gst_rate: str | None,
    taxable_amount: str | None,
    is_inter_state: bool | None,
):
    """Add a journal entry.

    Examples:
        ledgerly --company Acme entry add --date 2024-01-15 --debit Cash --credit "Sales Revenue" --amount 1180 --gst-rate 18 --intra-state
        ledgerly --company Acme entry add --date today --debit Rent --credit Cash --amount 900 --tag office
    """
    company_id = resolve_company_or_exit(ctx)
    service = JournalService(ctx.obj["db"])

    try:
        parsed_date = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    parsed_amount = _parse_amount_or_exit(ctx, amount, "amount")
    parsed_rate = _parse_amount_or_exit(ctx, gst_rate.rstrip("%"), "GST rate") if gst_rate else None
    parsed_taxable = (
        _parse_amount_or_exit(ctx, taxable_amount, "taxable amount") if taxable_amount else None
    )

    try:
        entry_id = service.create_entry(
            company_id=company_id,
            date=parsed_date,
            description=description,
            debit_account=debit_account,
            credit_account=credit_account,
            amount=parsed_amount,
            tags=tags,
            gst_type=GstType(gst_type.lower()) if gst_type else None,
            gst_rate=parsed_rate,
            taxable_amount=parsed_taxable,
            is_inter_state=is_inter_state,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    entry = service.get_entry(company_id, entry_id)
    click.echo(f"Created journal entry {entry_id}")
    click.echo(f"  Date: {entry.date}")
    click.echo(f"  Debit: {entry.debit_account}")
    click.echo(f"  Credit: {entry.credit_account}")
    click.echo(f"  Amount: {entry.amount:,.2f}")
    if entry.gst_type is not None:
        click.echo(f"  Tax: {entry.gst_type.value} at {entry.gst_rate}%")
        click.echo(f"  Taxable amount: {entry.taxable_amount:,.2f}")


@entry_group.command("list")
@period_options
@click.option("--account", help="Only entries touching this exact account")
@click.pass_context
def list_entries(ctx, start_date: str, end_date: str, account: str | None, **periods):
    """List journal entries in date order."""
    company_id = resolve_company_or_exit(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )
    service = JournalService(ctx.obj["db"])
    entries = service.list_entries(company_id, start_date=start, end_date=end, account=account)

    if not entries:
        click.echo("No journal entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<6} {'Date':<12} {'Debit':<24} {'Credit':<24} {'Amount':>14}  {'Description':<26}"
    )
    click.echo("-" * 110)
    for entry in entries:
        click.echo(
            f"{entry.id:<6} {str(entry.date):<12} {entry.debit_account[:24]:<24} "
            f"{entry.credit_account[:24]:<24} {entry.amount:>14,.2f}  {entry.description[:26]:<26}"
        )


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, yes: bool):
    """Delete a journal entry.

    Examples:
        ledgerly --company Acme entry delete 12
    """
    company_id = resolve_company_or_exit(ctx)
    service = JournalService(ctx.obj["db"])

    if service.get_entry(company_id, entry_id) is None:
        click.echo(f"Error: Journal entry {entry_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete journal entry {entry_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_entry(company_id, entry_id)
        click.echo(f"Deleted journal entry {entry_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@entry_group.command("query")
@period_options
@click.option("--account", help="Substring of the debit or credit account")
@click.option("--keywords", help="Substring of the description")
@click.option("--limit", type=int, default=5, show_default=True, help="Example entries to show")
@click.pass_context
def query_entries(
    ctx,
    start_date: str,
    end_date: str,
    account: str | None,
    keywords: str | None,
    limit: int,
    **periods,
):
    """Count and total the entries matching a query."""
    company_id = resolve_company_or_exit(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )
    result = ReportService(ctx.obj["db"]).query(
        company_id,
        start_date=start,
        end_date=end,
        account=account,
        keywords=keywords,
        limit=limit,
    )

    click.echo(result.summary)
    for entry in result.entries:
        click.echo(f"  {entry.date}: {entry.description[:30]} ({entry.amount:,.2f})")


def register_commands(cli):
    """Register journal entry commands with main CLI."""
    cli.add_command(entry_group, name="entry")
