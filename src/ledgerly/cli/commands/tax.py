"""Tax commands."""

import click
from ledgerly.cli.company_resolution import resolve_company_or_exit
from ledgerly.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.domain.entities import GstType, TaxBreakdown
from ledgerly.domain.errors import DomainError
from ledgerly.domain.reports import ReportService
from ledgerly.domain.tax import split_tax
from ledgerly.utils.amount_parser import parse_amount


@click.group()
def tax_group():
    """GST/VAT calculations and summaries."""
    pass


@tax_group.command("summary")
@period_options
@click.pass_context
def tax_summary(ctx, start_date: str, end_date: str, **periods):
    """Show tax collected, tax paid and the net position."""
    company_id = resolve_company_or_exit(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )
    summary = ReportService(ctx.obj["db"]).tax_summary(company_id, start_date=start, end_date=end)

    click.echo(f"{'Taxable revenue':<30} {summary.taxable_revenue:>18,.2f}")
    click.echo(f"{'Tax collected':<30} {summary.tax_collected:>18,.2f}")
    click.echo(f"{'Tax paid':<30} {summary.tax_paid:>18,.2f}")
    label = "Net tax payable" if summary.net_tax >= 0 else "Net tax refundable"
    click.echo(f"{label:<30} {abs(summary.net_tax):>18,.2f}")


@tax_group.command("split")
@click.option("--amount", help="Tax-inclusive amount")
@click.option("--taxable-amount", help="Pre-tax amount")
@click.option("--rate", required=True, help="Tax rate in percent (e.g., 18)")
@click.option(
    "--gst-type",
    type=click.Choice([t.value for t in GstType], case_sensitive=False),
    help="Tax regime (inferred from --inter-state/--intra-state when omitted)",
)
@click.option("--inter-state/--intra-state", "is_inter_state", default=None)
@click.pass_context
def split(
    ctx,
    amount: str | None,
    taxable_amount: str | None,
    rate: str,
    gst_type: str | None,
    is_inter_state: bool | None,
):
    """Split an amount into taxable value and tax components.

    Examples:
        ledgerly tax split --amount 1180 --rate 18 --intra-state
        ledgerly tax split --taxable-amount 1000 --rate 18 --gst-type igst
    """
    if amount is None and taxable_amount is None:
        click.echo("Error: Provide --amount or --taxable-amount", err=True)
        ctx.exit(1)

    try:
        breakdown = split_tax(
            TaxBreakdown(
                amount=parse_amount(amount) if amount else None,
                taxable_amount=parse_amount(taxable_amount) if taxable_amount else None,
                gst_type=GstType(gst_type.lower()) if gst_type else None,
                gst_rate=parse_amount(rate.rstrip("%")),
                is_inter_state=is_inter_state,
            )
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    regime = breakdown.gst_type.value if breakdown.gst_type else "unspecified"
    click.echo(f"Tax type: {regime} at {breakdown.gst_rate}%")
    if breakdown.taxable_amount is not None:
        click.echo(f"  Taxable amount: {breakdown.taxable_amount:,.2f}")
    for label, value in (
        ("IGST", breakdown.igst_amount),
        ("CGST", breakdown.cgst_amount),
        ("SGST", breakdown.sgst_amount),
        ("VAT", breakdown.vat_amount),
    ):
        if value is not None:
            click.echo(f"  {label}: {value:,.2f}")
    click.echo(f"  Total tax: {breakdown.total_tax:,.2f}")


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax_group, name="tax")
