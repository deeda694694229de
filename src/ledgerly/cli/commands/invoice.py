"""Invoice commands."""

import click
from ledgerly.cli.company_resolution import resolve_company_or_exit
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.domain.entities import InvoiceStatus
from ledgerly.domain.errors import DomainError
from ledgerly.domain.invoice import InvoiceService, parse_line_item, prepare_invoice
from ledgerly.utils.amount_parser import parse_amount

STATUS_CHOICES = [s.value for s in InvoiceStatus]


@click.group()
def invoice_group():
    """Manage invoices."""
    pass


@invoice_group.command("create")
@click.option("--customer", "customer_name", help="Customer name")
@click.option(
    "--item",
    "items",
    multiple=True,
    help="Line item as description:qty:price[:gst_rate[:hsn]] (may be repeated)",
)
@click.option("--summary", "items_summary", help="Items summary when there are no line items")
@click.option("--summary-total", help="Pre-tax total for an items summary")
@click.option("--number", "invoice_number", help="Invoice number (generated when omitted)")
@click.option("--date", "invoice_date", help="Invoice date YYYY-MM-DD (today when omitted)")
@click.option("--due-date", help="Due date YYYY-MM-DD")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), default="draft")
@click.option("--email", "customer_email", help="Customer email")
@click.option("--address", "billing_address", help="Billing address")
@click.option("--gstin", "customer_gstin", help="Customer GSTIN")
@click.option("--notes", help="Notes")
@click.pass_context
def create_invoice(
    ctx,
    customer_name: str | None,
    items: tuple[str, ...],
    items_summary: str | None,
    summary_total: str | None,
    invoice_number: str | None,
    invoice_date: str | None,
    due_date: str | None,
    status: str,
    customer_email: str | None,
    billing_address: str | None,
    customer_gstin: str | None,
    notes: str | None,
):
    """Create an invoice.

    Examples:
        ledgerly --company Acme invoice create --customer "Globex" --item "Consulting:10:50:18"
        ledgerly --company Acme invoice create --customer "Initech" --summary "Website build" --summary-total 2500
    """
    company_id = resolve_company_or_exit(ctx)
    service = InvoiceService(ctx.obj["db"])

    try:
        line_items = [parse_line_item(item) for item in items]
        total = parse_amount(summary_total) if summary_total else None
        draft = prepare_invoice(
            customer_name=customer_name,
            line_items=line_items,
            items_summary=items_summary,
            summary_total=total,
            invoice_number=invoice_number,
            invoice_date=invoice_date,
            due_date=due_date,
            status=status,
            customer_email=customer_email,
            billing_address=billing_address,
            customer_gstin=customer_gstin,
            notes=notes,
        )
        invoice_id = service.create_invoice(company_id, draft)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {draft.invoice_number} (ID: {invoice_id})")
    click.echo(f"  Customer: {draft.customer_name}")
    click.echo(f"  Sub-total: {draft.sub_total:,.2f}")
    click.echo(f"  GST: {draft.total_gst_amount:,.2f}")
    click.echo(f"  Total: {draft.total_amount:,.2f}")


@invoice_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="Filter by status")
@click.pass_context
def list_invoices(ctx, status: str | None):
    """List invoices, newest first."""
    company_id = resolve_company_or_exit(ctx)
    invoices = InvoiceService(ctx.obj["db"]).list_invoices(company_id, status=status)

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo(f"{'ID':<6} {'Number':<20} {'Date':<12} {'Customer':<28} {'Status':<8} {'Total':>14}")
    click.echo("-" * 92)
    for invoice in invoices:
        click.echo(
            f"{invoice.id:<6} {invoice.invoice_number:<20} {str(invoice.invoice_date):<12} "
            f"{invoice.customer_name[:28]:<28} {invoice.status.value:<8} {invoice.total_amount:>14,.2f}"
        )


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show an invoice with its line items."""
    company_id = resolve_company_or_exit(ctx)
    try:
        invoice = InvoiceService(ctx.obj["db"]).require_invoice(company_id, invoice_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {invoice.invoice_number} ({invoice.status.value})")
    click.echo(f"  Customer: {invoice.customer_name}")
    if invoice.customer_email:
        click.echo(f"  Email: {invoice.customer_email}")
    if invoice.billing_address:
        click.echo(f"  Address: {invoice.billing_address}")
    if invoice.customer_gstin:
        click.echo(f"  GSTIN: {invoice.customer_gstin}")
    click.echo(f"  Date: {invoice.invoice_date}")
    if invoice.due_date:
        click.echo(f"  Due: {invoice.due_date}")

    if invoice.line_items:
        click.echo()
        click.echo(f"  {'Description':<30} {'Qty':>8} {'Price':>12} {'GST %':>7} {'Amount':>14}")
        for item in invoice.line_items:
            rate = f"{item.gst_rate}" if item.gst_rate is not None else ""
            click.echo(
                f"  {item.description[:30]:<30} {item.quantity:>8} {item.unit_price:>12,.2f} "
                f"{rate:>7} {item.amount:>14,.2f}"
            )
    elif invoice.items_summary:
        click.echo(f"  Items: {invoice.items_summary}")

    click.echo()
    click.echo(f"  {'Sub-total':<30} {invoice.sub_total:>14,.2f}")
    click.echo(f"  {'GST':<30} {invoice.total_gst_amount:>14,.2f}")
    click.echo(f"  {'Total':<30} {invoice.total_amount:>14,.2f}")
    if invoice.notes:
        click.echo(f"  Notes: {invoice.notes}")


@invoice_group.command("status")
@click.argument("invoice_id", type=int)
@click.argument("status", type=click.Choice(STATUS_CHOICES, case_sensitive=False))
@click.pass_context
def set_status(ctx, invoice_id: int, status: str):
    """Set an invoice's status."""
    company_id = resolve_company_or_exit(ctx)
    try:
        InvoiceService(ctx.obj["db"]).set_status(company_id, invoice_id, status)
        click.echo(f"Invoice {invoice_id} is now {status.lower()}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
