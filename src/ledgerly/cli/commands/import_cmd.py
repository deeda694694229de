"""CSV import command."""

import click
from ledgerly.cli.company_resolution import resolve_company_or_exit
from ledgerly.domain.journal_import import JournalImportService


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.pass_context
def import_csv(ctx, csv_file: str):
    """Import journal entries from a CSV file.

    Required columns: date, debit_account, credit_account, amount.
    Optional columns: description, tags (separated by ';'), gst_type,
    gst_rate, taxable_amount, is_inter_state.
    """
    company_id = resolve_company_or_exit(ctx)
    service = JournalImportService(ctx.obj["db"])

    try:
        result = service.import_csv(company_id, csv_file)
        click.echo("\nImport complete:")
        click.echo(f"  Imported: {result['imported']} entries")
        if result["errors"]:
            click.echo(f"  Errors: {len(result['errors'])}")
            for error in result["errors"]:
                click.echo(f"    {error}", err=True)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
