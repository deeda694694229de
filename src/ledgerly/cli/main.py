"""Main CLI entry point."""

import logging

import click
from ledgerly.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerly.cli.commands import (
    account,
    company,
    entry,
    import_cmd,
    invoice,
    reports,
    tax,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLY_DB_PATH environment variable)",
    envvar="LEDGERLY_DB_PATH",
)
@click.option(
    "--company",
    help="Company name or ID (overrides LEDGERLY_COMPANY environment variable)",
    envvar="LEDGERLY_COMPANY",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, company: str | None, verbose: bool):
    """Ledgerly - double-entry bookkeeping for small businesses.

    Record journal entries by hand or from CSV files and derive the trial
    balance, balance sheet, profit & loss, ledgers and tax summaries.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["company"] = company

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
company.register_commands(cli)
account.register_commands(cli)
entry.register_commands(cli)
import_cmd.register_commands(cli)
reports.register_commands(cli)
tax.register_commands(cli)
invoice.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
