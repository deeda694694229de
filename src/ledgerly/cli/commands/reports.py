"""Financial report commands."""

import click
from ledgerly.cli.company_resolution import resolve_company_or_exit
from ledgerly.cli.date_filters import period_flags_from, period_options, resolve_cli_date_range
from ledgerly.domain.entities import NormalBalance
from ledgerly.domain.reports import ReportService


def _money(value) -> str:
    return f"{value:,.2f}"


def _echo_notes(report) -> None:
    for message in getattr(report, "warnings", ()):
        click.echo(f"Warning: {message}", err=True)
    if report.skipped:
        click.echo(f"Skipped {len(report.skipped)} malformed entries:", err=True)
        for message in report.skipped:
            click.echo(f"  {message}", err=True)


def _echo_section(title: str, accounts, total) -> None:
    click.echo(title)
    for account in accounts:
        click.echo(f"  {account.name:<46} {_money(account.balance):>18}")
    click.echo(f"  {'Total ' + title:<46} {_money(total):>18}")


@click.command("trial-balance")
@click.pass_context
def trial_balance(ctx):
    """Show debit and credit totals per account."""
    company_id = resolve_company_or_exit(ctx)
    report = ReportService(ctx.obj["db"]).trial_balance(company_id)

    if not report.rows:
        click.echo("No journal entries found.")
        return

    click.echo(f"{'Account':<40} {'Debit':>18} {'Credit':>18}")
    click.echo("-" * 78)
    for row in report.rows:
        click.echo(f"{row.account_name:<40} {_money(row.debit):>18} {_money(row.credit):>18}")
    click.echo("-" * 78)
    click.echo(f"{'TOTAL':<40} {_money(report.total_debits):>18} {_money(report.total_credits):>18}")
    click.echo("Balanced" if report.is_balanced else f"Out of balance by {_money(report.difference)}")
    _echo_notes(report)


@click.command("balance-sheet")
@click.pass_context
def balance_sheet(ctx):
    """Show assets, liabilities and the equity roll-forward."""
    company_id = resolve_company_or_exit(ctx)
    report = ReportService(ctx.obj["db"]).balance_sheet(company_id)

    _echo_section("Assets", report.assets, report.total_assets)
    click.echo()
    _echo_section("Liabilities", report.liabilities, report.total_liabilities)
    click.echo()
    click.echo("Equity")
    for account in report.beginning_equity:
        click.echo(f"  {account.name:<46} {_money(account.balance):>18}")
    click.echo(f"  {'Net income':<46} {_money(report.net_income):>18}")
    for account in report.drawings:
        click.echo(f"  {'Less ' + account.name:<46} {_money(-account.balance):>18}")
    click.echo(f"  {'Ending equity':<46} {_money(report.ending_equity):>18}")

    if report.unclassified:
        click.echo()
        _echo_section("Unclassified", report.unclassified, report.total_unclassified)

    click.echo("-" * 68)
    click.echo(
        f"{'Liabilities and equity':<48} "
        f"{_money(report.total_liabilities + report.ending_equity):>18}"
    )
    if report.is_reconciled:
        click.echo("Assets = Liabilities + Equity")
    _echo_notes(report)


@click.command("profit-loss")
@period_options
@click.pass_context
def profit_loss(ctx, start_date: str, end_date: str, **periods):
    """Show revenue, expenses and net profit for a period."""
    company_id = resolve_company_or_exit(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )
    report = ReportService(ctx.obj["db"]).profit_and_loss(company_id, start_date=start, end_date=end)

    click.echo(f"Profit & Loss ({start or 'beginning'} to {end or 'today'})")
    click.echo("Revenue")
    for item in report.revenue_items:
        click.echo(f"  {item.account_name:<46} {_money(item.amount):>18}")
    click.echo(f"  {'Total revenue':<46} {_money(report.total_revenue):>18}")
    click.echo("Expenses")
    for item in report.expense_items:
        click.echo(f"  {item.account_name:<46} {_money(item.amount):>18}")
    click.echo(f"  {'Total expenses':<46} {_money(report.total_expenses):>18}")
    click.echo("-" * 68)
    click.echo(f"{'Net profit':<48} {_money(report.net_profit):>18}")
    _echo_notes(report)


@click.command("ledger")
@click.argument("account")
@period_options
@click.option("--search", help="Only entries whose description contains this text")
@click.option("--raw", is_flag=True, help="Debits increase the balance regardless of account class")
@click.pass_context
def ledger(ctx, account: str, start_date: str, end_date: str, search: str | None, raw: bool, **periods):
    """Show an account's entries with a running balance."""
    company_id = resolve_company_or_exit(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )
    view = ReportService(ctx.obj["db"]).ledger(
        company_id,
        account,
        start_date=start,
        end_date=end,
        search=search,
        normal_balance=NormalBalance.DEBIT if raw else None,
    )

    if not view.transactions:
        click.echo(f"No entries found for account '{account}'.")
        return

    click.echo(f"Ledger: {view.account_name} ({view.normal_balance.value}-normal)")
    click.echo("-" * 100)
    click.echo(f"{'Date':<12} {'Description':<36} {'Debit':>16} {'Credit':>16} {'Balance':>16}")
    click.echo("-" * 100)
    for txn in view.transactions:
        debit = _money(txn.debit) if txn.debit is not None else ""
        credit = _money(txn.credit) if txn.credit is not None else ""
        click.echo(
            f"{str(txn.date):<12} {txn.description[:36]:<36} {debit:>16} {credit:>16} "
            f"{_money(txn.balance):>16}"
        )
    click.echo("-" * 100)
    click.echo(f"{'Closing balance':<82} {_money(view.closing_balance):>16}")


@click.command("dashboard")
@period_options
@click.pass_context
def dashboard(ctx, start_date: str, end_date: str, **periods):
    """Show headline figures and monthly net income."""
    company_id = resolve_company_or_exit(ctx)
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from(periods),
    )
    summary = ReportService(ctx.obj["db"]).dashboard(company_id, start_date=start, end_date=end)

    click.echo(f"{'Revenue':<30} {_money(summary.total_revenue):>18}")
    click.echo(f"{'Expenses':<30} {_money(summary.total_expenses):>18}")
    click.echo(f"{'Net profit':<30} {_money(summary.net_profit):>18}")
    click.echo(f"{'Burn rate (cash out)':<30} {_money(summary.burn_rate):>18}")
    click.echo(f"{'Transactions':<30} {summary.transaction_count:>18}")

    if summary.monthly:
        click.echo()
        click.echo(f"{'Month':<10} {'Income':>16} {'Expense':>16} {'Net income':>16}")
        for month in summary.monthly:
            click.echo(
                f"{month.year_month:<10} {_money(month.income):>16} "
                f"{_money(month.expense):>16} {_money(month.net_income):>16}"
            )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(trial_balance)
    cli.add_command(balance_sheet)
    cli.add_command(profit_loss)
    cli.add_command(ledger)
    cli.add_command(dashboard)
