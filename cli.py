from datetime import date
from pathlib import Path

import click
import pandas as pd

from config.constants import (
    AutoArchive, Direction, ObligationCategory, ObligationStatus, RecurrenceType,
)
from config.logging_config import setup_logging
from config.settings import DATA_FILE, HISTORY_WINDOW_MONTHS, UPCOMING_DATES_COUNT
from core import ledger
from core.amortization import (
    calc_effective_annual_rate,
    calc_monthly_payment,
    calc_total_interest,
    generate_amortization_schedule,
)
from core.balance import calc_balance
from core.recurrence import describe_recurrence, generate_upcoming_dates
from core.reporting import (
    build_dashboard_summary,
    build_monthly_history,
    filter_by_name,
    list_due_soon,
    list_overdue,
)
from core.session import LedgerSession
from data_manager.data_validator import ValidationError, validate_amortization_input
from data_manager.json_handler import export_csv, export_excel, init_store
from data_manager.schema import RecurrenceSettings
from utils.formatters import fmt_amount, fmt_percent

DATE = click.DateTime(formats=["%Y-%m-%d"])


def _to_date(value):
    return value.date() if value is not None else None


def _session(ctx) -> LedgerSession:
    if "session" not in ctx.obj:
        ctx.obj["session"] = LedgerSession(ctx.obj["data_file"])
    return ctx.obj["session"]


def _apply(ctx, mutation, *args, **kwargs):
    """Apply a mutation and turn domain errors into CLI errors."""
    session = _session(ctx)
    try:
        saved = session.apply(mutation, *args, **kwargs)
    except ValidationError as exc:
        raise click.ClickException("\n".join(exc.errors))
    except KeyError as exc:
        raise click.ClickException(f"No record with id {exc.args[0]!r}.")
    except ValueError as exc:
        raise click.ClickException(str(exc))
    if not saved:
        raise click.ClickException("Could not save data; the change was not applied.")
    return session.document


def _find_obligation(document, obligation_id):
    for o in list(document.obligations) + list(document.archived):
        if o.obligation_id == obligation_id:
            return o
    raise click.ClickException(f"No record with id {obligation_id!r}.")


def _obligations_frame(obligations, currency, today) -> pd.DataFrame:
    rows = []
    for o in obligations:
        summary = calc_balance(o, today)
        rows.append({
            "id": o.obligation_id,
            "direction": Direction(o.direction).label,
            "name": o.name,
            "category": ObligationCategory(o.category).label,
            "principal": fmt_amount(o.principal, currency),
            "paid": fmt_amount(summary.total_paid, currency),
            "remaining": fmt_amount(summary.remaining, currency),
            "progress": fmt_percent(summary.progress_percent),
            "due": o.due_date.isoformat() if o.due_date else "",
            "status": o.status,
        })
    return pd.DataFrame(rows)


@click.group()
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=DATA_FILE,
              show_default=True, help='Path to the JSON data file')
@click.pass_context
def cli(ctx, data_file):
    """Track money you owe and money owed to you."""
    ctx.ensure_object(dict)
    ctx.obj["data_file"] = data_file
    setup_logging(log_dir=data_file.parent / "logs", console=False)


@cli.command()
@click.pass_context
def init(ctx):
    """Creates an empty data file if none exists."""
    init_store(ctx.obj["data_file"])
    click.echo(f"Data file ready at {ctx.obj['data_file']}")


@cli.command('list')
@click.option('--archived', is_flag=True, help='List archived records instead of active ones')
@click.option('--search', type=str, default='', help='Filter by counterparty name')
@click.pass_context
def list_obligations(ctx, archived, search):
    """Lists obligations with their live balances."""
    document = _session(ctx).document
    obligations = document.archived if archived else document.obligations
    if search:
        obligations = filter_by_name(obligations, search)
    if not obligations:
        click.echo("No records.")
        return
    frame = _obligations_frame(obligations, document.settings.currency, date.today())
    click.echo(frame.to_string(index=False))


@cli.command('add')
@click.option('--name', type=str, required=True, help='Counterparty name')
@click.option('--amount', type=float, required=True, help='Principal amount')
@click.option('--direction', type=click.Choice([d.value for d in Direction]), required=True,
              help='i_owe: you borrowed; they_owe: you lent')
@click.option('--category', type=click.Choice([c.value for c in ObligationCategory]),
              default=ObligationCategory.FRIEND.value, show_default=True, help='Obligation category')
@click.option('--start-date', type=DATE, default=None, help='Start date (YYYY-MM-DD), defaults to today')
@click.option('--due-date', type=DATE, default=None, help='Due date (YYYY-MM-DD)')
@click.option('--rate', type=float, default=None, help='Annual interest rate in percent (bank loans)')
@click.option('--recurrence', type=click.Choice([r.value for r in RecurrenceType]),
              default=RecurrenceType.NONE.value, show_default=True, help='Recurrence')
@click.option('--recurrence-end', type=DATE, default=None, help='Last possible due date of the series')
@click.option('--max-occurrences', type=int, default=None, help='Maximum number of occurrences')
@click.option('--description', type=str, default='', help='Free-text description')
@click.option('--reminder-days', type=int, default=None, help='Days before the due date to start reminding')
@click.pass_context
def add_obligation(ctx, name, amount, direction, category, start_date, due_date, rate,
                   recurrence, recurrence_end, max_occurrences, description, reminder_days):
    """Adds a new obligation."""
    settings = None
    if recurrence != RecurrenceType.NONE.value:
        settings = RecurrenceSettings(recurrence, _to_date(recurrence_end), max_occurrences)
    document = _apply(
        ctx, ledger.create_obligation,
        name=name,
        principal=amount,
        direction=direction,
        category=category,
        start_date=_to_date(start_date) or date.today(),
        due_date=_to_date(due_date),
        interest_rate=rate,
        recurrence=settings,
        description=description,
        reminder_days=reminder_days,
    )
    click.echo(f"Obligation '{document.obligations[-1].obligation_id}' added successfully.")


@cli.command('pay')
@click.option('--id', 'obligation_id', type=str, required=True, help='Obligation ID')
@click.option('--amount', type=float, required=True, help='Payment amount')
@click.option('--date', 'paid_on', type=DATE, default=None, help='Payment date (YYYY-MM-DD), defaults to today')
@click.option('--method', type=str, default=None, help='Payment method (cash, bank transfer, ...)')
@click.option('--partial', is_flag=True, help='Mark as a partial payment')
@click.option('--notes', type=str, default='', help='Notes')
@click.pass_context
def pay(ctx, obligation_id, amount, paid_on, method, partial, notes):
    """Logs a payment against an active obligation."""
    document = _apply(
        ctx, ledger.add_payment, obligation_id,
        amount=amount,
        paid_on=_to_date(paid_on) or date.today(),
        method=method,
        is_partial=partial,
        notes=notes,
    )
    if any(o.obligation_id == obligation_id for o in document.obligations):
        summary = calc_balance(_find_obligation(document, obligation_id))
        click.echo(f"Payment recorded. Remaining: {fmt_amount(summary.remaining, document.settings.currency)}")
    else:
        click.echo("Payment recorded. Obligation settled and archived.")


@cli.command('archive')
@click.option('--id', 'obligation_id', type=str, required=True, help='Obligation ID')
@click.option('--status', type=click.Choice([ObligationStatus.COMPLETED.value, ObligationStatus.DEFAULTED.value]),
              required=True, help='Final status')
@click.pass_context
def archive(ctx, obligation_id, status):
    """Archives an obligation as completed or defaulted."""
    _apply(ctx, ledger.archive_obligation, obligation_id, status)
    click.echo(f"Obligation '{obligation_id}' archived as {status}.")


@cli.command('delete-archived')
@click.option('--id', 'obligation_id', type=str, required=True, help='Archived obligation ID')
@click.confirmation_option(prompt='This permanently deletes the record. Continue?')
@click.pass_context
def delete_archived(ctx, obligation_id):
    """Permanently deletes an archived obligation."""
    _apply(ctx, ledger.delete_archived, obligation_id)
    click.echo(f"Archived obligation '{obligation_id}' deleted.")


@cli.command('balance')
@click.option('--id', 'obligation_id', type=str, required=True, help='Obligation ID')
@click.option('--as-of', type=DATE, default=None, help='Evaluate as of this date (YYYY-MM-DD)')
@click.pass_context
def balance(ctx, obligation_id, as_of):
    """Shows paid, accrued interest and remaining for one obligation."""
    document = _session(ctx).document
    obligation = _find_obligation(document, obligation_id)
    summary = calc_balance(obligation, _to_date(as_of) or date.today())
    currency = obligation.currency or document.settings.currency
    click.echo(f"Principal: {fmt_amount(obligation.principal, currency)}")
    click.echo(f"Total paid: {fmt_amount(summary.total_paid, currency)}")
    click.echo(f"Accrued interest: {fmt_amount(summary.accrued_interest, currency)}")
    click.echo(f"Remaining: {fmt_amount(summary.remaining, currency)}")
    click.echo(f"Progress: {fmt_percent(summary.progress_percent)}")
    click.echo(f"Paid off: {'yes' if summary.is_paid_off else 'no'}")
    click.echo(f"Recurrence: {describe_recurrence(obligation.recurrence)}")


@cli.command('summary')
@click.pass_context
def summary(ctx):
    """Shows the dashboard totals."""
    document = _session(ctx).document
    totals = build_dashboard_summary(document)
    currency = document.settings.currency
    click.echo(f"Total I owe: {fmt_amount(totals['total_i_owe'], currency)}")
    click.echo(f"Total owed to me: {fmt_amount(totals['total_owed_to_me'], currency)}")
    click.echo(f"Total paid: {fmt_amount(totals['total_paid'], currency)}")
    click.echo(f"Total repaid to me: {fmt_amount(totals['total_repaid'], currency)}")
    click.echo(f"Overdue: {totals['overdue_count']}")


@cli.command('history')
@click.option('--window', type=int, default=HISTORY_WINDOW_MONTHS, show_default=True,
              help='Number of most recent months (0 for all)')
@click.pass_context
def history(ctx, window):
    """Prints monthly payment totals per direction as CSV."""
    document = _session(ctx).document
    history_df = build_monthly_history(
        list(document.obligations) + list(document.archived),
        window=window or None,
    )
    click.echo(history_df.to_csv(index=False))


@cli.command('overdue')
@click.pass_context
def overdue(ctx):
    """Lists active obligations past their due date."""
    document = _session(ctx).document
    late = list_overdue(document.obligations)
    if not late:
        click.echo("Nothing overdue.")
        return
    click.echo(_obligations_frame(late, document.settings.currency, date.today()).to_string(index=False))


@cli.command('due-soon')
@click.pass_context
def due_soon(ctx):
    """Lists unpaid obligations due within their reminder window."""
    document = _session(ctx).document
    due = list_due_soon(document.obligations)
    if not due:
        click.echo("Nothing due soon.")
        return
    click.echo(_obligations_frame(due, document.settings.currency, date.today()).to_string(index=False))


@cli.command('upcoming')
@click.option('--id', 'obligation_id', type=str, required=True, help='Recurring obligation ID')
@click.option('--count', type=int, default=UPCOMING_DATES_COUNT, show_default=True, help='Number of dates')
@click.pass_context
def upcoming(ctx, obligation_id, count):
    """Lists the next due dates of a recurring obligation."""
    obligation = _find_obligation(_session(ctx).document, obligation_id)
    if not obligation.is_recurring or obligation.due_date is None:
        click.echo("Obligation is not recurring.")
        return
    for d in generate_upcoming_dates(obligation.due_date, obligation.recurrence, count, obligation.occurrence):
        click.echo(d.isoformat())


@cli.command('monthly-payment')
@click.option('--principal', type=float, required=True, help='Loan principal')
@click.option('--annual-rate', type=float, required=True, help='Annual interest rate')
@click.option('--term-months', type=int, required=True, help='Loan term in months')
def monthly_payment(principal, annual_rate, term_months):
    """Calculates the monthly payment and total interest for a fixed-payment loan."""
    ok, errors = validate_amortization_input(principal, annual_rate, term_months)
    if not ok:
        raise click.ClickException("\n".join(errors))
    click.echo(f"Monthly payment: {calc_monthly_payment(principal, annual_rate, term_months):.2f}")
    click.echo(f"Total interest: {calc_total_interest(principal, annual_rate, term_months):.2f}")


@cli.command('schedule')
@click.option('--principal', type=float, required=True, help='Loan principal')
@click.option('--annual-rate', type=float, required=True, help='Annual interest rate')
@click.option('--term-months', type=int, required=True, help='Loan term in months')
@click.option('--start-date', type=DATE, default=None, help='Start date (YYYY-MM-DD), defaults to today')
@click.option('--show-rate', is_flag=True, help='Also print the effective annual rate')
def schedule(principal, annual_rate, term_months, start_date, show_rate):
    """Generates an amortization schedule and outputs it as CSV."""
    ok, errors = validate_amortization_input(principal, annual_rate, term_months)
    if not ok:
        raise click.ClickException("\n".join(errors))
    sch = generate_amortization_schedule(principal, annual_rate, term_months, _to_date(start_date) or date.today())
    click.echo(sch.round(2).to_csv(index=False))
    if show_rate:
        click.echo(f"Effective annual rate: {calc_effective_annual_rate(principal, sch):.4f}%")


@cli.command('add-goal')
@click.option('--name', type=str, required=True, help='Goal name')
@click.option('--target', type=float, required=True, help='Target amount')
@click.pass_context
def add_goal(ctx, name, target):
    """Adds a savings goal."""
    document = _apply(ctx, ledger.create_savings_goal, name, target)
    click.echo(f"Savings goal '{document.savings_goals[-1].goal_id}' added successfully.")


@cli.command('deposit')
@click.option('--goal-id', type=str, required=True, help='Savings goal ID')
@click.option('--amount', type=float, required=True, help='Deposit amount')
@click.option('--date', 'paid_on', type=DATE, default=None, help='Deposit date (YYYY-MM-DD), defaults to today')
@click.pass_context
def deposit(ctx, goal_id, amount, paid_on):
    """Adds a deposit to a savings goal."""
    _apply(ctx, ledger.add_deposit, goal_id, amount, _to_date(paid_on) or date.today())
    click.echo("Deposit recorded.")


@cli.command('settings')
@click.option('--currency', type=str, default=None, help='Display currency code')
@click.option('--auto-archive', type=click.Choice([a.value for a in AutoArchive]), default=None,
              help='Auto-archive settled obligations')
@click.pass_context
def settings(ctx, currency, auto_archive):
    """Shows or changes settings."""
    if currency is not None or auto_archive is not None:
        _apply(ctx, ledger.update_settings, currency=currency, auto_archive=auto_archive)
    current = _session(ctx).document.settings
    click.echo(f"Currency: {current.currency}")
    click.echo(f"Auto-archive: {AutoArchive(current.auto_archive).label}")


@cli.command('auto-archive')
@click.pass_context
def auto_archive(ctx):
    """Archives settled obligations according to the auto-archive setting."""
    before = len(_session(ctx).document.archived)
    document = _apply(ctx, ledger.apply_auto_archive)
    click.echo(f"Archived {len(document.archived) - before} obligation(s).")


@cli.command('export')
@click.option('--output', type=click.Path(dir_okay=False, path_type=Path), required=True, help='Output file')
@click.option('--format', 'fmt', type=click.Choice(['csv', 'xlsx']), default='csv', show_default=True,
              help='Export format')
@click.pass_context
def export(ctx, output, fmt):
    """Exports all obligations to CSV or an Excel workbook."""
    document = _session(ctx).document
    if not document.obligations and not document.archived:
        raise click.ClickException("No data to export. Add some debts or loans first.")
    if fmt == 'csv':
        export_csv(document, output)
    else:
        export_excel(document, output)
    click.echo(f"Exported to {output}")


if __name__ == "__main__":
    cli()
