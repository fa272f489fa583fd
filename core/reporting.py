"""Dashboard aggregates; every function here is a read-only projection."""
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

import pandas as pd

from config.constants import (
    BREAKDOWN_COLUMNS, EXPORT_COLUMNS, MONTHLY_HISTORY_COLUMNS,
    Direction, ObligationCategory, ObligationStatus,
)
from config.settings import DEFAULT_REMINDER_DAYS, HISTORY_WINDOW_MONTHS
from core.balance import calc_balance, calc_progress_percent, calc_total_paid, is_overdue
from data_manager.schema import Document, Obligation, SavingsGoal
from utils.date_utils import month_key

ARCHIVED = "archived"


def _status_group(obligation: Obligation) -> str:
    return obligation.status if obligation.status == ObligationStatus.ACTIVE.value else ARCHIVED


def calc_category_totals(
    obligations: Iterable[Obligation],
    today: Optional[date] = None,
    by: str = "direction",
) -> Dict[str, float]:
    """Sum of remaining balances keyed by direction, or by active/archived.

    Archived records no longer accrue interest, so an archived loan repaid
    with its interest counts as 0 rather than a negative balance.
    """
    if by == "direction":
        totals = {d.value: 0.0 for d in Direction}
        key = lambda o: o.direction  # noqa: E731
    elif by == "status":
        totals = {ObligationStatus.ACTIVE.value: 0.0, ARCHIVED: 0.0}
        key = _status_group
    else:
        raise ValueError(f"Unknown grouping: {by}")

    for o in obligations:
        remaining = calc_balance(o, today).remaining
        if o.status != ObligationStatus.ACTIVE.value:
            remaining = max(0.0, remaining)
        totals[key(o)] += remaining
    return totals


def build_monthly_history(
    obligations: Iterable[Obligation],
    window: Optional[int] = HISTORY_WINDOW_MONTHS,
) -> pd.DataFrame:
    """Payments per YYYY-MM of the payment date, split by direction.

    Buckets are ascending; with ``window`` set only the most recent buckets
    are kept.
    """
    rows = [
        {"month": month_key(p.paid_on), "direction": o.direction, "amount": p.amount}
        for o in obligations
        for p in o.payments
    ]
    if not rows:
        return pd.DataFrame(columns=MONTHLY_HISTORY_COLUMNS)

    df = pd.DataFrame(rows)
    pivot = df.pivot_table(index="month", columns="direction", values="amount", aggfunc="sum", fill_value=0.0)
    pivot = pivot.reindex(columns=[d.value for d in Direction], fill_value=0.0).sort_index()
    history = pivot.reset_index()
    history.columns.name = None
    history = history[MONTHLY_HISTORY_COLUMNS]
    if window is not None:
        history = history.tail(window)
    return history.reset_index(drop=True)


def build_breakdown(
    obligations: Iterable[Obligation],
    today: Optional[date] = None,
    sort_desc: bool = True,
) -> pd.DataFrame:
    """Remaining balance per obligation, only where something is still owed."""
    rows = []
    for o in obligations:
        remaining = calc_balance(o, today).remaining
        if remaining > 0:
            rows.append({
                "obligation_id": o.obligation_id,
                "name": o.name,
                "direction": o.direction,
                "remaining": remaining,
            })
    df = pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
    if sort_desc and not df.empty:
        df = df.sort_values("remaining", ascending=False, kind="stable").reset_index(drop=True)
    return df


def build_dashboard_summary(document: Document, today: Optional[date] = None) -> Dict[str, float]:
    """Headline cards: what is owed each way now, and what was paid in total."""
    totals = calc_category_totals(document.obligations, today, by="direction")
    everything = list(document.obligations) + list(document.archived)

    def _paid(direction: str) -> float:
        return sum(calc_total_paid(o.payments) for o in everything if o.direction == direction)

    return {
        "total_i_owe": totals[Direction.I_OWE.value],
        "total_owed_to_me": totals[Direction.THEY_OWE.value],
        "total_paid": _paid(Direction.I_OWE.value),
        "total_repaid": _paid(Direction.THEY_OWE.value),
        "overdue_count": sum(1 for o in document.obligations if is_overdue(o, today)),
    }


def list_overdue(obligations: Iterable[Obligation], today: Optional[date] = None) -> List[Obligation]:
    return [o for o in obligations if is_overdue(o, today)]


def list_due_soon(obligations: Iterable[Obligation], today: Optional[date] = None) -> List[Obligation]:
    """Unpaid obligations due within their reminder window, soonest first.

    The window is the obligation's own ``reminder_days`` or
    ``DEFAULT_REMINDER_DAYS``; an obligation due today is included.
    """
    today = today or date.today()
    due = []
    for o in obligations:
        if o.due_date is None or o.due_date < today:
            continue
        window = o.reminder_days if o.reminder_days is not None else DEFAULT_REMINDER_DAYS
        if o.due_date <= today + timedelta(days=window) and not calc_balance(o, today).is_paid_off:
            due.append(o)
    return sorted(due, key=lambda o: o.due_date)


def filter_by_name(obligations: Iterable[Obligation], query: str) -> List[Obligation]:
    query = (query or "").strip().lower()
    return [o for o in obligations if query in o.name.lower()]


def calc_goal_progress(goal: SavingsGoal) -> Dict[str, float]:
    current = calc_total_paid(goal.deposits)
    return {
        "current_amount": current,
        "remaining": max(0.0, goal.target_amount - current),
        "progress_percent": calc_progress_percent(current, goal.target_amount),
    }


def _export_row(obligation: Obligation, status: str, today: Optional[date]) -> dict:
    summary = calc_balance(obligation, today)
    return {
        "Type": "Debt" if obligation.direction == Direction.I_OWE.value else "Loan",
        "Status": status,
        "Name": obligation.name,
        "Category": ObligationCategory(obligation.category).label,
        "TotalAmount": obligation.principal,
        "AmountPaid": summary.total_paid,
        "AmountRemaining": summary.remaining,
        "StartDate": obligation.start_date.isoformat(),
        "DueDate": obligation.due_date.isoformat() if obligation.due_date else "",
        "Description": obligation.description,
        "InterestRate": obligation.interest_rate if obligation.interest_rate is not None else "",
        "IsRecurring": "Yes" if obligation.is_recurring else "No",
        "PaymentCount": len(obligation.payments),
    }


def build_export_frame(document: Document, today: Optional[date] = None) -> pd.DataFrame:
    """Flat table of active and archived obligations for CSV/Excel export."""
    rows = [_export_row(o, "Active", today) for o in document.obligations]
    rows += [
        _export_row(o, f"Archived ({o.status})", today)
        for o in document.archived
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)
