"""Formatted table components"""
from datetime import date
from typing import Iterable, Optional

import pandas as pd
import streamlit as st

from config.constants import Direction, ObligationCategory
from core.balance import calc_balance
from core.recurrence import describe_recurrence
from data_manager.schema import Obligation
from utils.formatters import fmt_amount, fmt_percent


def obligations_display_frame(
    obligations: Iterable[Obligation],
    currency: str,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """One formatted row per obligation with its live balance."""
    rows = []
    for o in obligations:
        balance = calc_balance(o, today)
        cur = o.currency or currency
        rows.append({
            "ID": o.obligation_id,
            "Direction": Direction(o.direction).label,
            "Name": o.name,
            "Category": ObligationCategory(o.category).label,
            "Principal": fmt_amount(o.principal, cur),
            "Paid": fmt_amount(balance.total_paid, cur),
            "Remaining": fmt_amount(balance.remaining, cur),
            "Progress": fmt_percent(balance.progress_percent),
            "Due": o.due_date.isoformat() if o.due_date else "",
            "Recurrence": describe_recurrence(o.recurrence),
            "Status": o.status,
        })
    return pd.DataFrame(rows)


def render_obligations_table(obligations: Iterable[Obligation], currency: str):
    display_df = obligations_display_frame(obligations, currency)
    if display_df.empty:
        st.info("No records yet.")
        return
    st.dataframe(display_df, width='stretch', hide_index=True)


def render_payments_table(obligation: Obligation, currency: str):
    if not obligation.payments:
        st.caption("No payments logged.")
        return
    display_df = pd.DataFrame([
        {
            "Date": p.paid_on.isoformat(),
            "Amount": fmt_amount(p.amount, currency),
            "Method": p.method or "",
            "Partial": "✅" if p.is_partial else "",
            "Notes": p.notes,
        }
        for p in sorted(obligation.payments, key=lambda p: p.paid_on)
    ])
    st.dataframe(display_df, width='stretch', hide_index=True)


def render_amortization_table(schedule: pd.DataFrame, currency: str):
    """Render an amortization schedule with formatted money columns"""
    if schedule.empty:
        st.info("No schedule to show.")
        return

    col_map = {
        "payment_number": "#",
        "payment_date": "Date",
        "payment_amount": "Payment",
        "principal_amount": "Principal",
        "interest_amount": "Interest",
        "remaining_balance": "Remaining",
    }
    display_df = schedule[list(col_map)].rename(columns=col_map)
    for col in ["Payment", "Principal", "Interest", "Remaining"]:
        display_df[col] = display_df[col].apply(lambda x: fmt_amount(x, currency))

    if len(display_df) > 24:
        st.dataframe(display_df, width='stretch', height=600, hide_index=True)
    else:
        st.dataframe(display_df, width='stretch', hide_index=True)
