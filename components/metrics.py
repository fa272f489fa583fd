"""Metric card components"""
import streamlit as st

from core.balance import BalanceSummary
from utils.formatters import fmt_amount, fmt_percent


def render_overview_metrics(summary: dict, currency: str):
    """Headline cards of the dashboard"""
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Total I owe", fmt_amount(summary["total_i_owe"], currency))
    with c2:
        st.metric("Total owed to me", fmt_amount(summary["total_owed_to_me"], currency))
    with c3:
        st.metric("Total paid", fmt_amount(summary["total_paid"], currency))
    with c4:
        st.metric("Total repaid to me", fmt_amount(summary["total_repaid"], currency))

    if summary["overdue_count"]:
        st.warning(f"{summary['overdue_count']} obligation(s) are past their due date.")


def render_balance_metrics(principal: float, balance: BalanceSummary, currency: str):
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        st.metric("Principal", fmt_amount(principal, currency))
    with c2:
        st.metric("Paid", fmt_amount(balance.total_paid, currency))
    with c3:
        st.metric("Accrued interest", fmt_amount(balance.accrued_interest, currency))
    with c4:
        st.metric("Remaining", fmt_amount(balance.remaining, currency))
    st.progress(int(balance.progress_percent), text=fmt_percent(balance.progress_percent))
