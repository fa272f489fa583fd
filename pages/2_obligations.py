"""Obligations: debts and loans"""
from datetime import date

import streamlit as st

from config.constants import Direction, ObligationStatus
from config.settings import UPCOMING_DATES_COUNT
from components.charts import create_accrual_chart
from components.forms import render_obligation_form, render_payment_form
from components.metrics import render_balance_metrics
from components.state import apply_and_report, get_session
from components.tables import render_obligations_table, render_payments_table
from core import ledger
from core.balance import calc_balance, is_overdue
from core.interest import accrual_timeline, is_interest_bearing
from core.recurrence import describe_recurrence, generate_upcoming_dates
from core.reporting import filter_by_name

st.set_page_config(page_title="Obligations", page_icon="📋", layout="wide")
st.title("📋 Obligations")

session = get_session()
today = date.today()


def render_obligation_detail(obligation, currency: str):
    balance = calc_balance(obligation, today)
    render_balance_metrics(obligation.principal, balance, currency)

    if is_overdue(obligation, today):
        st.error(f"Overdue since {obligation.due_date.isoformat()}")
    if obligation.is_recurring:
        st.caption(f"Recurrence: {describe_recurrence(obligation.recurrence)}")
        if obligation.due_date is not None:
            upcoming = generate_upcoming_dates(
                obligation.due_date, obligation.recurrence, UPCOMING_DATES_COUNT, obligation.occurrence,
            )
            if upcoming:
                st.caption("Next due dates: " + ", ".join(d.isoformat() for d in upcoming))
    if obligation.description:
        st.write(obligation.description)

    if is_interest_bearing(obligation):
        timeline = accrual_timeline(obligation, today)
        if not timeline.empty:
            st.plotly_chart(create_accrual_chart(timeline), width='stretch',
                            key=f"{obligation.obligation_id}_accrual")

    render_payments_table(obligation, currency)

    if not balance.is_paid_off:
        values = render_payment_form(obligation.obligation_id, balance.remaining)
        if values is not None:
            if apply_and_report(ledger.add_payment, obligation.obligation_id, today=today,
                                success="Payment recorded.", **values):
                st.rerun()

    c1, c2 = st.columns(2)
    with c1:
        if st.button("Archive as completed", key=f"{obligation.obligation_id}_complete", width='stretch'):
            if apply_and_report(ledger.archive_obligation, obligation.obligation_id,
                                ObligationStatus.COMPLETED.value):
                st.rerun()
    with c2:
        if st.button("Mark as defaulted", key=f"{obligation.obligation_id}_default", width='stretch'):
            if apply_and_report(ledger.archive_obligation, obligation.obligation_id,
                                ObligationStatus.DEFAULTED.value):
                st.rerun()

    with st.expander("Edit"):
        values = render_obligation_form(f"edit_{obligation.obligation_id}", obligation=obligation)
        if values is not None:
            values.pop("direction")
            if apply_and_report(ledger.update_obligation, obligation.obligation_id,
                                success="Saved.", **values):
                st.rerun()


tabs = st.tabs([d.label for d in Direction])
for tab, direction in zip(tabs, Direction):
    with tab:
        document = session.document
        currency = document.settings.currency

        with st.expander(f"➕ Add ({direction.label})"):
            values = render_obligation_form(f"new_{direction.value}", direction=direction.value)
            if values is not None:
                if apply_and_report(ledger.create_obligation, success="Added.", **values):
                    st.rerun()

        search = st.text_input("Search by name", key=f"{direction.value}_search")
        records = [o for o in document.obligations if o.direction == direction.value]
        if search:
            records = filter_by_name(records, search)

        render_obligations_table(records, currency)

        for o in records:
            with st.expander(f"{o.name} ({o.obligation_id})"):
                render_obligation_detail(o, o.currency or currency)
