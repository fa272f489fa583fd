"""Dashboard"""
from datetime import date

import streamlit as st

from config.constants import Direction
from config.settings import HISTORY_WINDOW_MONTHS
from components.charts import create_breakdown_pie, create_monthly_history_bar
from components.metrics import render_overview_metrics
from components.state import apply_and_report, get_session
from components.tables import render_obligations_table
from core import ledger
from core.reporting import (
    build_breakdown, build_dashboard_summary, build_monthly_history, list_due_soon, list_overdue,
)

st.set_page_config(page_title="Dashboard", page_icon="📊", layout="wide")
st.title("📊 Dashboard")

session = get_session()
today = date.today()

# Delayed auto-archive runs on every visit
apply_and_report(ledger.apply_auto_archive, today)

document = session.document
currency = document.settings.currency

if not document.obligations and not document.archived:
    st.info("No records yet. Add a debt or a loan on the Obligations page.")
    st.stop()

render_overview_metrics(build_dashboard_summary(document, today), currency)

overdue = list_overdue(document.obligations, today)
if overdue:
    with st.expander(f"Overdue ({len(overdue)})", expanded=True):
        render_obligations_table(overdue, currency)

due_soon = list_due_soon(document.obligations, today)
if due_soon:
    with st.expander(f"Due soon ({len(due_soon)})"):
        render_obligations_table(due_soon, currency)

st.divider()

history = build_monthly_history(
    list(document.obligations) + list(document.archived),
    window=HISTORY_WINDOW_MONTHS,
)
if history.empty:
    st.caption("No payments logged yet.")
else:
    st.plotly_chart(create_monthly_history_bar(history), width='stretch', key="history_bar")

breakdown = build_breakdown(document.obligations, today)
col1, col2 = st.columns(2)
for col, direction in ((col1, Direction.I_OWE), (col2, Direction.THEY_OWE)):
    with col:
        if (breakdown["direction"] == direction.value).any():
            st.plotly_chart(
                create_breakdown_pie(breakdown, direction.value),
                width='stretch', key=f"{direction.value}_pie",
            )
        else:
            st.caption(f"Nothing outstanding: {direction.label}.")
