"""Savings goals"""
from datetime import date

import pandas as pd
import streamlit as st

from components.charts import create_savings_progress_bar
from components.forms import render_goal_form
from components.state import apply_and_report, get_session
from core import ledger
from core.reporting import calc_goal_progress
from utils.formatters import fmt_amount, fmt_percent

st.set_page_config(page_title="Savings", page_icon="🎯", layout="wide")
st.title("🎯 Savings")

session = get_session()

with st.expander("➕ New goal"):
    values = render_goal_form()
    if values is not None:
        if apply_and_report(ledger.create_savings_goal, success="Goal added.", **values):
            st.rerun()

document = session.document
currency = document.settings.currency

if not document.savings_goals:
    st.info("No savings goals yet.")
    st.stop()

goals_df = pd.DataFrame([
    {"goal_id": g.goal_id, "name": g.name, "target_amount": g.target_amount, **calc_goal_progress(g)}
    for g in document.savings_goals
])
st.plotly_chart(create_savings_progress_bar(goals_df), width='stretch', key="savings_bar")

for goal in document.savings_goals:
    progress = calc_goal_progress(goal)
    with st.expander(f"{goal.name}: {fmt_amount(progress['current_amount'], currency)} "
                     f"of {fmt_amount(goal.target_amount, currency)}"):
        st.progress(int(progress["progress_percent"]), text=fmt_percent(progress["progress_percent"]))
        with st.form(f"{goal.goal_id}_deposit_form"):
            c1, c2 = st.columns(2)
            with c1:
                amount = st.number_input("Deposit", min_value=0.0, step=10.0, key=f"{goal.goal_id}_amount")
            with c2:
                paid_on = st.date_input("Date", value=date.today(), key=f"{goal.goal_id}_date")
            if st.form_submit_button("Add deposit", width='stretch'):
                if apply_and_report(ledger.add_deposit, goal.goal_id, amount, paid_on):
                    st.rerun()
        if st.button("Delete goal", key=f"{goal.goal_id}_delete"):
            if apply_and_report(ledger.delete_savings_goal, goal.goal_id):
                st.rerun()
