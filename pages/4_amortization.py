"""Amortization calculator"""
from datetime import date

import streamlit as st

from components.charts import create_amortization_chart
from components.state import get_session
from components.tables import render_amortization_table
from core.amortization import (
    calc_effective_annual_rate, calc_monthly_payment, calc_total_interest,
    generate_amortization_schedule,
)
from data_manager.data_validator import validate_amortization_input
from config.settings import MAX_TERM_MONTHS
from utils.formatters import fmt_amount, fmt_months, fmt_rate

st.set_page_config(page_title="Amortization", page_icon="🏦", layout="wide")
st.title("🏦 Amortization")

currency = get_session().document.settings.currency

with st.form("amortization_form"):
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        principal = st.number_input("Principal", min_value=0.0, value=100000.0, step=1000.0)
    with c2:
        annual_rate = st.number_input("Annual rate (%)", min_value=0.0, max_value=100.0,
                                      value=6.0, step=0.1, format="%.2f")
    with c3:
        term_months = st.number_input("Term (months)", min_value=1, max_value=MAX_TERM_MONTHS, value=120)
    with c4:
        start_date = st.date_input("First payment date", value=date.today())
    submitted = st.form_submit_button("Calculate", width='stretch', type="primary")

if not submitted:
    st.stop()

ok, errors = validate_amortization_input(principal, annual_rate, term_months)
if not ok:
    for error in errors:
        st.error(error)
    st.stop()

term_months = int(term_months)
schedule = generate_amortization_schedule(principal, annual_rate, term_months, start_date)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Monthly payment", fmt_amount(calc_monthly_payment(principal, annual_rate, term_months), currency))
c2.metric("Total interest", fmt_amount(calc_total_interest(principal, annual_rate, term_months), currency))
c3.metric("Term", fmt_months(term_months))
c4.metric("Effective annual rate", fmt_rate(calc_effective_annual_rate(principal, schedule)))

st.plotly_chart(create_amortization_chart(schedule), width='stretch', key="amortization_chart")
render_amortization_table(schedule, currency)

st.download_button(
    "Download CSV",
    data=schedule.round(2).to_csv(index=False).encode("utf-8"),
    file_name="amortization_schedule.csv",
    mime="text/csv",
)
