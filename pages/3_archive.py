"""Archive of completed and defaulted obligations"""
import streamlit as st

from config.constants import Direction
from components.state import apply_and_report, get_session
from components.tables import render_obligations_table, render_payments_table
from core import ledger

st.set_page_config(page_title="Archive", page_icon="🗄️", layout="wide")
st.title("🗄️ Archive")

session = get_session()
document = session.document
currency = document.settings.currency

if not document.archived:
    st.info("The archive is empty.")
    st.stop()

for direction in Direction:
    records = [o for o in document.archived if o.direction == direction.value]
    st.subheader(direction.label)
    render_obligations_table(records, currency)

    for o in records:
        with st.expander(f"{o.name} ({o.obligation_id}, {o.status})"):
            render_payments_table(o, o.currency or currency)
            confirm = st.checkbox("I understand this cannot be undone", key=f"{o.obligation_id}_confirm")
            if st.button("Delete permanently", key=f"{o.obligation_id}_delete", disabled=not confirm):
                if apply_and_report(ledger.delete_archived, o.obligation_id):
                    st.rerun()
