"""Loan Dashboard - main entry"""
import streamlit as st

from config.logging_config import setup_logging
from config.settings import DATA_FILE, PAGE_TITLE, PAGE_ICON, LAYOUT
from components.state import get_session

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
    initial_sidebar_state="expanded",
)

setup_logging()
session = get_session()

st.title(f"{PAGE_ICON} {PAGE_TITLE}")

st.markdown("""
Keep track of money you borrowed and money you lent, in one place.

### Pages

| Page | What it does |
|------|--------------|
| 📊 **Dashboard** | Totals, monthly payment history, breakdown per counterparty |
| 📋 **Obligations** | Add debts and loans, log payments, archive settled ones |
| 🗄️ **Archive** | Completed and defaulted records |
| 🏦 **Amortization** | Monthly payment and schedule of a fixed-payment loan |
| 🎯 **Savings** | Savings goals and deposits |
| ⚙️ **Settings** | Currency, auto-archive and exports |

### Getting started

1. Open **Obligations** and add what you owe or what is owed to you
2. Log payments as they happen
3. Watch the **Dashboard**
""")

document = session.document
with st.sidebar:
    st.markdown("### About")
    st.markdown(f"{len(document.obligations)} active / {len(document.archived)} archived records")
    st.markdown(f"Data is stored in `{DATA_FILE}`")
