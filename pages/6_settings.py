"""Settings and exports"""
import tempfile
from pathlib import Path

import streamlit as st

from config.constants import AutoArchive
from config.settings import DATA_FILE, SUPPORTED_CURRENCIES
from components.state import apply_and_report, get_session
from core import ledger
from core.reporting import build_export_frame
from data_manager.json_handler import export_excel

st.set_page_config(page_title="Settings", page_icon="⚙️", layout="wide")
st.title("⚙️ Settings")

session = get_session()
settings = session.document.settings

with st.form("settings_form"):
    c1, c2 = st.columns(2)
    with c1:
        currency = st.selectbox(
            "Currency",
            options=list(SUPPORTED_CURRENCIES),
            index=list(SUPPORTED_CURRENCIES).index(settings.currency) if settings.currency in SUPPORTED_CURRENCIES else 0,
            format_func=lambda c: f"{c} ({SUPPORTED_CURRENCIES[c]['name']})",
        )
    with c2:
        auto_archive = st.selectbox(
            "Auto-archive settled obligations",
            options=[a.value for a in AutoArchive],
            index=[a.value for a in AutoArchive].index(settings.auto_archive),
            format_func=lambda x: AutoArchive(x).label,
            help="Recurring obligations are always archived when paid; this only affects one-off ones",
        )
    if st.form_submit_button("Save settings", width='stretch', type="primary"):
        if apply_and_report(ledger.update_settings, currency=currency, auto_archive=auto_archive,
                            success="Settings saved."):
            st.rerun()

st.divider()
st.subheader("Export")

document = session.document
if not document.obligations and not document.archived:
    st.info("No data to export. Add some debts or loans first.")
    st.stop()

c1, c2 = st.columns(2)
with c1:
    st.download_button(
        "Download CSV",
        data=build_export_frame(document).to_csv(index=False).encode("utf-8"),
        file_name="loan_dashboard_export.csv",
        mime="text/csv",
        width='stretch',
    )
with c2:
    with tempfile.TemporaryDirectory() as tmp:
        workbook = export_excel(document, Path(tmp) / "export.xlsx")
        st.download_button(
            "Download Excel",
            data=workbook.read_bytes(),
            file_name="loan_dashboard_export.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            width='stretch',
        )

st.caption(f"Data file: `{DATA_FILE}`")
