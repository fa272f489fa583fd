"""Per-browser-session ledger and the error handling shared by pages."""
import streamlit as st

from core.session import LedgerSession
from data_manager.data_validator import ValidationError


def get_session() -> LedgerSession:
    if "ledger_session" not in st.session_state:
        st.session_state["ledger_session"] = LedgerSession()
    return st.session_state["ledger_session"]


def apply_and_report(mutation, *args, success: str = "", **kwargs) -> bool:
    """Apply a mutation, showing validation errors inline and save failures as a toast."""
    session = get_session()
    try:
        saved = session.apply(mutation, *args, **kwargs)
    except ValidationError as exc:
        for error in exc.errors:
            st.error(error)
        return False
    except (KeyError, ValueError) as exc:
        st.error(str(exc))
        return False
    if not saved:
        st.toast("Could not save data; the change was not applied.", icon="⚠️")
        return False
    if success:
        st.success(success)
    return True
