"""Form components"""
from datetime import date
from typing import Optional

import streamlit as st

from config.constants import Direction, ObligationCategory, RecurrenceType
from data_manager.schema import Obligation, RecurrenceSettings


def render_obligation_form(
    key_prefix: str = "new",
    direction: Optional[str] = None,
    obligation: Optional[Obligation] = None,
) -> dict | None:
    """Create/edit form for an obligation; returns the field values or None if not submitted.

    Args:
        key_prefix: prefix for widget keys
        direction: preselected direction for new records
        obligation: existing record when editing
    """
    is_edit = obligation is not None

    if is_edit:
        default_direction = obligation.direction
        default_category = obligation.category
        default_name = obligation.name
        default_principal = float(obligation.principal)
        default_start = obligation.start_date
        default_due = obligation.due_date
        default_rate = float(obligation.interest_rate or 0.0)
        default_recurrence = obligation.recurrence or RecurrenceSettings()
        default_description = obligation.description
        default_reminder = obligation.reminder_days
    else:
        default_direction = direction or Direction.I_OWE.value
        default_category = ObligationCategory.FRIEND.value
        default_name = ""
        default_principal = 0.0
        default_start = date.today()
        default_due = None
        default_rate = 0.0
        default_recurrence = RecurrenceSettings()
        default_description = ""
        default_reminder = None

    # Category and recurrence live outside the form so switching them re-renders the fields
    c1, c2, c3 = st.columns(3)
    with c1:
        direction = st.selectbox(
            "Direction",
            options=[d.value for d in Direction],
            index=[d.value for d in Direction].index(default_direction),
            format_func=lambda x: Direction(x).label,
            key=f"{key_prefix}_direction",
            disabled=is_edit,
        )
    with c2:
        category = st.selectbox(
            "Category",
            options=[c.value for c in ObligationCategory],
            index=[c.value for c in ObligationCategory].index(default_category),
            format_func=lambda x: ObligationCategory(x).label,
            key=f"{key_prefix}_category",
        )
    with c3:
        recurrence_type = st.selectbox(
            "Recurrence",
            options=[r.value for r in RecurrenceType],
            index=[r.value for r in RecurrenceType].index(default_recurrence.type),
            format_func=lambda x: RecurrenceType(x).label,
            key=f"{key_prefix}_recurrence",
        )

    with st.form(f"{key_prefix}_obligation_form"):
        name = st.text_input("Name", value=default_name, key=f"{key_prefix}_name")
        c1, c2 = st.columns(2)
        with c1:
            principal = st.number_input(
                "Total amount", min_value=0.0, value=default_principal,
                step=100.0, key=f"{key_prefix}_principal")
        with c2:
            interest_rate = st.number_input(
                "Annual interest rate (%)", min_value=0.0, max_value=100.0,
                value=default_rate, step=0.1, format="%.2f",
                key=f"{key_prefix}_rate",
                disabled=(category != ObligationCategory.BANK_LOAN.value),
            )

        c1, c2 = st.columns(2)
        with c1:
            start_date = st.date_input("Start date", value=default_start, key=f"{key_prefix}_start")
        with c2:
            due_date = st.date_input("Due date", value=default_due, key=f"{key_prefix}_due")

        recurrence = None
        if recurrence_type != RecurrenceType.NONE.value:
            c1, c2 = st.columns(2)
            with c1:
                end_date = st.date_input(
                    "Recurrence end date", value=default_recurrence.end_date,
                    key=f"{key_prefix}_rec_end")
            with c2:
                max_occurrences = st.number_input(
                    "Maximum occurrences (0 = unlimited)", min_value=0,
                    value=default_recurrence.max_occurrences or 0,
                    key=f"{key_prefix}_rec_max")
            recurrence = RecurrenceSettings(recurrence_type, end_date, max_occurrences or None)

        reminder_days = st.number_input(
            "Remind me this many days before the due date", min_value=0, max_value=365,
            value=default_reminder, placeholder="default", key=f"{key_prefix}_reminder")
        description = st.text_area("Description", value=default_description, key=f"{key_prefix}_description")

        submitted = st.form_submit_button("Save changes" if is_edit else "Add", width='stretch', type="primary")

        if submitted:
            return {
                "name": name,
                "principal": principal,
                "direction": direction,
                "category": category,
                "start_date": start_date,
                "due_date": due_date,
                "interest_rate": interest_rate if category == ObligationCategory.BANK_LOAN.value else None,
                "recurrence": recurrence,
                "description": description,
                "reminder_days": int(reminder_days) if reminder_days is not None else None,
            }
    return None


def render_payment_form(key_prefix: str, remaining: float) -> dict | None:
    """Payment logging form, prefilled with the remaining balance."""
    with st.form(f"{key_prefix}_payment_form"):
        c1, c2 = st.columns(2)
        with c1:
            amount = st.number_input(
                "Amount", min_value=0.0, value=max(0.0, round(remaining, 2)),
                step=10.0, key=f"{key_prefix}_amount")
        with c2:
            paid_on = st.date_input("Date", value=date.today(), key=f"{key_prefix}_date")
        c1, c2 = st.columns(2)
        with c1:
            method = st.text_input("Method", value="", key=f"{key_prefix}_method")
        with c2:
            is_partial = st.checkbox("Partial payment", key=f"{key_prefix}_partial")
        notes = st.text_input("Notes", value="", key=f"{key_prefix}_notes")

        submitted = st.form_submit_button("Log payment", width='stretch')
        if submitted:
            return {
                "amount": amount,
                "paid_on": paid_on,
                "method": method or None,
                "is_partial": is_partial,
                "notes": notes,
            }
    return None


def render_goal_form(key_prefix: str = "goal") -> dict | None:
    with st.form(f"{key_prefix}_form"):
        name = st.text_input("Goal name", key=f"{key_prefix}_name")
        target_amount = st.number_input("Target amount", min_value=0.0, step=100.0, key=f"{key_prefix}_target")
        if st.form_submit_button("Add goal", width='stretch', type="primary"):
            return {"name": name, "target_amount": target_amount}
    return None
