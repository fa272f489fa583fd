import math
from datetime import date
from typing import List, Optional, Tuple

from config.constants import (
    Direction, ObligationCategory, ObligationStatus, RecurrenceType, TERMINAL_STATUSES,
)
from config.settings import MAX_TERM_MONTHS


class ValidationError(ValueError):
    """Raised with every violation found, never just the first one."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def _is_positive_number(value) -> bool:
    if value is None:
        return False
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False
    return not math.isnan(value) and value > 0


def validate_obligation(
    name: str,
    principal: float,
    direction: str,
    category: str,
    start_date: Optional[date],
    due_date: Optional[date] = None,
    interest_rate: Optional[float] = None,
    reminder_days: Optional[int] = None,
) -> Tuple[bool, List[str]]:
    """Validate obligation input; returns (is_valid, errors)."""
    errors = []
    if not name or not name.strip():
        errors.append("Counterparty name is required.")

    if not _is_positive_number(principal):
        errors.append("Total amount must be a positive number.")

    if direction not in [e.value for e in Direction]:
        errors.append(f"Invalid direction: {direction}")

    if category not in [e.value for e in ObligationCategory]:
        errors.append(f"Invalid category: {category}")

    if start_date is None:
        errors.append("Start date is required.")
    elif due_date is not None and due_date < start_date:
        errors.append("Due date cannot be before start date.")

    if interest_rate is not None:
        try:
            rate = float(interest_rate)
        except (TypeError, ValueError):
            rate = math.nan
        if math.isnan(rate) or rate < 0:
            errors.append("Interest rate must be a valid number (0 or greater).")

    if reminder_days is not None and reminder_days < 0:
        errors.append("Reminder days cannot be negative.")

    return not errors, errors


def validate_payment(amount: float, paid_on: Optional[date]) -> Tuple[bool, List[str]]:
    errors = []
    if not _is_positive_number(amount):
        errors.append("Payment amount must be a positive number.")
    if paid_on is None:
        errors.append("Payment date is required.")
    return not errors, errors


def validate_savings_goal(name: str, target_amount: float) -> Tuple[bool, List[str]]:
    errors = []
    if not name or not name.strip():
        errors.append("Goal name is required.")
    if not _is_positive_number(target_amount):
        errors.append("Goal amount must be a positive number.")
    return not errors, errors


def validate_recurrence(
    recurrence_type: str,
    end_date: Optional[date] = None,
    max_occurrences: Optional[int] = None,
    start_date: Optional[date] = None,
) -> Tuple[bool, List[str]]:
    errors = []
    if recurrence_type not in [e.value for e in RecurrenceType]:
        errors.append(f"Invalid recurrence type: {recurrence_type}")
    if max_occurrences is not None and max_occurrences < 1:
        errors.append("Maximum occurrences must be at least 1.")
    if end_date is not None and start_date is not None and end_date < start_date:
        errors.append("Recurrence end date cannot be before start date.")
    return not errors, errors


def validate_amortization_input(
    principal: float,
    annual_rate: float,
    term_months: int,
) -> Tuple[bool, List[str]]:
    """Reject inputs the amortization formulas cannot handle (zero principal/term)."""
    errors = []
    if not _is_positive_number(principal):
        errors.append("Principal must be a positive number.")
    if annual_rate is None or math.isnan(annual_rate) or annual_rate < 0:
        errors.append("Annual rate must be 0 or greater.")
    if term_months is None or not 1 <= term_months <= MAX_TERM_MONTHS:
        errors.append(f"Term must be between 1 and {MAX_TERM_MONTHS} months.")
    return not errors, errors


def validate_status_transition(current: str, new: str) -> Tuple[bool, List[str]]:
    """Only active -> completed / defaulted is allowed; both are terminal."""
    if current != ObligationStatus.ACTIVE.value:
        return False, [f"Obligation is already {current}."]
    if new not in TERMINAL_STATUSES:
        return False, [f"Cannot move an active obligation to '{new}'."]
    return True, []
