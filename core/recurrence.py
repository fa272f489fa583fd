"""Due-date sequences for repeating obligations."""
from datetime import date, timedelta
from typing import List, Optional

from config.constants import RecurrenceType
from config.settings import UPCOMING_DATES_COUNT
from data_manager.schema import RecurrenceSettings
from utils.date_utils import add_months

_DAY_STEPS = {
    RecurrenceType.WEEKLY.value: 7,
    RecurrenceType.BI_WEEKLY.value: 14,
}

_MONTH_STEPS = {
    RecurrenceType.MONTHLY.value: 1,
    RecurrenceType.QUARTERLY.value: 3,
}


def calc_next_due_date(
    current_due: date,
    settings: RecurrenceSettings,
    occurrence: int = 0,
) -> Optional[date]:
    """Next due date after ``current_due``, or None when the series has ended.

    ``occurrence`` is the 0-based index of the current instance; once it
    reaches ``max_occurrences`` no further date is produced.
    """
    if settings.type == RecurrenceType.NONE.value:
        return None

    if settings.max_occurrences and occurrence >= settings.max_occurrences:
        return None

    if settings.type in _DAY_STEPS:
        next_due = current_due + timedelta(days=_DAY_STEPS[settings.type])
    elif settings.type in _MONTH_STEPS:
        next_due = add_months(current_due, _MONTH_STEPS[settings.type])
    else:
        return None

    if settings.end_date and next_due > settings.end_date:
        return None

    return next_due


def generate_upcoming_dates(
    start: date,
    settings: RecurrenceSettings,
    count: int = UPCOMING_DATES_COUNT,
    occurrence: int = 0,
) -> List[date]:
    """Up to ``count`` future due dates, stopping early when the series ends."""
    dates = []
    current = start
    for i in range(count):
        next_due = calc_next_due_date(current, settings, occurrence + i)
        if next_due is None:
            break
        dates.append(next_due)
        current = next_due
    return dates


def describe_recurrence(settings: Optional[RecurrenceSettings]) -> str:
    if settings is None or not settings.is_recurring:
        return RecurrenceType.NONE.label

    description = RecurrenceType(settings.type).label
    if settings.max_occurrences:
        description += f" ({settings.max_occurrences} times)"
    elif settings.end_date:
        description += f" (until {settings.end_date.isoformat()})"
    return description
