"""Recurrence scheduler tests"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date

from core.recurrence import calc_next_due_date, describe_recurrence, generate_upcoming_dates
from data_manager.schema import RecurrenceSettings


class TestNextDueDate:
    def test_none_type(self):
        assert calc_next_due_date(date(2024, 1, 15), RecurrenceSettings("none")) is None

    def test_steps(self):
        start = date(2024, 1, 15)
        assert calc_next_due_date(start, RecurrenceSettings("weekly")) == date(2024, 1, 22)
        assert calc_next_due_date(start, RecurrenceSettings("bi-weekly")) == date(2024, 1, 29)
        assert calc_next_due_date(start, RecurrenceSettings("monthly")) == date(2024, 2, 15)
        assert calc_next_due_date(start, RecurrenceSettings("quarterly")) == date(2024, 4, 15)

    def test_month_end_is_clamped(self):
        assert calc_next_due_date(date(2024, 1, 31), RecurrenceSettings("monthly")) == date(2024, 2, 29)

    def test_stops_at_max_occurrences(self):
        settings = RecurrenceSettings("monthly", max_occurrences=2)
        assert calc_next_due_date(date(2024, 1, 15), settings, occurrence=1) == date(2024, 2, 15)
        assert calc_next_due_date(date(2024, 1, 15), settings, occurrence=2) is None

    def test_end_date_is_inclusive(self):
        settings = RecurrenceSettings("monthly", end_date=date(2024, 2, 15))
        assert calc_next_due_date(date(2024, 1, 15), settings) == date(2024, 2, 15)
        assert calc_next_due_date(date(2024, 2, 15), settings) is None


class TestUpcomingDates:
    def test_max_occurrences_cuts_the_list(self):
        settings = RecurrenceSettings("monthly", max_occurrences=3)
        dates = generate_upcoming_dates(date(2024, 1, 15), settings, count=5)
        assert dates == [date(2024, 2, 15), date(2024, 3, 15), date(2024, 4, 15)]

    def test_end_date(self):
        settings = RecurrenceSettings("weekly", end_date=date(2024, 1, 20))
        assert generate_upcoming_dates(date(2024, 1, 1), settings, count=5) == [date(2024, 1, 8), date(2024, 1, 15)]

    def test_unbounded(self):
        dates = generate_upcoming_dates(date(2024, 1, 1), RecurrenceSettings("bi-weekly"), count=4)
        assert len(dates) == 4
        assert dates[-1] == date(2024, 2, 26)

    def test_later_occurrence_has_fewer_left(self):
        settings = RecurrenceSettings("monthly", max_occurrences=3)
        assert len(generate_upcoming_dates(date(2024, 3, 15), settings, count=5, occurrence=2)) == 1


class TestDescribe:
    def test_descriptions(self):
        assert describe_recurrence(None) == "One-time"
        assert describe_recurrence(RecurrenceSettings("monthly", max_occurrences=3)) == "Monthly (3 times)"
        assert describe_recurrence(RecurrenceSettings("weekly", end_date=date(2024, 6, 1))) == "Weekly (until 2024-06-01)"
