"""Input validation tests"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import math

import pytest

from data_manager.data_validator import (
    ValidationError,
    validate_amortization_input,
    validate_obligation,
    validate_payment,
    validate_recurrence,
    validate_savings_goal,
    validate_status_transition,
)


class TestObligation:
    def test_valid(self):
        ok, errors = validate_obligation("Alice", 100, "i_owe", "friend", date(2024, 1, 1), date(2024, 2, 1))
        assert ok
        assert errors == []

    def test_reports_every_problem(self):
        ok, errors = validate_obligation("  ", -5, "i_owe", "friend", date(2024, 2, 1), date(2024, 1, 1), -1)
        assert not ok
        assert errors == [
            "Counterparty name is required.",
            "Total amount must be a positive number.",
            "Due date cannot be before start date.",
            "Interest rate must be a valid number (0 or greater).",
        ]

    def test_nan_amount(self):
        ok, errors = validate_obligation("Bob", math.nan, "they_owe", "friend", date(2024, 1, 1))
        assert not ok
        assert "Total amount must be a positive number." in errors

    def test_unknown_enums_and_missing_start(self):
        ok, errors = validate_obligation("Bob", 10, "sideways", "casino", None)
        assert len(errors) == 3

    def test_negative_reminder_days(self):
        ok, errors = validate_obligation("Bob", 10, "i_owe", "friend", date(2024, 1, 1), reminder_days=-1)
        assert errors == ["Reminder days cannot be negative."]

    def test_zero_rate_is_valid(self):
        ok, _ = validate_obligation("Bank", 1000, "i_owe", "bank_loan", date(2024, 1, 1), interest_rate=0)
        assert ok


class TestPayment:
    @pytest.mark.parametrize("amount", [0, -1, None, "abc"])
    def test_rejects_non_positive(self, amount):
        ok, errors = validate_payment(amount, date(2024, 1, 1))
        assert not ok
        assert errors == ["Payment amount must be a positive number."]

    def test_missing_date(self):
        ok, errors = validate_payment(10, None)
        assert errors == ["Payment date is required."]


class TestOtherInputs:
    def test_goal(self):
        ok, errors = validate_savings_goal("", 0)
        assert errors == ["Goal name is required.", "Goal amount must be a positive number."]

    def test_recurrence(self):
        ok, errors = validate_recurrence("monthly", date(2023, 1, 1), 0, date(2024, 1, 1))
        assert not ok
        assert len(errors) == 2
        assert validate_recurrence("daily")[0] is False

    def test_amortization_input(self):
        assert validate_amortization_input(1000, 5, 12) == (True, [])
        ok, errors = validate_amortization_input(0, -1, 0)
        assert len(errors) == 3

    def test_status_transition(self):
        assert validate_status_transition("active", "completed") == (True, [])
        assert validate_status_transition("active", "defaulted") == (True, [])
        assert validate_status_transition("completed", "defaulted") == (False, ["Obligation is already completed."])
        assert not validate_status_transition("active", "active")[0]


class TestValidationError:
    def test_keeps_all_errors(self):
        exc = ValidationError(["a", "b"])
        assert exc.errors == ["a", "b"]
        assert str(exc) == "a; b"
        assert isinstance(exc, ValueError)
