"""Balance calculator tests"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import pytest

from core.balance import (
    calc_balance, calc_progress_percent, calc_remaining, calc_total_paid, is_overdue, is_settled,
)


class TestTotalPaid:
    def test_sum_of_amounts(self, make_payment):
        payments = [make_payment(50, date(2024, 1, 5)), make_payment(25.5, date(2024, 2, 1))]
        assert calc_total_paid(payments) == pytest.approx(75.5)

    def test_order_does_not_matter(self, make_payment):
        payments = [make_payment(a, date(2024, 1, i + 1)) for i, a in enumerate([10.1, 20.2, 30.3, 0.4])]
        assert calc_total_paid(payments) == pytest.approx(calc_total_paid(list(reversed(payments))))

    def test_empty(self):
        assert calc_total_paid([]) == 0


class TestSettled:
    """Paid-off threshold is one cent"""

    def test_exactly_one_cent_is_settled(self, make_obligation, make_payment):
        ob = make_obligation(principal=100, payments=[make_payment(99.99, date(2024, 1, 2))])
        assert calc_balance(ob, date(2024, 2, 1)).is_paid_off

    def test_two_cents_is_not_settled(self, make_obligation, make_payment):
        ob = make_obligation(principal=100, payments=[make_payment(99.98, date(2024, 1, 2))])
        assert not calc_balance(ob, date(2024, 2, 1)).is_paid_off

    def test_overpayment_is_settled(self):
        assert is_settled(-5.0)


class TestBalance:
    def test_scenario_paid_in_full_same_month(self, make_obligation, make_payment):
        ob = make_obligation(principal=500, payments=[make_payment(500, date(2024, 1, 20))])
        summary = calc_balance(ob, date(2024, 3, 1))
        assert summary.remaining == 0
        assert summary.is_paid_off
        assert summary.progress_percent == 100

    def test_partial_payment(self, make_obligation, make_payment):
        ob = make_obligation(principal=1000, payments=[make_payment(250, date(2024, 1, 20))])
        summary = calc_balance(ob, date(2024, 3, 1))
        assert summary.total_paid == 250
        assert summary.accrued_interest == 0
        assert summary.remaining == 750
        assert summary.progress_percent == pytest.approx(25.0)
        assert calc_remaining(ob, date(2024, 3, 1)) == 750

    def test_bank_loan_includes_interest(self, make_obligation):
        ob = make_obligation(category="bank_loan", interest_rate=12.0)
        summary = calc_balance(ob, date(2024, 3, 20))
        assert summary.remaining == pytest.approx(1000 + summary.accrued_interest)
        assert summary.accrued_interest > 0

    def test_progress_clamped(self):
        assert calc_progress_percent(150, 100) == 100
        assert calc_progress_percent(0, 0) == 100
        assert calc_progress_percent(-10, 100) == 0

    def test_idempotent(self, make_obligation, make_payment):
        ob = make_obligation(category="bank_loan", interest_rate=7.5,
                             payments=[make_payment(120, date(2024, 2, 3))])
        today = date(2024, 6, 30)
        assert calc_balance(ob, today) == calc_balance(ob, today)


class TestOverdue:
    def test_past_due_and_unpaid(self, make_obligation):
        ob = make_obligation(due_date=date(2024, 2, 1))
        assert is_overdue(ob, date(2024, 2, 2))

    def test_due_today_is_not_overdue(self, make_obligation):
        ob = make_obligation(due_date=date(2024, 2, 1))
        assert not is_overdue(ob, date(2024, 2, 1))

    def test_paid_off_is_never_overdue(self, make_obligation, make_payment):
        ob = make_obligation(due_date=date(2024, 2, 1), payments=[make_payment(1000, date(2024, 1, 15))])
        assert not is_overdue(ob, date(2024, 5, 1))

    def test_no_due_date(self, make_obligation):
        assert not is_overdue(make_obligation(), date(2030, 1, 1))
