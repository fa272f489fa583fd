"""Interest accrual tests"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date
import pytest

from core.interest import accrual_timeline, calc_accrued_interest, is_interest_bearing


@pytest.fixture
def bank_loan(make_obligation):
    def _make(rate=12.0, **kwargs):
        kwargs.setdefault("start_date", date(2024, 1, 15))
        return make_obligation(category="bank_loan", interest_rate=rate, **kwargs)
    return _make


class TestInterestBearing:
    def test_friend_credit_never_accrues(self, make_obligation):
        ob = make_obligation(interest_rate=12.0)
        assert not is_interest_bearing(ob)
        assert calc_accrued_interest(ob, date(2025, 1, 1)) == 0

    def test_zero_rate(self, bank_loan, make_payment):
        ob = bank_loan(rate=0.0, payments=[make_payment(100, date(2024, 3, 1))])
        for today in (date(2024, 1, 15), date(2024, 6, 1), date(2030, 1, 1)):
            assert calc_accrued_interest(ob, today) == 0

    def test_archived_does_not_accrue(self, bank_loan):
        ob = bank_loan(status="defaulted")
        assert calc_accrued_interest(ob, date(2024, 6, 1)) == 0


class TestMonthlyCompounding:
    def test_three_months_without_payments(self, bank_loan):
        """Start month, the month after and the current month each charge 1%."""
        ob = bank_loan()
        accrued = calc_accrued_interest(ob, date(2024, 3, 20))
        assert accrued == pytest.approx(30.301, abs=1e-6)

    def test_start_exactly_three_months_back(self, bank_loan):
        """Both end months count, so three calendar months back compounds four times."""
        ob = bank_loan(start_date=date(2024, 1, 20))
        accrued = calc_accrued_interest(ob, date(2024, 4, 20))
        assert accrued == pytest.approx(40.60401, abs=1e-6)

    def test_balance_sequence(self, bank_loan):
        timeline = accrual_timeline(bank_loan(), date(2024, 3, 20))
        assert timeline["month"].tolist() == ["2024-01", "2024-02", "2024-03"]
        assert timeline["closing_balance"].tolist() == pytest.approx([1010.0, 1020.1, 1030.301])

    def test_payments_in_same_month_are_merged(self, bank_loan, make_payment):
        ob = bank_loan(payments=[
            make_payment(200, date(2024, 1, 16)),
            make_payment(300, date(2024, 1, 28)),
        ])
        assert calc_accrued_interest(ob, date(2024, 1, 31)) == pytest.approx(5.0)

    def test_payment_before_start_is_ignored(self, bank_loan, make_payment):
        ob = bank_loan(payments=[make_payment(100, date(2023, 12, 20))])
        assert calc_accrued_interest(ob, date(2024, 1, 31)) == pytest.approx(10.0)

    def test_full_payoff_stops_accrual(self, bank_loan, make_payment):
        ob = bank_loan(payments=[make_payment(1000, date(2024, 1, 20))])
        assert calc_accrued_interest(ob, date(2025, 1, 1)) == 0

    def test_before_start_month(self, bank_loan):
        assert calc_accrued_interest(bank_loan(), date(2023, 12, 31)) == 0
        assert accrual_timeline(bank_loan(), date(2023, 12, 31)).empty


class TestProperties:
    def test_non_decreasing_over_time(self, bank_loan, make_payment):
        ob = bank_loan(rate=9.0, payments=[make_payment(150, date(2024, 2, 10)), make_payment(80, date(2024, 5, 2))])
        values = [calc_accrued_interest(ob, date(2024, m, 28)) for m in range(1, 13)]
        assert values == sorted(values)

    def test_idempotent(self, bank_loan, make_payment):
        ob = bank_loan(payments=[make_payment(150, date(2024, 2, 10))])
        today = date(2024, 9, 1)
        assert calc_accrued_interest(ob, today) == calc_accrued_interest(ob, today)
