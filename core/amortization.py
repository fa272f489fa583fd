"""Fixed-payment amortization projections.

These are "what would the payments look like" figures for a hypothetical
loan; they never look at an obligation's actual payment history. All maths is
plain floating point, so results can differ by a few cents from a
banker's-rounding reference.
"""
from datetime import date

import pandas as pd
from scipy import optimize

from config.constants import AMORTIZATION_COLUMNS
from utils.date_utils import add_months


def _check_inputs(principal: float, term_months: int):
    if principal <= 0:
        raise ValueError("Principal must be positive")
    if term_months <= 0:
        raise ValueError("Term must be positive")


def calc_monthly_payment(principal: float, annual_rate: float, term_months: int) -> float:
    """Equal monthly payment.

        payment = P * r * (1 + r)^n / ((1 + r)^n - 1),  r = annual_rate / 100 / 12

    With a zero rate this is simply ``P / n``.
    """
    _check_inputs(principal, term_months)
    if annual_rate == 0:
        return principal / term_months
    r = annual_rate / 100 / 12
    factor = (1 + r) ** term_months
    return principal * r * factor / (factor - 1)


def calc_total_interest(principal: float, annual_rate: float, term_months: int) -> float:
    if annual_rate == 0:
        _check_inputs(principal, term_months)
        return 0.0
    return calc_monthly_payment(principal, annual_rate, term_months) * term_months - principal


def generate_amortization_schedule(
    principal: float,
    annual_rate: float,
    term_months: int,
    start_date: date,
) -> pd.DataFrame:
    """One row per payment, dated ``start_date + n`` months (n from 1)."""
    monthly_payment = calc_monthly_payment(principal, annual_rate, term_months)
    r = annual_rate / 100 / 12
    records = []
    remaining = principal

    for n in range(1, term_months + 1):
        if annual_rate == 0:
            interest = 0.0
            prin = monthly_payment
            balance = principal - n * monthly_payment
        else:
            interest = remaining * r
            prin = monthly_payment - interest
            remaining -= prin
            balance = remaining

        records.append({
            "payment_number": n,
            "payment_date": add_months(start_date, n).isoformat(),
            "payment_amount": monthly_payment,
            "principal_amount": prin,
            "interest_amount": interest,
            "remaining_balance": max(0.0, balance),
        })

    return pd.DataFrame(records, columns=AMORTIZATION_COLUMNS)


def calc_effective_annual_rate(principal: float, schedule: pd.DataFrame) -> float:
    """Annualised IRR of the schedule's cash flows, in percent.

    Returns 0.0 when no root can be bracketed (e.g. an empty schedule).
    """
    if schedule.empty or principal <= 0:
        return 0.0
    cash_flows = [-principal] + schedule["payment_amount"].tolist()

    def npv(rate):
        return sum(cf / (1 + rate) ** i for i, cf in enumerate(cash_flows))

    try:
        monthly_irr = optimize.brentq(npv, -0.5, 1.0)
    except (ValueError, RuntimeError):
        return 0.0
    annual_irr = (1 + monthly_irr) ** 12 - 1
    return round(annual_irr * 100, 4)
