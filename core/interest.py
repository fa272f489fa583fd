"""
Accrued interest for interest-bearing obligations.

Interest is never stored: it is recomputed from the payment history and the
date passed in as ``today``, compounding monthly. Calling this again on a
later date with no new payments yields a larger figure.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, Iterator, Optional

import pandas as pd

from config.constants import ACCRUAL_TIMELINE_COLUMNS, ObligationCategory, ObligationStatus
from data_manager.schema import Obligation
from utils.date_utils import add_months, month_key, month_start


def is_interest_bearing(obligation: Obligation) -> bool:
    return (
        obligation.category == ObligationCategory.BANK_LOAN.value
        and obligation.interest_rate is not None
        and obligation.interest_rate > 0
    )


def _payments_by_month(obligation: Obligation) -> Dict[str, float]:
    """Sum payment amounts per YYYY-MM of their own date."""
    buckets: Dict[str, float] = defaultdict(float)
    for p in obligation.payments:
        buckets[month_key(p.paid_on)] += p.amount
    return buckets


def _iter_accrual(obligation: Obligation, today: date) -> Iterator[dict]:
    """Walk month by month from the start month up to ``today``.

    Payments logged in a month are netted against the balance first; interest
    is then charged on what is left and capitalised. The walk ends once the
    balance is extinguished.
    """
    monthly_rate = obligation.interest_rate / 100 / 12
    buckets = _payments_by_month(obligation)
    start_key = month_key(obligation.start_date)

    balance = obligation.principal
    accrued = 0.0
    cursor = month_start(obligation.start_date)
    while cursor <= today and balance > 0:
        key = month_key(cursor)
        opening = balance
        # Payments dated before the obligation began are never netted
        paid = buckets.get(key, 0.0) if key >= start_key else 0.0
        balance -= paid

        interest = 0.0
        if balance > 0:
            interest = balance * monthly_rate
            accrued += interest
            balance += interest

        yield {
            "month": key,
            "opening_balance": opening,
            "payments": paid,
            "interest": interest,
            "closing_balance": balance,
            "accrued_interest": accrued,
        }
        cursor = add_months(cursor, 1)


def calc_accrued_interest(obligation: Obligation, today: Optional[date] = None) -> float:
    """Interest accrued on an active, interest-bearing obligation as of ``today``."""
    if not is_interest_bearing(obligation) or obligation.status != ObligationStatus.ACTIVE.value:
        return 0.0
    today = today or date.today()

    accrued = 0.0
    for row in _iter_accrual(obligation, today):
        accrued = row["accrued_interest"]
    return max(0.0, accrued)


def accrual_timeline(obligation: Obligation, today: Optional[date] = None) -> pd.DataFrame:
    """Per-month breakdown of the accrual walk (empty when no interest applies)."""
    if not is_interest_bearing(obligation) or obligation.status != ObligationStatus.ACTIVE.value:
        return pd.DataFrame(columns=ACCRUAL_TIMELINE_COLUMNS)
    today = today or date.today()
    return pd.DataFrame(list(_iter_accrual(obligation, today)), columns=ACCRUAL_TIMELINE_COLUMNS)
