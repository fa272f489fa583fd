"""Live balance figures for a single obligation."""
import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

import numpy as np

from config.settings import PAID_OFF_EPSILON
from core.interest import calc_accrued_interest
from data_manager.schema import Obligation, Payment


@dataclass(frozen=True)
class BalanceSummary:
    total_paid: float
    accrued_interest: float
    remaining: float
    is_paid_off: bool
    progress_percent: float


def calc_total_paid(payments: Iterable[Payment]) -> float:
    return sum(p.amount for p in payments)


def is_settled(remaining: float) -> bool:
    """Paid off once no more than one cent is left (float noise included)."""
    return remaining <= PAID_OFF_EPSILON or math.isclose(remaining, PAID_OFF_EPSILON, abs_tol=1e-9)


def calc_progress_percent(paid: float, owed: float) -> float:
    if owed == 0:
        return 100.0
    return float(np.clip(paid / owed * 100, 0, 100))


def calc_balance(obligation: Obligation, today: Optional[date] = None) -> BalanceSummary:
    """Total paid, accrued interest, remaining and progress as of ``today``.

    Accrued interest is zero for anything that is not an active
    interest-bearing obligation, so the same formula covers both cases.
    """
    total_paid = calc_total_paid(obligation.payments)
    accrued = calc_accrued_interest(obligation, today)
    owed = obligation.principal + accrued
    remaining = owed - total_paid
    return BalanceSummary(
        total_paid=total_paid,
        accrued_interest=accrued,
        remaining=remaining,
        is_paid_off=is_settled(remaining),
        progress_percent=calc_progress_percent(total_paid, owed),
    )


def calc_remaining(obligation: Obligation, today: Optional[date] = None) -> float:
    return calc_balance(obligation, today).remaining


def is_overdue(obligation: Obligation, today: Optional[date] = None) -> bool:
    """Unpaid and past its due date. Obligations without a due date never are."""
    if obligation.due_date is None:
        return False
    today = today or date.today()
    return obligation.due_date < today and not calc_balance(obligation, today).is_paid_off
