"""
Ledger mutations.

Every function takes the current ``Document`` and returns a new one; nothing
is modified in place. Input is validated first and all violations are raised
together as a ``ValidationError`` before any new document is built.
"""
from dataclasses import replace
from datetime import date, timedelta
from typing import Callable, Optional, Tuple

from config.constants import AutoArchive, ObligationCategory, ObligationStatus
from config.logging_config import get_logger
from config.settings import SUPPORTED_CURRENCIES
from core.balance import calc_balance
from core.recurrence import calc_next_due_date
from data_manager.data_validator import (
    ValidationError,
    validate_obligation,
    validate_payment,
    validate_recurrence,
    validate_savings_goal,
    validate_status_transition,
)
from data_manager.schema import Document, Obligation, Payment, RecurrenceSettings, SavingsGoal
from utils.id_generator import generate_goal_id, generate_obligation_id, generate_payment_id

logger = get_logger("ledger")

IdFactory = Callable[[], str]

EDITABLE_FIELDS = {
    "name", "principal", "direction", "category", "start_date", "due_date",
    "interest_rate", "recurrence", "description", "currency", "reminder_days",
}


def _index_of(items: Tuple, attr: str, item_id: str) -> int:
    for i, item in enumerate(items):
        if getattr(item, attr) == item_id:
            return i
    raise KeyError(item_id)


def _replace_at(items: Tuple, index: int, new_item) -> Tuple:
    return items[:index] + (new_item,) + items[index + 1:]


def _remove_at(items: Tuple, index: int) -> Tuple:
    return items[:index] + items[index + 1:]


def _validate_obligation_record(obligation: Obligation):
    ok, errors = validate_obligation(
        obligation.name, obligation.principal, obligation.direction, obligation.category,
        obligation.start_date, obligation.due_date, obligation.interest_rate,
        obligation.reminder_days,
    )
    if obligation.recurrence is not None:
        _, recurrence_errors = validate_recurrence(
            obligation.recurrence.type, obligation.recurrence.end_date,
            obligation.recurrence.max_occurrences, obligation.start_date,
        )
        errors = errors + recurrence_errors
    if errors:
        raise ValidationError(errors)


def _normalize(obligation: Obligation) -> Obligation:
    rate = obligation.interest_rate
    # A rate is only meaningful on bank loans
    if obligation.category != ObligationCategory.BANK_LOAN.value:
        rate = None
    return replace(
        obligation,
        principal=float(obligation.principal),
        interest_rate=float(rate) if rate is not None else None,
    )


# ---- obligations ----

def create_obligation(
    document: Document,
    name: str,
    principal: float,
    direction: str,
    category: str,
    start_date: date,
    due_date: Optional[date] = None,
    interest_rate: Optional[float] = None,
    recurrence: Optional[RecurrenceSettings] = None,
    description: str = "",
    currency: Optional[str] = None,
    reminder_days: Optional[int] = None,
    id_factory: IdFactory = generate_obligation_id,
) -> Document:
    """Append a new active obligation with an empty payment list."""
    obligation = Obligation(
        obligation_id=id_factory(),
        direction=direction,
        name=name.strip() if name else name,
        principal=principal,
        category=category,
        start_date=start_date,
        due_date=due_date,
        interest_rate=interest_rate,
        recurrence=recurrence,
        description=description,
        currency=currency,
        reminder_days=reminder_days,
    )
    _validate_obligation_record(obligation)
    obligation = _normalize(obligation)
    logger.info("Created obligation %s (%s, %s)", obligation.obligation_id, obligation.direction, obligation.name)
    return replace(document, obligations=document.obligations + (obligation,))


def update_obligation(document: Document, obligation_id: str, **changes) -> Document:
    """Edit descriptive fields of an active obligation; payments and status are untouched."""
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

    index = _index_of(document.obligations, "obligation_id", obligation_id)
    updated = replace(document.obligations[index], **changes)
    _validate_obligation_record(updated)
    updated = _normalize(updated)
    logger.info("Updated obligation %s: %s", obligation_id, ", ".join(sorted(changes)))
    return replace(document, obligations=_replace_at(document.obligations, index, updated))


def _spawn_successor(
    paid: Obligation,
    today: date,
    id_factory: IdFactory,
) -> Optional[Obligation]:
    """Next instance of a recurring obligation, or None when the series has ended.

    An instance settled late skips the due dates already behind ``today``,
    as far as the series allows. The start date never falls after the due date.
    """
    next_due = calc_next_due_date(paid.due_date or today, paid.recurrence, paid.occurrence)
    if next_due is None:
        return None
    occurrence = paid.occurrence + 1
    while next_due < today:
        later = calc_next_due_date(next_due, paid.recurrence, occurrence)
        if later is None:
            break
        next_due = later
        occurrence += 1
    return replace(
        paid,
        obligation_id=id_factory(),
        payments=(),
        start_date=min(today, next_due),
        due_date=next_due,
        occurrence=occurrence,
        status=ObligationStatus.ACTIVE.value,
    )


def add_payment(
    document: Document,
    obligation_id: str,
    amount: float,
    paid_on: date,
    method: Optional[str] = None,
    is_partial: bool = False,
    notes: str = "",
    today: Optional[date] = None,
    id_factory: IdFactory = generate_payment_id,
    obligation_id_factory: IdFactory = generate_obligation_id,
) -> Document:
    """Log a payment against an active obligation.

    When the payment settles a recurring obligation, the settled instance is
    archived as completed and replaced by its successor (empty payments,
    started today, due one recurrence step later). A settled one-off
    obligation is archived straight away when auto-archive is ``immediate``.
    """
    ok, errors = validate_payment(amount, paid_on)
    if not ok:
        raise ValidationError(errors)
    today = today or date.today()

    index = _index_of(document.obligations, "obligation_id", obligation_id)
    obligation = document.obligations[index]
    payment = Payment(
        payment_id=id_factory(),
        amount=float(amount),
        paid_on=paid_on,
        method=method,
        is_partial=is_partial,
        notes=notes,
    )
    updated = replace(obligation, payments=obligation.payments + (payment,))
    summary = calc_balance(updated, today)
    logger.info("Payment of %.2f logged on %s (remaining %.2f)", payment.amount, obligation_id, summary.remaining)

    if not summary.is_paid_off:
        return replace(document, obligations=_replace_at(document.obligations, index, updated))

    completed = replace(updated, status=ObligationStatus.COMPLETED.value)
    if updated.is_recurring:
        successor = _spawn_successor(updated, today, obligation_id_factory)
        if successor is not None:
            logger.info("Recurring obligation %s settled, next instance %s due %s",
                        obligation_id, successor.obligation_id, successor.due_date)
            obligations = _replace_at(document.obligations, index, successor)
        else:
            logger.info("Recurring obligation %s settled, series has ended", obligation_id)
            obligations = _remove_at(document.obligations, index)
        return replace(document, obligations=obligations, archived=document.archived + (completed,))

    if document.settings.auto_archive == AutoArchive.IMMEDIATE.value:
        logger.info("Obligation %s settled and auto-archived", obligation_id)
        return replace(
            document,
            obligations=_remove_at(document.obligations, index),
            archived=document.archived + (completed,),
        )

    return replace(document, obligations=_replace_at(document.obligations, index, updated))


def archive_obligation(document: Document, obligation_id: str, status: str) -> Document:
    """Move an active obligation to the archive as completed or defaulted."""
    index = _index_of(document.obligations, "obligation_id", obligation_id)
    obligation = document.obligations[index]
    ok, errors = validate_status_transition(obligation.status, status)
    if not ok:
        raise ValueError(errors[0])
    logger.info("Archived obligation %s as %s", obligation_id, status)
    return replace(
        document,
        obligations=_remove_at(document.obligations, index),
        archived=document.archived + (replace(obligation, status=status),),
    )


def delete_archived(document: Document, obligation_id: str) -> Document:
    """Permanently drop an archived obligation and its payments."""
    index = _index_of(document.archived, "obligation_id", obligation_id)
    logger.info("Deleted archived obligation %s", obligation_id)
    return replace(document, archived=_remove_at(document.archived, index))


def apply_auto_archive(document: Document, today: Optional[date] = None) -> Document:
    """Archive settled one-off obligations once the configured delay has passed.

    The delay is counted from the latest payment date.
    """
    delay = AutoArchive(document.settings.auto_archive).delay_days
    if delay is None:
        return document
    today = today or date.today()

    keep, moved = [], []
    for o in document.obligations:
        if o.is_recurring or not o.payments or not calc_balance(o, today).is_paid_off:
            keep.append(o)
            continue
        last_paid = max(p.paid_on for p in o.payments)
        if last_paid + timedelta(days=delay) <= today:
            moved.append(replace(o, status=ObligationStatus.COMPLETED.value))
        else:
            keep.append(o)

    if not moved:
        return document
    logger.info("Auto-archived %d settled obligation(s)", len(moved))
    return replace(document, obligations=tuple(keep), archived=document.archived + tuple(moved))


# ---- savings goals ----

def create_savings_goal(
    document: Document,
    name: str,
    target_amount: float,
    id_factory: IdFactory = generate_goal_id,
) -> Document:
    ok, errors = validate_savings_goal(name, target_amount)
    if not ok:
        raise ValidationError(errors)
    goal = SavingsGoal(goal_id=id_factory(), name=name.strip(), target_amount=float(target_amount))
    logger.info("Created savings goal %s (%s)", goal.goal_id, goal.name)
    return replace(document, savings_goals=document.savings_goals + (goal,))


def add_deposit(
    document: Document,
    goal_id: str,
    amount: float,
    paid_on: date,
    notes: str = "",
    id_factory: IdFactory = generate_payment_id,
) -> Document:
    ok, errors = validate_payment(amount, paid_on)
    if not ok:
        raise ValidationError(errors)
    index = _index_of(document.savings_goals, "goal_id", goal_id)
    goal = document.savings_goals[index]
    deposit = Payment(payment_id=id_factory(), amount=float(amount), paid_on=paid_on, notes=notes)
    updated = replace(goal, deposits=goal.deposits + (deposit,))
    logger.info("Deposit of %.2f added to goal %s", deposit.amount, goal_id)
    return replace(document, savings_goals=_replace_at(document.savings_goals, index, updated))


def delete_savings_goal(document: Document, goal_id: str) -> Document:
    index = _index_of(document.savings_goals, "goal_id", goal_id)
    logger.info("Deleted savings goal %s", goal_id)
    return replace(document, savings_goals=_remove_at(document.savings_goals, index))


# ---- settings ----

def update_settings(
    document: Document,
    currency: Optional[str] = None,
    auto_archive: Optional[str] = None,
) -> Document:
    errors = []
    if currency is not None and currency not in SUPPORTED_CURRENCIES:
        errors.append(f"Unsupported currency: {currency}")
    if auto_archive is not None and auto_archive not in [e.value for e in AutoArchive]:
        errors.append(f"Invalid auto-archive setting: {auto_archive}")
    if errors:
        raise ValidationError(errors)

    settings = document.settings
    if currency is not None:
        settings = replace(settings, currency=currency)
    if auto_archive is not None:
        settings = replace(settings, auto_archive=auto_archive)
    return replace(document, settings=settings)
