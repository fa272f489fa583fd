"""Record types of the ledger document and their JSON (de)serialisation.

All records are frozen; mutations build new instances with
``dataclasses.replace`` (see ``core.ledger``).
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from config.constants import (
    AutoArchive, Direction, ObligationCategory, ObligationStatus, RecurrenceType,
    LEGACY_DEBTS_KEY, LEGACY_LOANS_KEY, LEGACY_ARCHIVED_DEBTS_KEY,
    LEGACY_ARCHIVED_LOANS_KEY, LEGACY_AUTO_ARCHIVE_KEY, LEGACY_BANK_LOAN_TYPE,
)
from config.settings import DEFAULT_CURRENCY
from utils.date_utils import format_date, parse_date


@dataclass(frozen=True)
class Payment:
    payment_id: str
    amount: float
    paid_on: date
    method: Optional[str] = None
    is_partial: bool = False
    notes: str = ""


@dataclass(frozen=True)
class RecurrenceSettings:
    type: str = RecurrenceType.NONE.value
    end_date: Optional[date] = None
    max_occurrences: Optional[int] = None

    @property
    def is_recurring(self) -> bool:
        return self.type != RecurrenceType.NONE.value


@dataclass(frozen=True)
class Obligation:
    obligation_id: str
    direction: str  # i_owe / they_owe
    name: str
    principal: float
    category: str  # friend / bank_loan
    start_date: date
    due_date: Optional[date] = None
    interest_rate: Optional[float] = None
    recurrence: Optional[RecurrenceSettings] = None
    occurrence: int = 0
    status: str = ObligationStatus.ACTIVE.value
    payments: Tuple[Payment, ...] = ()
    description: str = ""
    currency: Optional[str] = None
    reminder_days: Optional[int] = None

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None and self.recurrence.is_recurring


@dataclass(frozen=True)
class SavingsGoal:
    goal_id: str
    name: str
    target_amount: float
    deposits: Tuple[Payment, ...] = ()


@dataclass(frozen=True)
class Settings:
    currency: str = DEFAULT_CURRENCY
    auto_archive: str = AutoArchive.NEVER.value


@dataclass(frozen=True)
class Document:
    obligations: Tuple[Obligation, ...] = ()
    archived: Tuple[Obligation, ...] = ()
    savings_goals: Tuple[SavingsGoal, ...] = ()
    settings: Settings = field(default_factory=Settings)


# ---- serialisation ----

def payment_to_dict(payment: Payment) -> Dict[str, Any]:
    return {
        "payment_id": payment.payment_id,
        "amount": payment.amount,
        "paid_on": format_date(payment.paid_on),
        "method": payment.method,
        "is_partial": payment.is_partial,
        "notes": payment.notes,
    }


def payment_from_dict(data: Dict[str, Any]) -> Payment:
    return Payment(
        payment_id=str(data["payment_id"]),
        amount=float(data["amount"]),
        paid_on=parse_date(data["paid_on"]),
        method=data.get("method"),
        is_partial=bool(data.get("is_partial", False)),
        notes=data.get("notes") or "",
    )


def recurrence_to_dict(recurrence: Optional[RecurrenceSettings]) -> Optional[Dict[str, Any]]:
    if recurrence is None:
        return None
    return {
        "type": recurrence.type,
        "end_date": format_date(recurrence.end_date),
        "max_occurrences": recurrence.max_occurrences,
    }


def recurrence_from_dict(data: Optional[Dict[str, Any]]) -> Optional[RecurrenceSettings]:
    if not data:
        return None
    max_occurrences = data.get("max_occurrences")
    return RecurrenceSettings(
        type=RecurrenceType(data.get("type", RecurrenceType.NONE.value)).value,
        end_date=parse_date(data.get("end_date")),
        max_occurrences=int(max_occurrences) if max_occurrences else None,
    )


def obligation_to_dict(obligation: Obligation) -> Dict[str, Any]:
    return {
        "obligation_id": obligation.obligation_id,
        "direction": obligation.direction,
        "name": obligation.name,
        "principal": obligation.principal,
        "category": obligation.category,
        "start_date": format_date(obligation.start_date),
        "due_date": format_date(obligation.due_date),
        "interest_rate": obligation.interest_rate,
        "recurrence": recurrence_to_dict(obligation.recurrence),
        "occurrence": obligation.occurrence,
        "status": obligation.status,
        "payments": [payment_to_dict(p) for p in obligation.payments],
        "description": obligation.description,
        "currency": obligation.currency,
        "reminder_days": obligation.reminder_days,
    }


def obligation_from_dict(data: Dict[str, Any]) -> Obligation:
    rate = data.get("interest_rate")
    reminder_days = data.get("reminder_days")
    return Obligation(
        obligation_id=str(data["obligation_id"]),
        direction=Direction(data["direction"]).value,
        name=data["name"],
        principal=float(data["principal"]),
        category=ObligationCategory(data.get("category", ObligationCategory.FRIEND.value)).value,
        start_date=parse_date(data["start_date"]),
        due_date=parse_date(data.get("due_date")),
        interest_rate=float(rate) if rate is not None else None,
        recurrence=recurrence_from_dict(data.get("recurrence")),
        occurrence=int(data.get("occurrence", 0)),
        status=ObligationStatus(data.get("status", ObligationStatus.ACTIVE.value)).value,
        payments=tuple(payment_from_dict(p) for p in data.get("payments", [])),
        description=data.get("description") or "",
        currency=data.get("currency"),
        reminder_days=int(reminder_days) if reminder_days is not None else None,
    )


def goal_to_dict(goal: SavingsGoal) -> Dict[str, Any]:
    return {
        "goal_id": goal.goal_id,
        "name": goal.name,
        "target_amount": goal.target_amount,
        "deposits": [payment_to_dict(p) for p in goal.deposits],
    }


def goal_from_dict(data: Dict[str, Any]) -> SavingsGoal:
    return SavingsGoal(
        goal_id=str(data["goal_id"]),
        name=data["name"],
        target_amount=float(data["target_amount"]),
        deposits=tuple(payment_from_dict(p) for p in data.get("deposits", [])),
    )


def document_to_dict(document: Document) -> Dict[str, Any]:
    return {
        "obligations": [obligation_to_dict(o) for o in document.obligations],
        "archived": [obligation_to_dict(o) for o in document.archived],
        "savings_goals": [goal_to_dict(g) for g in document.savings_goals],
        "settings": {
            "currency": document.settings.currency,
            "auto_archive": document.settings.auto_archive,
        },
    }


def document_from_dict(data: Any) -> Document:
    """Build a Document; legacy front-end documents are migrated transparently."""
    if is_legacy_document(data):
        return migrate_legacy_document(data)
    settings = data.get("settings") or {}
    return Document(
        obligations=tuple(obligation_from_dict(o) for o in data.get("obligations", [])),
        archived=tuple(obligation_from_dict(o) for o in data.get("archived", [])),
        savings_goals=tuple(goal_from_dict(g) for g in data.get("savings_goals", [])),
        settings=Settings(
            currency=settings.get("currency", DEFAULT_CURRENCY),
            auto_archive=AutoArchive(settings.get("auto_archive", AutoArchive.NEVER.value)).value,
        ),
    )


# ---- legacy documents ----

def is_legacy_document(data: Any) -> bool:
    if isinstance(data, list):
        return True
    if "loans" in data or "savings" in data:
        return True
    return any(key.startswith("loandash-") for key in data)


def _legacy_payment(data: Dict[str, Any]) -> Payment:
    return Payment(
        payment_id=str(data["id"]),
        amount=float(data["amount"]),
        paid_on=parse_date(data["date"]),
        method=data.get("method"),
        is_partial=bool(data.get("isPartial", False)),
        notes=data.get("notes") or "",
    )


def _legacy_recurrence(data: Dict[str, Any]) -> Optional[RecurrenceSettings]:
    settings = data.get("recurrenceSettings")
    if settings:
        return RecurrenceSettings(
            type=RecurrenceType(settings.get("type", RecurrenceType.NONE.value)).value,
            end_date=parse_date(settings.get("endDate")),
            max_occurrences=settings.get("maxOccurrences") or None,
        )
    if data.get("isRecurring"):
        return RecurrenceSettings(type=RecurrenceType.MONTHLY.value)
    return None


def _legacy_obligation(data: Dict[str, Any], direction: Optional[str] = None) -> Obligation:
    if direction is None:
        # Unified variant: 'I Owe' / 'They Owe'
        direction = Direction.I_OWE.value if data.get("direction") == "I Owe" else Direction.THEY_OWE.value
    category = (ObligationCategory.BANK_LOAN.value if data.get("type") == LEGACY_BANK_LOAN_TYPE
                else ObligationCategory.FRIEND.value)
    payments = data.get("payments")
    if payments is None:
        payments = data.get("repayments", [])
    rate = data.get("interestRate")
    return Obligation(
        obligation_id=str(data["id"]),
        direction=direction,
        name=data["name"],
        principal=float(data["totalAmount"]),
        category=category,
        start_date=parse_date(data["startDate"]),
        due_date=parse_date(data.get("dueDate") or data.get("returnDate")),
        interest_rate=float(rate) if rate not in (None, "") else None,
        recurrence=_legacy_recurrence(data),
        status=ObligationStatus(data.get("status", ObligationStatus.ACTIVE.value)).value,
        payments=tuple(_legacy_payment(p) for p in payments),
        description=data.get("description") or data.get("notes") or "",
        currency=data.get("currency"),
        reminder_days=data.get("reminderDays"),
    )


def _legacy_goal(data: Dict[str, Any]) -> SavingsGoal:
    return SavingsGoal(
        goal_id=str(data["id"]),
        name=data["name"],
        target_amount=float(data["goalAmount"]),
        deposits=tuple(_legacy_payment(p) for p in data.get("deposits", [])),
    )


def migrate_legacy_document(data: Any) -> Document:
    """Convert the documents written by the old JS front-ends.

    Three shapes are understood: a bare list of debts, the unified
    ``{"loans": [...], "savings": [...]}`` variant and the split
    ``loandash-*`` key/value state.
    """
    if isinstance(data, list):
        return Document(obligations=tuple(_legacy_obligation(d, Direction.I_OWE.value) for d in data))

    if "loans" in data or "savings" in data:
        return Document(
            obligations=tuple(_legacy_obligation(d) for d in data.get("loans", [])),
            savings_goals=tuple(_legacy_goal(g) for g in data.get("savings", [])),
        )

    obligations: List[Obligation] = []
    obligations.extend(_legacy_obligation(d, Direction.I_OWE.value) for d in data.get(LEGACY_DEBTS_KEY, []))
    obligations.extend(_legacy_obligation(d, Direction.THEY_OWE.value) for d in data.get(LEGACY_LOANS_KEY, []))
    archived: List[Obligation] = []
    archived.extend(_legacy_obligation(d, Direction.I_OWE.value) for d in data.get(LEGACY_ARCHIVED_DEBTS_KEY, []))
    archived.extend(_legacy_obligation(d, Direction.THEY_OWE.value) for d in data.get(LEGACY_ARCHIVED_LOANS_KEY, []))
    return Document(
        obligations=tuple(obligations),
        archived=tuple(archived),
        settings=Settings(
            auto_archive=AutoArchive(data.get(LEGACY_AUTO_ARCHIVE_KEY, AutoArchive.NEVER.value)).value,
        ),
    )
