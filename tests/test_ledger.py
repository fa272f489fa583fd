"""Ledger mutation tests"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dataclasses import replace
from datetime import date
from itertools import count

import pytest

from core import ledger
from data_manager.data_validator import ValidationError
from data_manager.schema import Document, RecurrenceSettings, Settings


def _ids(prefix):
    counter = count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def doc():
    return ledger.create_obligation(
        Document(), "Alice", 100, "i_owe", "friend", date(2024, 1, 1),
        due_date=date(2024, 1, 15), id_factory=_ids("OB"),
    )


def _pay(document, obligation_id, amount, paid_on=date(2024, 1, 10), today=date(2024, 1, 10)):
    return ledger.add_payment(
        document, obligation_id, amount, paid_on, today=today,
        id_factory=_ids("PM"), obligation_id_factory=_ids("NEXT"),
    )


class TestCreate:
    def test_appends_active_record(self, doc):
        assert len(doc.obligations) == 1
        ob = doc.obligations[0]
        assert ob.obligation_id == "OB-1"
        assert ob.status == "active"
        assert ob.payments == ()

    def test_input_document_is_untouched(self):
        before = Document()
        after = ledger.create_obligation(before, "Bob", 50, "they_owe", "friend", date(2024, 1, 1))
        assert before.obligations == ()
        assert len(after.obligations) == 1

    def test_all_errors_raised_together(self):
        with pytest.raises(ValidationError) as exc_info:
            ledger.create_obligation(Document(), "", 0, "i_owe", "friend", date(2024, 2, 1),
                                     due_date=date(2024, 1, 1))
        assert len(exc_info.value.errors) == 3

    def test_rate_dropped_for_friend_credit(self):
        document = ledger.create_obligation(Document(), "Bob", 50, "i_owe", "friend",
                                            date(2024, 1, 1), interest_rate=5)
        assert document.obligations[0].interest_rate is None

    def test_invalid_recurrence(self):
        with pytest.raises(ValidationError):
            ledger.create_obligation(Document(), "Rent", 500, "i_owe", "friend", date(2024, 1, 1),
                                     recurrence=RecurrenceSettings("monthly", max_occurrences=0))


class TestUpdate:
    def test_edit_fields(self, doc):
        updated = ledger.update_obligation(doc, "OB-1", name="Alice B.", principal=120)
        assert updated.obligations[0].name == "Alice B."
        assert updated.obligations[0].principal == 120
        assert doc.obligations[0].name == "Alice"

    def test_payments_not_editable(self, doc):
        with pytest.raises(ValueError):
            ledger.update_obligation(doc, "OB-1", payments=())

    def test_unknown_id(self, doc):
        with pytest.raises(KeyError):
            ledger.update_obligation(doc, "missing", name="x")


class TestPayments:
    def test_partial_payment(self, doc):
        after = _pay(doc, "OB-1", 40)
        assert len(after.obligations[0].payments) == 1
        assert after.obligations[0].payments[0].amount == 40
        assert doc.obligations[0].payments == ()

    def test_rejects_bad_amount(self, doc):
        with pytest.raises(ValidationError):
            _pay(doc, "OB-1", 0)

    def test_settled_one_off_stays_without_auto_archive(self, doc):
        after = _pay(doc, "OB-1", 100)
        assert len(after.obligations) == 1
        assert after.archived == ()

    def test_settled_one_off_archived_immediately(self, doc):
        doc = replace(doc, settings=Settings(auto_archive="immediate"))
        after = _pay(doc, "OB-1", 100)
        assert after.obligations == ()
        assert after.archived[0].status == "completed"


class TestRecurringSpawn:
    @pytest.fixture
    def rent(self):
        return ledger.create_obligation(
            Document(), "Rent", 100, "i_owe", "friend", date(2024, 1, 1),
            due_date=date(2024, 1, 15), recurrence=RecurrenceSettings("monthly"),
            id_factory=_ids("OB"),
        )

    def test_successor_replaces_settled_instance(self, rent):
        after = _pay(rent, "OB-1", 100)
        assert after.archived[0].obligation_id == "OB-1"
        assert after.archived[0].status == "completed"
        successor = after.obligations[0]
        assert successor.obligation_id == "NEXT-1"
        assert successor.due_date == date(2024, 2, 15)
        assert successor.start_date == date(2024, 1, 10)
        assert successor.occurrence == 1
        assert successor.payments == ()
        assert successor.principal == 100

    def test_late_payment_skips_past_due_dates(self, rent):
        after = _pay(rent, "OB-1", 100, paid_on=date(2024, 6, 1), today=date(2024, 6, 1))
        successor = after.obligations[0]
        assert successor.start_date == date(2024, 6, 1)
        assert successor.due_date == date(2024, 6, 15)
        assert successor.occurrence == 5
        edited = ledger.update_obligation(after, successor.obligation_id, description="June rent")
        assert edited.obligations[0].description == "June rent"

    def test_late_payment_near_series_end_keeps_due_after_start(self, rent):
        limited = replace(rent.obligations[0], recurrence=RecurrenceSettings("monthly", max_occurrences=2))
        rent = replace(rent, obligations=(limited,))
        after = _pay(rent, "OB-1", 100, paid_on=date(2024, 6, 1), today=date(2024, 6, 1))
        successor = after.obligations[0]
        assert successor.due_date == date(2024, 3, 15)
        assert successor.start_date == date(2024, 3, 15)
        assert successor.occurrence == 2
        ledger.update_obligation(after, successor.obligation_id, description="last one")

    def test_series_end_removes_instance(self, rent):
        ended = replace(rent.obligations[0], occurrence=2,
                        recurrence=RecurrenceSettings("monthly", max_occurrences=2))
        rent = replace(rent, obligations=(ended,))
        after = _pay(rent, "OB-1", 100)
        assert after.obligations == ()
        assert len(after.archived) == 1

    def test_partial_payment_does_not_spawn(self, rent):
        after = _pay(rent, "OB-1", 60)
        assert after.obligations[0].obligation_id == "OB-1"
        assert after.archived == ()


class TestArchive:
    def test_archive_and_delete(self, doc):
        archived = ledger.archive_obligation(doc, "OB-1", "defaulted")
        assert archived.obligations == ()
        assert archived.archived[0].status == "defaulted"
        cleared = ledger.delete_archived(archived, "OB-1")
        assert cleared.archived == ()

    def test_invalid_target_status(self, doc):
        with pytest.raises(ValueError):
            ledger.archive_obligation(doc, "OB-1", "active")

    def test_cannot_archive_twice(self, doc):
        archived = ledger.archive_obligation(doc, "OB-1", "completed")
        with pytest.raises(KeyError):
            ledger.archive_obligation(archived, "OB-1", "completed")


class TestAutoArchive:
    def test_never_returns_same_document(self, doc):
        settled = _pay(doc, "OB-1", 100)
        assert ledger.apply_auto_archive(settled, date(2025, 1, 1)) is settled

    def test_waits_for_delay(self, doc):
        settled = _pay(replace(doc, settings=Settings(auto_archive="1day")), "OB-1", 100,
                       paid_on=date(2024, 3, 1))
        assert ledger.apply_auto_archive(settled, date(2024, 3, 1)) is settled
        after = ledger.apply_auto_archive(settled, date(2024, 3, 2))
        assert after.obligations == ()
        assert after.archived[0].status == "completed"

    def test_unsettled_kept(self, doc):
        partial = _pay(replace(doc, settings=Settings(auto_archive="7days")), "OB-1", 50)
        assert ledger.apply_auto_archive(partial, date(2025, 1, 1)) is partial


class TestSavingsAndSettings:
    def test_goal_lifecycle(self):
        document = ledger.create_savings_goal(Document(), "Car", 5000, id_factory=_ids("SG"))
        document = ledger.add_deposit(document, "SG-1", 250, date(2024, 1, 1), id_factory=_ids("PM"))
        assert document.savings_goals[0].deposits[0].amount == 250
        assert ledger.delete_savings_goal(document, "SG-1").savings_goals == ()

    def test_goal_validation(self):
        with pytest.raises(ValidationError):
            ledger.create_savings_goal(Document(), "", -1)

    def test_update_settings(self):
        document = ledger.update_settings(Document(), currency="USD", auto_archive="7days")
        assert document.settings == Settings(currency="USD", auto_archive="7days")

    def test_invalid_settings(self):
        with pytest.raises(ValidationError) as exc_info:
            ledger.update_settings(Document(), currency="XYZ", auto_archive="sometimes")
        assert len(exc_info.value.errors) == 2
