"""Commit-on-save session tests"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from datetime import date

import pytest

from core import ledger
from core.session import LedgerSession
from data_manager.data_validator import ValidationError
from data_manager.json_handler import load_document
from data_manager.schema import Document


class RecordingSaver:
    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def __call__(self, document, filepath):
        self.calls.append(document)
        return self.result


def _session(saver):
    return LedgerSession(Path("unused.json"), loader=lambda _: Document(), saver=saver)


class TestApply:
    def test_successful_save_commits(self):
        saver = RecordingSaver()
        session = _session(saver)
        assert session.apply(ledger.create_obligation, "Alice", 100, "i_owe", "friend", date(2024, 1, 1))
        assert len(session.document.obligations) == 1
        assert saver.calls == [session.document]

    def test_failed_save_keeps_previous_document(self):
        session = _session(RecordingSaver(result=False))
        before = session.document
        assert not session.apply(ledger.create_obligation, "Alice", 100, "i_owe", "friend", date(2024, 1, 1))
        assert session.document is before

    def test_validation_error_propagates(self):
        saver = RecordingSaver()
        session = _session(saver)
        with pytest.raises(ValidationError):
            session.apply(ledger.create_obligation, "", 0, "i_owe", "friend", date(2024, 1, 1))
        assert saver.calls == []
        assert session.document == Document()

    def test_unchanged_document_is_not_saved(self):
        saver = RecordingSaver()
        session = _session(saver)
        assert session.apply(ledger.apply_auto_archive, date(2024, 1, 1))
        assert saver.calls == []


class TestWithJsonStore:
    def test_changes_reach_disk(self, data_file):
        session = LedgerSession(data_file)
        session.apply(ledger.create_savings_goal, "Trip", 800)
        assert load_document(data_file).savings_goals[0].name == "Trip"
