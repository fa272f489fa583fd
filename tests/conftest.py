import sys
import pytest
from datetime import date
from pathlib import Path

# Make the project root importable
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from data_manager.schema import Obligation, Payment  # noqa: E402


@pytest.fixture
def make_obligation():
    """Factory for obligations with sensible defaults."""
    def _make(principal=1000.0, payments=(), **overrides):
        fields = dict(
            obligation_id="OB-1",
            direction="i_owe",
            name="Alice",
            principal=principal,
            category="friend",
            start_date=date(2024, 1, 1),
            payments=tuple(payments),
        )
        fields.update(overrides)
        return Obligation(**fields)
    return _make


@pytest.fixture
def make_payment():
    counter = iter(range(1, 10_000))

    def _make(amount, paid_on):
        return Payment(payment_id=f"PM-{next(counter)}", amount=amount, paid_on=paid_on)
    return _make


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "loan_data.json"
