import uuid
from datetime import datetime


def _generate_id(prefix: str) -> str:
    return f"{prefix}-{datetime.now().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6]}"


def generate_obligation_id() -> str:
    return _generate_id("OB")


def generate_payment_id() -> str:
    return _generate_id("PM")


def generate_goal_id() -> str:
    return _generate_id("SG")
