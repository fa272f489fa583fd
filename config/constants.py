from enum import Enum


class Direction(str, Enum):
    I_OWE = "i_owe"
    THEY_OWE = "they_owe"

    @property
    def label(self) -> str:
        return {
            "i_owe": "I Owe",
            "they_owe": "They Owe Me",
        }[self.value]


class ObligationCategory(str, Enum):
    FRIEND = "friend"
    BANK_LOAN = "bank_loan"

    @property
    def label(self) -> str:
        return {
            "friend": "Friend/Family Credit",
            "bank_loan": "Bank Loan",
        }[self.value]


class ObligationStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"

    @property
    def label(self) -> str:
        return {
            "active": "Active",
            "completed": "Completed",
            "defaulted": "Defaulted",
        }[self.value]


class RecurrenceType(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def label(self) -> str:
        return {
            "none": "One-time",
            "weekly": "Weekly",
            "bi-weekly": "Bi-weekly",
            "monthly": "Monthly",
            "quarterly": "Quarterly",
        }[self.value]


class AutoArchive(str, Enum):
    NEVER = "never"
    IMMEDIATE = "immediate"
    ONE_DAY = "1day"
    SEVEN_DAYS = "7days"

    @property
    def label(self) -> str:
        return {
            "never": "Never",
            "immediate": "Immediately",
            "1day": "After 1 day",
            "7days": "After 7 days",
        }[self.value]

    @property
    def delay_days(self):
        return {"never": None, "immediate": 0, "1day": 1, "7days": 7}[self.value]


TERMINAL_STATUSES = (ObligationStatus.COMPLETED.value, ObligationStatus.DEFAULTED.value)

# Keys of the legacy split-entity document
LEGACY_DEBTS_KEY = "loandash-debts"
LEGACY_LOANS_KEY = "loandash-loans"
LEGACY_ARCHIVED_DEBTS_KEY = "loandash-archived-debts"
LEGACY_ARCHIVED_LOANS_KEY = "loandash-archived-loans"
LEGACY_AUTO_ARCHIVE_KEY = "loandash-auto-archive"
LEGACY_BANK_LOAN_TYPE = "Bank Loan"

# Column definitions
AMORTIZATION_COLUMNS = [
    "payment_number", "payment_date", "payment_amount",
    "principal_amount", "interest_amount", "remaining_balance",
]

MONTHLY_HISTORY_COLUMNS = ["month", Direction.I_OWE.value, Direction.THEY_OWE.value]

ACCRUAL_TIMELINE_COLUMNS = [
    "month", "opening_balance", "payments", "interest", "closing_balance", "accrued_interest",
]

BREAKDOWN_COLUMNS = ["obligation_id", "name", "direction", "remaining"]

EXPORT_COLUMNS = [
    "Type", "Status", "Name", "Category", "TotalAmount", "AmountPaid",
    "AmountRemaining", "StartDate", "DueDate", "Description",
    "InterestRate", "IsRecurring", "PaymentCount",
]
