import os
from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Data file paths
DATA_DIR = Path(os.getenv("LOANDASH_DATA_DIR", PROJECT_ROOT / "data")).expanduser()
DATA_FILE = DATA_DIR / "loan_data.json"
BACKUP_KEEP = 5

# Logging
LOG_DIR = DATA_DIR / "logs"
LOG_LEVEL = os.getenv("LOANDASH_LOG_LEVEL", "INFO").upper()
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

# Calculation parameters
PAID_OFF_EPSILON = 0.01
HISTORY_WINDOW_MONTHS = 12
UPCOMING_DATES_COUNT = 5
DEFAULT_REMINDER_DAYS = 3
MAX_TERM_MONTHS = 600

# Currencies
DEFAULT_CURRENCY = "MAD"
SUPPORTED_CURRENCIES = {
    "MAD": {"symbol": "DH", "name": "Moroccan Dirham", "decimals": 2, "suffix": True},
    "USD": {"symbol": "$", "name": "US Dollar", "decimals": 2, "suffix": False},
    "EUR": {"symbol": "€", "name": "Euro", "decimals": 2, "suffix": False},
    "GBP": {"symbol": "£", "name": "British Pound", "decimals": 2, "suffix": False},
    "JPY": {"symbol": "¥", "name": "Japanese Yen", "decimals": 0, "suffix": False},
    "CAD": {"symbol": "C$", "name": "Canadian Dollar", "decimals": 2, "suffix": False},
    "AUD": {"symbol": "A$", "name": "Australian Dollar", "decimals": 2, "suffix": False},
    "CHF": {"symbol": "CHF", "name": "Swiss Franc", "decimals": 2, "suffix": False},
    "CNY": {"symbol": "¥", "name": "Chinese Yuan", "decimals": 2, "suffix": False},
    "INR": {"symbol": "₹", "name": "Indian Rupee", "decimals": 2, "suffix": False},
}

# Page config
PAGE_TITLE = "Loan Dashboard"
PAGE_ICON = "💸"
LAYOUT = "wide"

# Chart colors
COLORS = {
    "primary": "#1f77b4",
    "secondary": "#ff7f0e",
    "success": "#2ca02c",
    "danger": "#d62728",
    "warning": "#bcbd22",
    "info": "#17becf",
    "principal": "#1f77b4",
    "interest": "#ff7f0e",
    "i_owe": "#ef4444",
    "they_owe": "#22c55e",
    "savings": "#0ea5e9",
}

DEBT_PIE_COLORS = ["#ef4444", "#f97316", "#f59e0b", "#eab308", "#84cc16"]
LOAN_PIE_COLORS = ["#22c55e", "#14b8a6", "#0ea5e9", "#6366f1", "#8b5cf6"]
