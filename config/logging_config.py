"""Logging setup shared by the CLI and the Streamlit app."""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from config.settings import LOG_BACKUP_COUNT, LOG_DIR, LOG_LEVEL, LOG_MAX_BYTES

ROOT_LOGGER_NAME = "loandash"

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"


def setup_logging(
    level: str = LOG_LEVEL,
    log_dir: Optional[Path] = LOG_DIR,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``loandash`` logger tree.

    Args:
        level: Log level name for both handlers.
        log_dir: Directory for the rotating log file; ``None`` disables file logging.
        console: Whether to attach a stderr handler.

    Returns:
        The configured root project logger.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    # Re-running setup (Streamlit reruns every page) must not stack handlers
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_dir / "loandash.log",
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    root_logger.debug("Logging initialized (level=%s, log_dir=%s)", level, log_dir)
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the project logger, e.g. ``loandash.ledger``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
