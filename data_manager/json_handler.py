import json
import os
import shutil
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from config.logging_config import get_logger
from config.settings import BACKUP_KEEP, DATA_FILE
from core.reporting import build_export_frame, calc_goal_progress
from data_manager.schema import Document, document_from_dict, document_to_dict

logger = get_logger("store")


def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S_%f")


def _write_json(document: Document, filepath: Path):
    """Write via a temp file so a crash never leaves half a document behind."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = filepath.with_suffix(filepath.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as fh:
        json.dump(document_to_dict(document), fh, ensure_ascii=False, indent=2)
    os.replace(tmp_path, filepath)


def init_store(filepath: Path = DATA_FILE):
    """Create the data file with an empty document if it does not exist yet."""
    if filepath.exists():
        return
    _write_json(Document(), filepath)
    logger.info("Initialized empty data file at %s", filepath)


def backup_store(filepath: Path = DATA_FILE):
    """Copy the current file aside before every write, keeping the newest few."""
    if not filepath.exists():
        return
    backup_path = filepath.with_name(f"{filepath.name}.bak_{_timestamp()}")
    shutil.copy2(filepath, backup_path)
    backups = sorted(filepath.parent.glob(f"{filepath.name}.bak_*"))
    for old in backups[:-BACKUP_KEEP]:
        old.unlink()


def load_document(filepath: Path = DATA_FILE) -> Document:
    """Read the whole document.

    A missing file is initialised; an unreadable one is moved aside as
    ``*.corrupt_<timestamp>`` and replaced by an empty document.
    """
    if not filepath.exists():
        try:
            init_store(filepath)
        except OSError as exc:
            logger.warning("Data file %s could not be created (%s); starting empty", filepath, exc)
        return Document()

    try:
        with filepath.open("r", encoding="utf-8") as fh:
            raw = fh.read()
        if not raw.strip():
            data = {}
        else:
            data = json.loads(raw)
        return document_from_dict(data)
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        corrupt_path = filepath.with_name(f"{filepath.name}.corrupt_{_timestamp()}")
        logger.warning("Data file %s could not be parsed (%s); resetting, old copy kept at %s",
                       filepath, exc, corrupt_path)
        shutil.move(str(filepath), corrupt_path)
        _write_json(Document(), filepath)
        return Document()


def save_document(document: Document, filepath: Path = DATA_FILE) -> bool:
    """Persist the whole document; returns False instead of raising on I/O errors."""
    try:
        backup_store(filepath)
        _write_json(document, filepath)
    except OSError:
        logger.exception("Failed to save data file %s", filepath)
        return False
    logger.debug("Saved %d active / %d archived obligations to %s",
                 len(document.obligations), len(document.archived), filepath)
    return True


# ---- exports ----

def _payments_frame(document: Document) -> pd.DataFrame:
    rows = []
    for o in list(document.obligations) + list(document.archived):
        for p in o.payments:
            rows.append({
                "obligation_id": o.obligation_id,
                "name": o.name,
                "direction": o.direction,
                "payment_id": p.payment_id,
                "amount": p.amount,
                "paid_on": p.paid_on.isoformat(),
                "method": p.method or "",
                "is_partial": p.is_partial,
                "notes": p.notes,
            })
    return pd.DataFrame(rows, columns=[
        "obligation_id", "name", "direction", "payment_id", "amount",
        "paid_on", "method", "is_partial", "notes",
    ])


def _savings_frame(document: Document) -> pd.DataFrame:
    rows = []
    for g in document.savings_goals:
        progress = calc_goal_progress(g)
        rows.append({
            "goal_id": g.goal_id,
            "name": g.name,
            "target_amount": g.target_amount,
            "current_amount": progress["current_amount"],
            "progress_percent": round(progress["progress_percent"], 2),
            "deposit_count": len(g.deposits),
        })
    return pd.DataFrame(rows, columns=[
        "goal_id", "name", "target_amount", "current_amount", "progress_percent", "deposit_count",
    ])


def export_csv(document: Document, output_path: Path, today: Optional[date] = None) -> Path:
    """Write the obligations summary (active and archived) as CSV."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    build_export_frame(document, today).to_csv(output_path, index=False)
    logger.info("Exported CSV to %s", output_path)
    return output_path


def export_excel(document: Document, output_path: Path, today: Optional[date] = None) -> Path:
    """Workbook with Obligations, Payments and Savings sheets."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        build_export_frame(document, today).to_excel(writer, sheet_name="Obligations", index=False)
        _payments_frame(document).to_excel(writer, sheet_name="Payments", index=False)
        _savings_frame(document).to_excel(writer, sheet_name="Savings", index=False)
    logger.info("Exported workbook to %s", output_path)
    return output_path
