"""
Commit-on-save wrapper around the live document.

A mutation is applied to a candidate document, the candidate is persisted,
and only a successful save makes it the live document. When the save fails
the previous document stays authoritative.

Concurrent sessions writing the same file are not coordinated: whichever
saves last wins.
"""
from pathlib import Path
from typing import Callable

from config.logging_config import get_logger
from config.settings import DATA_FILE
from data_manager.json_handler import load_document, save_document
from data_manager.schema import Document

logger = get_logger("session")


class LedgerSession:
    def __init__(
        self,
        filepath: Path = DATA_FILE,
        loader: Callable[[Path], Document] = load_document,
        saver: Callable[[Document, Path], bool] = save_document,
    ):
        self.filepath = filepath
        self._saver = saver
        self._document = loader(filepath)

    @property
    def document(self) -> Document:
        return self._document

    def apply(self, mutation: Callable[..., Document], *args, **kwargs) -> bool:
        """Run ``mutation(document, *args, **kwargs)`` and commit it if it saves.

        Validation errors raised by the mutation propagate unchanged.
        Returns False when the new document could not be saved.
        """
        candidate = mutation(self._document, *args, **kwargs)
        if candidate is self._document:
            return True
        if not self._saver(candidate, self.filepath):
            logger.error("%s was not applied: saving %s failed",
                         getattr(mutation, "__name__", "mutation"), self.filepath)
            return False
        self._document = candidate
        return True
