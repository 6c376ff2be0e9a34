"""JSON file store holding the ledger under a single named key."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from loan_tracker.exceptions import StorageError
from loan_tracker.logging import get_logger
from loan_tracker.models import Loan
from loan_tracker.sinks.serialization import dataclass_to_dict, loan_from_dict

logger = get_logger(__name__)


class JsonLedgerStore:
    """Persist loans as a JSON array under one key of a JSON object file.

    The file behaves like a small key-value store: other keys written by
    other tools are preserved on save.
    """

    def __init__(self, path: str | Path, key: str = "loans", pretty: bool = False) -> None:
        """Initialize JSON ledger store.

        Parameters
        ----------
        path : str | Path
            File holding the key-value entries.
        key : str
            Name of the entry holding the loan array.
        pretty : bool
            Pretty-print JSON output.
        """
        self.path = Path(path)
        self.key = key
        self.pretty = pretty

    def load(self) -> list[Loan]:
        """Read the stored loans.

        A missing file is an empty ledger. An unreadable or malformed file
        is logged and also treated as an empty ledger.
        """
        if not self.path.exists():
            logger.debug("No ledger file at %s, starting empty", self.path)
            return []

        try:
            entries = self._read_entries()
            records = entries.get(self.key) or []
            if not isinstance(records, list):
                raise StorageError(f"Entry {self.key!r} is not a list")
            loans = [loan_from_dict(record) for record in records]
        except StorageError as e:
            logger.warning("Ignoring unreadable ledger %s: %s", self.path, e)
            return []

        logger.debug("Loaded %d loans from %s", len(loans), self.path)
        return loans

    def save(self, loans: list[Loan]) -> None:
        """Write the full ledger, replacing the previous entry atomically.

        Raises
        ------
        StorageError
            If the file cannot be written.
        """
        try:
            entries = self._read_entries() if self.path.exists() else {}
        except StorageError:
            # Corrupt file; it is overwritten with a fresh object
            entries = {}
        entries[self.key] = [dataclass_to_dict(loan) for loan in loans]

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(entries, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(entries, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write ledger to {self.path}: {e}") from e

        logger.debug("Saved %d loans to %s", len(loans), self.path)

    def _read_entries(self) -> dict[str, Any]:
        try:
            with open(self.path, encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e
        if not isinstance(entries, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return entries
