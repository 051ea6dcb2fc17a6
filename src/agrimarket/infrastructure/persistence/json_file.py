"""A JSON array on disk, read and rewritten whole.

Every read-modify-write goes through ``update()`` under a re-entrant
lock, and writes land via a temp file + rename so readers never see a
half-written file.  I/O and decode failures become PersistenceError.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Callable
from pathlib import Path

from agrimarket.domain.exceptions import PersistenceError


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock:
            try:
                return json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

    def update(self, mutate: Callable[[list[dict]], None]) -> None:
        """Load the records, let *mutate* change them in place, write them back."""
        with self._lock:
            records = self.load()
            mutate(records)
            self._persist(records)

    def _persist(self, records: list[dict]) -> None:
        tmp = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._file_path)
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        try:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot create {self._file_path}: {exc}") from exc


def upsert(records: list[dict], key: str, record: dict) -> None:
    """Replace the record whose *key* matches, otherwise append."""
    for i, raw in enumerate(records):
        if raw[key] == record[key]:
            records[i] = record
            return
    records.append(record)
