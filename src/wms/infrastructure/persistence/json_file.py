"""Shared file handling for the JSON-backed repositories.

Every repository keeps one JSON array per file.  Reads and the
read-modify-write cycle of a save run under the repository's own lock, and
writes go through a temporary file so a crash never leaves half a document.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path


class JsonFileRepository:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.RLock()
        self._ensure_file()

    def _load_raw(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        tmp_path.replace(self._file_path)

    def _upsert(self, key: str, record: dict) -> None:
        """Replace the record whose *key* matches, otherwise append it."""
        with self._lock:
            records = self._load_raw()
            for i, raw in enumerate(records):
                if raw[key] == record[key]:
                    records[i] = record
                    break
            else:
                records.append(record)
            self._persist_raw(records)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
