"""A JSON file holding one table of the host platform's store.

Request handlers run on worker threads, so every read-modify-write of a
table happens under a lock shared by all ``JsonTable`` instances for the
same file, and files are replaced atomically so a reader never sees a
partial write.

IDs come from a high-water counter kept next to the table
(``<table>.json.seq``) and are never handed out twice, even after the row
holding the highest ID is deleted.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

_registry_lock = threading.Lock()
_file_locks: dict[Path, threading.RLock] = {}


def _lock_for(path: Path) -> threading.RLock:
    key = path.resolve()
    with _registry_lock:
        lock = _file_locks.get(key)
        if lock is None:
            lock = _file_locks[key] = threading.RLock()
        return lock


def _write_atomic(path: Path, text: str) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonTable:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._seq_path = file_path.with_name(file_path.name + ".seq")
        self._lock = _lock_for(file_path)
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        with self._lock:
            return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, rows: list[dict]) -> None:
        with self._lock:
            _write_atomic(self._file_path, json.dumps(rows, indent=2) + "\n")

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the rows under the table lock; persist them if the block succeeds."""
        with self._lock:
            rows = self.load()
            yield rows
            self.persist(rows)

    def next_id(self, rows: list[dict] | None = None) -> int:
        with self._lock:
            rows = self.load() if rows is None else rows
            highest = max((row["id"] for row in rows), default=0)
            return max(highest, self._high_water()) + 1

    def find(self, row_id: int) -> dict | None:
        for row in self.load():
            if row["id"] == row_id:
                return row
        return None

    def insert(self, row: dict) -> int:
        """Append *row* with a fresh ID and return the ID."""
        with self.transaction() as rows:
            row["id"] = self.next_id(rows)
            rows.append(row)
            _write_atomic(self._seq_path, str(row["id"]))
        return row["id"]

    def replace(self, row: dict) -> None:
        """Replace the row with the same ID, or append it if missing."""
        with self.transaction() as rows:
            for i, existing in enumerate(rows):
                if existing["id"] == row["id"]:
                    rows[i] = row
                    break
            else:
                rows.append(row)

    def update(self, row_id: int, change: Callable[[dict], None]) -> dict | None:
        """Apply *change* to the stored row in place; return it, or None if missing."""
        with self.transaction() as rows:
            for row in rows:
                if row["id"] == row_id:
                    change(row)
                    return row
        return None

    def delete(self, row_id: int) -> bool:
        with self.transaction() as rows:
            before = len(rows)
            rows[:] = [row for row in rows if row["id"] != row_id]
            return len(rows) != before

    def _high_water(self) -> int:
        try:
            return int(self._seq_path.read_text(encoding="utf-8").strip() or 0)
        except FileNotFoundError:
            return 0

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                _write_atomic(self._file_path, "[]")
