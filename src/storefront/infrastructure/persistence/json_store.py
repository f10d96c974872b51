"""Shared plumbing for the JSON-document repositories.

Each collection lives in one JSON file holding a list of documents.
Every repository instance pointing at the same file shares one lock, so a
read-check-write sequence done inside ``locked()`` is indivisible within
the process. Writes go to a temporary file that then replaces the
original, so a reader never sees a half-written collection.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from storefront.domain.exceptions import StoreUnavailableError

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        lock = _locks.get(path)
        if lock is None:
            lock = _locks[path] = threading.RLock()
        return lock


class JsonCollection:

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def load(self) -> list[dict]:
        with self._lock:
            return self.read()

    def is_available(self) -> bool:
        try:
            self.load()
        except StoreUnavailableError:
            return False
        return True

    # --- File helpers (call under ``locked()`` when combined) -----------------

    def read(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StoreUnavailableError(f"Cannot read {self._file_path.name}") from exc

    def write(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        try:
            tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {self._file_path.name}") from exc

    def _ensure_file(self) -> None:
        with self._lock:
            if self._file_path.exists():
                return
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise StoreUnavailableError(f"Cannot create {self._file_path.name}") from exc
