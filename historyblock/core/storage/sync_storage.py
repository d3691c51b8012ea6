"""Synchronized key/value storage for HistoryBlock.

Mirrors the browser's sync storage area: a flat dictionary of top-level
keys, read and written as a whole. Two backends:

- JsonSyncStorage: JSON file on disk (default)
- MemorySyncStorage: in-process dictionary (testing)

Every failure to read or write is raised as StorageUnavailableError.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from threading import Lock
from typing import Any

from historyblock.models.blacklist import StorageUnavailableError

logger = logging.getLogger(__name__)


class SyncStorage:
    """Base interface of the synchronized storage area."""

    def get(self) -> dict[str, Any]:
        """Return a copy of every stored key."""
        raise NotImplementedError

    def set(self, items: dict[str, Any]) -> None:
        """Store the given keys, leaving other keys untouched."""
        raise NotImplementedError

    def remove(self, key: str) -> None:
        """Remove a key if present."""
        raise NotImplementedError

    def signature(self) -> Any:
        """Return a cheap token that changes whenever the stored data changes.

        Readers compare it with the token seen at their last read to know
        whether another writer has touched the storage since.
        """
        raise NotImplementedError


class MemorySyncStorage(SyncStorage):
    """In-memory storage area."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})
        self._lock = Lock()
        self.write_count = 0

    def get(self) -> dict[str, Any]:
        with self._lock:
            return copy.deepcopy(self._data)

    def set(self, items: dict[str, Any]) -> None:
        with self._lock:
            self._data.update(copy.deepcopy(items))
            self.write_count += 1

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)
            self.write_count += 1

    def signature(self) -> int:
        with self._lock:
            return self.write_count


class JsonSyncStorage(SyncStorage):
    """Storage area persisted to a JSON file.

    Writes go to a temporary file in the same directory and are moved
    over the target with os.replace, so a reader never sees a partially
    written record.
    """

    def __init__(self, filepath: str | Path) -> None:
        self._filepath = Path(filepath)
        self._lock = Lock()

    @property
    def filepath(self) -> Path:
        return self._filepath

    def get(self) -> dict[str, Any]:
        with self._lock:
            return self._read()

    def set(self, items: dict[str, Any]) -> None:
        with self._lock:
            data = self._read()
            data.update(items)
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)

    def signature(self) -> tuple[int, int, int] | None:
        """File identity, modification time and size, None if missing.

        Writes replace the file, so each one moves at least one of them
        (a rewrite of equal size within one clock tick goes unseen).
        """
        try:
            stat = self._filepath.stat()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageUnavailableError(
                f"Lecture impossible: {exc}",
                {"path": str(self._filepath)},
            ) from exc
        return (stat.st_ino, stat.st_mtime_ns, stat.st_size)

    def _read(self) -> dict[str, Any]:
        if not self._filepath.exists():
            return {}
        try:
            data = json.loads(self._filepath.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.error(f"Storage read failed (path={self._filepath}, error={exc})")
            raise StorageUnavailableError(
                f"Lecture impossible: {exc}",
                {"path": str(self._filepath)},
            ) from exc
        if not isinstance(data, dict):
            raise StorageUnavailableError(
                "Format de stockage invalide (objet JSON attendu)",
                {"path": str(self._filepath)},
            )
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self._filepath.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._filepath.parent, prefix=".sync-", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self._filepath)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            logger.error(f"Storage write failed (path={self._filepath}, error={exc})")
            raise StorageUnavailableError(
                f"Ecriture impossible: {exc}",
                {"path": str(self._filepath)},
            ) from exc
