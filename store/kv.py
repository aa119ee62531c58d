"""Durable key-value storage behind the auth stores.

Values are opaque strings (the callers store JSON), so any backend that can
hold text under a key can stand in for these two implementations.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Protocol


logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    pass


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def keys(self) -> List[str]:
        ...


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore:
    """Keeps every key in a single JSON object on disk.

    The file is read once on construction and rewritten after each mutation;
    in-memory state only changes once the new contents are on disk.
    Writes go to a temp file in the same directory and are moved into place,
    so a crash never leaves a half-written store behind.
    """

    def __init__(self, path: str | os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Could not read key-value store {self.path}: {exc}") from exc
        if not isinstance(raw, dict) or not all(isinstance(v, str) for v in raw.values()):
            raise StorageError(f"Key-value store {self.path} is not a JSON object of strings")
        logger.info("Loaded %s keys from %s", len(raw), self.path)
        return raw

    def _flush(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write key-value store {self.path}: {exc}") from exc

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            data = dict(self._data)
            data[key] = value
            self._flush(data)
            self._data = data

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._data:
                return
            data = {k: v for k, v in self._data.items() if k != key}
            self._flush(data)
            self._data = data

    def keys(self) -> List[str]:
        return list(self._data)


def open_store(path: Optional[str]) -> KeyValueStore:
    if not path:
        logger.info("No storage path configured, keeping auth data in memory")
        return MemoryStore()
    return JsonFileStore(path)
