# coverfinder/core/cache/stores.py
"""
Key/value stores backing the cover cache.

The cache logic only needs `get(key)` and `set(key, value)`; values are
JSON-compatible dicts. There is no delete: stale entries are
ignored by the reader and overwritten by the next write.
"""

from __future__ import annotations

import json
import logging
import tempfile
import threading
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class CacheStore(Protocol):
    def get(self, key: str) -> dict[str, Any] | None: ...

    def set(self, key: str, value: dict[str, Any]) -> None: ...


class MemoryCacheStore:
    """Process-local dict store. Handy for tests and one-shot CLI runs."""

    def __init__(self) -> None:
        self._data: dict[str, dict[str, Any]] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        return self._data.get(key)

    def set(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class JsonFileCacheStore:
    """
    All entries in one JSON object on disk.

    Writes go to a temp file in the same directory and are moved into place,
    so a crash mid-write leaves the previous file intact. A missing or corrupt
    file reads as an empty store.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> dict[str, Any] | None:
        value = self._load().get(key)
        return value if isinstance(value, dict) else None

    def set(self, key: str, value: dict[str, Any]) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._write(data)

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", self._path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Ignoring cache file %s: top level is not an object", self._path)
            return {}
        return raw

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", prefix="covers_", suffix=".part", delete=False, dir=str(self._path.parent)
        ) as tf:
            json.dump(data, tf, ensure_ascii=False, indent=2)
            tmp_path = Path(tf.name)
        tmp_path.replace(self._path)


__all__ = [
    "CacheStore",
    "MemoryCacheStore",
    "JsonFileCacheStore",
]
