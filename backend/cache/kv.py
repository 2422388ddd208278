"""
Persistent key/value stores backing the durable cache.

Intent:
    Provide the minimal synchronous interface the cache needs (get, set,
    remove, enumerate keys over string keys and values) and two
    implementations: an in-memory store for tests and short-lived processes,
    and a single-file JSON store for local persistence across restarts.

Behavior:
    - Writes replace whole values; a reader sees either the old or the new
      value, never a partial one. `FileKeyValueStore` writes a temp file and
      renames it over the document (`os.replace` is atomic on POSIX/NTFS).
    - Capacity and eviction are not managed here.
    - Every underlying failure surfaces as `StorageUnavailable`.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
import tempfile
from typing import Dict, List, Optional, Protocol, Union

from .errors import StorageUnavailable


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...

    def keys(self) -> List[str]:
        ...


class MemoryKeyValueStore:
    """Dict-backed store. Lives as long as the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageUnavailable("values must be strings")
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        return list(self._data.keys())


class FileKeyValueStore:
    """One JSON object on disk mapping keys to string values.

    The document is re-read on every call so separate store instances over the
    same path observe each other's writes (last writer wins).
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageUnavailable(f"read failed: {exc.__class__.__name__}") from exc
        if not raw.strip():
            return {}
        try:
            doc = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise StorageUnavailable("store document is not valid JSON") from exc
        if not isinstance(doc, dict):
            raise StorageUnavailable("store document must be a JSON object")
        return {str(k): v for k, v in doc.items() if isinstance(v, str)}

    def _save(self, data: Dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".kv-", suffix=".json", dir=str(self._path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, ensure_ascii=False, sort_keys=True)
                os.replace(tmp_name, self._path)
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
                raise
        except OSError as exc:
            raise StorageUnavailable(f"write failed: {exc.__class__.__name__}") from exc

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise StorageUnavailable("values must be strings")
        data = self._load()
        data[key] = value
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def keys(self) -> List[str]:
        return list(self._load().keys())


def build_store(path: Optional[str]) -> KeyValueStore:
    """File-backed store when a path is configured, otherwise in-memory."""
    if path:
        return FileKeyValueStore(path)
    return MemoryKeyValueStore()


__all__ = ["KeyValueStore", "MemoryKeyValueStore", "FileKeyValueStore", "build_store"]
