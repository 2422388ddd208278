"""
Durable cache for live backend reads (augmented mode only).

Intent:
    Keep the last successful live value per logical entity (teacher profile,
    students, ...) for one day so the app keeps working while the backend is
    down or empty during development.

Rules:
    - Strict mode never writes and never reads: a stale artifact must not be
      able to mask a real backend outage in production.
    - Freshness is a hard boundary: age < window is fresh, age >= window is
      stale.
    - The cache is an optimization. Storage and serialization failures are
      logged and turned into a miss or a no-op; nothing here raises to callers.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from backend.mode import Mode

from .envelope import CacheEnvelope, Corrupt, Valid, encode_envelope, parse_envelope
from .kv import KeyValueStore

logger = logging.getLogger("lessonbook.cache")

CACHE_NAMESPACE = "lessonbook.cache:"
FRESHNESS_WINDOW_MS = 24 * 60 * 60 * 1000


def storage_key(logical_name: str) -> str:
    if not logical_name:
        raise ValueError("logical_name must be non-empty")
    return f"{CACHE_NAMESPACE}{logical_name}"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _size(payload: Any) -> int:
    return len(payload) if isinstance(payload, list) else 1


class DurableCache:
    def __init__(
        self,
        store: KeyValueStore,
        mode: Mode,
        *,
        clock: Optional[Callable[[], int]] = None,
        freshness_window_ms: int = FRESHNESS_WINDOW_MS,
    ):
        self._store = store
        self._augmented = Mode(mode) is Mode.AUGMENTED
        self._clock = clock or _now_ms
        self._window_ms = freshness_window_ms

    @property
    def freshness_window_ms(self) -> int:
        return self._window_ms

    def put(self, logical_name: str, payload: Any) -> None:
        """Store `payload` under `logical_name`, replacing any previous envelope."""
        if not self._augmented:
            return
        try:
            key = storage_key(logical_name)
            raw = encode_envelope(CacheEnvelope(timestamp=self._clock(), payload=payload))
            self._store.set_item(key, raw)
        except Exception as exc:
            logger.warning("cache put failed for %s: %s: %s", logical_name, exc.__class__.__name__, exc)
            return
        logger.debug("cached %s (%d items)", logical_name, _size(payload))

    def get(self, logical_name: str, default: Any) -> Any:
        """Return the fresh cached payload for `logical_name`, else `default`."""
        if not self._augmented:
            return default
        try:
            raw = self._store.get_item(storage_key(logical_name))
            parsed = parse_envelope(raw)
        except Exception as exc:
            logger.warning("cache read failed for %s: %s: %s", logical_name, exc.__class__.__name__, exc)
            return default
        if parsed is None:
            return default
        if isinstance(parsed, Corrupt):
            logger.debug("ignoring corrupt cache entry for %s: %s", logical_name, parsed.reason)
            return default
        envelope = parsed.envelope
        if not envelope.is_fresh(self._clock(), self._window_ms):
            logger.debug("cache entry for %s is stale", logical_name)
            return default
        return envelope.payload

    def clear_all(self) -> int:
        """Remove every entry under the cache namespace; return how many were removed."""
        if not self._augmented:
            return 0
        removed = 0
        try:
            keys = [k for k in self._store.keys() if k.startswith(CACHE_NAMESPACE)]
            for key in keys:
                self._store.remove_item(key)
                removed += 1
        except Exception as exc:
            logger.warning("cache clear aborted after %d entries: %s: %s", removed, exc.__class__.__name__, exc)
        logger.info("cleared %d cached entries", removed)
        return removed

    def stats(self) -> Dict[str, Any]:
        """Diagnostics for the dev cache panel: one row per namespaced entry."""
        entries: List[Dict[str, Any]] = []
        stats: Dict[str, Any] = {
            "enabled": self._augmented,
            "freshness_window_ms": self._window_ms,
            "entries": entries,
        }
        if not self._augmented:
            return stats
        try:
            now = self._clock()
            for key in sorted(self._store.keys()):
                if not key.startswith(CACHE_NAMESPACE):
                    continue
                name = key[len(CACHE_NAMESPACE):]
                parsed = parse_envelope(self._store.get_item(key))
                if isinstance(parsed, Valid):
                    env = parsed.envelope
                    entries.append(
                        {
                            "key": name,
                            "age_ms": env.age_ms(now),
                            "fresh": env.is_fresh(now, self._window_ms),
                            "size": _size(env.payload),
                        }
                    )
                elif isinstance(parsed, Corrupt):
                    entries.append({"key": name, "corrupt": True, "reason": parsed.reason})
        except Exception as exc:
            logger.warning("cache stats unavailable: %s: %s", exc.__class__.__name__, exc)
        return stats


__all__ = ["CACHE_NAMESPACE", "FRESHNESS_WINDOW_MS", "DurableCache", "storage_key"]
