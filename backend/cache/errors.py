"""Cache-layer failure types. Neither crosses the cache boundary; both end up as a miss or a no-op."""
from __future__ import annotations


class StorageUnavailable(RuntimeError):
    """The persistent key/value store failed (disabled, unreadable, out of space)."""


class CacheCorruption(ValueError):
    """A stored value under the cache namespace is not a valid envelope."""


__all__ = ["StorageUnavailable", "CacheCorruption"]
