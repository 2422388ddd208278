"""Durable, TTL-bounded cache over a persistent key/value store."""
from .envelope import CacheEnvelope, Corrupt, Valid, parse_envelope
from .errors import CacheCorruption, StorageUnavailable
from .kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore, build_store
from .store import CACHE_NAMESPACE, FRESHNESS_WINDOW_MS, DurableCache, storage_key

__all__ = [
    "CACHE_NAMESPACE",
    "FRESHNESS_WINDOW_MS",
    "CacheCorruption",
    "CacheEnvelope",
    "Corrupt",
    "DurableCache",
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "StorageUnavailable",
    "Valid",
    "build_store",
    "parse_envelope",
    "storage_key",
]
