"""
Cache envelope encoding and validation.

Stored shape (JSON): ``{"timestamp": <epoch ms>, "data": <payload>}``.

`parse_envelope` is the only place that decides whether a stored string is
trustworthy; callers branch on `Valid` / `Corrupt` instead of re-checking
fields themselves.
"""
from __future__ import annotations

from dataclasses import dataclass
import json
import math
from typing import Any, Optional, Union

from .errors import CacheCorruption


@dataclass(frozen=True)
class CacheEnvelope:
    timestamp: int
    payload: Any

    def age_ms(self, now_ms: int) -> int:
        return now_ms - self.timestamp

    def is_fresh(self, now_ms: int, window_ms: int) -> bool:
        """Fresh iff age is strictly below the window; future timestamps count as fresh."""
        return self.age_ms(now_ms) < window_ms


@dataclass(frozen=True)
class Valid:
    envelope: CacheEnvelope


@dataclass(frozen=True)
class Corrupt:
    reason: str


ParsedEnvelope = Union[Valid, Corrupt]


def encode_envelope(envelope: CacheEnvelope) -> str:
    """Serialize for storage; raises TypeError/ValueError for non-JSON payloads."""
    return json.dumps({"timestamp": envelope.timestamp, "data": envelope.payload}, allow_nan=False)


def _check_timestamp(value: Any) -> int:
    # bool is an int subclass; True must not pass as a timestamp.
    if isinstance(value, bool):
        raise CacheCorruption("timestamp_not_integer")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise CacheCorruption("timestamp_not_integer")
        value = int(value)
    if not isinstance(value, int):
        raise CacheCorruption("timestamp_not_integer")
    if value < 0:
        raise CacheCorruption("timestamp_negative")
    return value


def _decode(raw: str) -> CacheEnvelope:
    try:
        doc = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        raise CacheCorruption("not_json") from exc
    if not isinstance(doc, dict):
        raise CacheCorruption("not_an_object")
    if "timestamp" not in doc:
        raise CacheCorruption("missing_timestamp")
    if doc.get("data") is None:
        raise CacheCorruption("missing_payload")
    return CacheEnvelope(timestamp=_check_timestamp(doc["timestamp"]), payload=doc["data"])


def parse_envelope(raw: Optional[str]) -> Optional[ParsedEnvelope]:
    """Classify a stored value.

    Returns:
        None when nothing is stored, `Valid` for a well-formed envelope and
        `Corrupt` (with a short reason code) for anything else. Never raises.
    """
    if raw is None:
        return None
    try:
        return Valid(_decode(raw))
    except CacheCorruption as exc:
        return Corrupt(str(exc))


__all__ = ["CacheEnvelope", "Valid", "Corrupt", "ParsedEnvelope", "encode_envelope", "parse_envelope"]
