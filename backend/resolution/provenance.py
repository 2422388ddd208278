"""Provenance of a resolved value: which source satisfied the request, and how it got there."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Source(str, Enum):
    LIVE = "live"
    CACHED = "cached"
    CACHED_FALLBACK = "cached-fallback"
    MOCK = "mock"
    MOCK_FALLBACK = "mock-fallback"

    @property
    def is_fallback(self) -> bool:
        """True when the live source failed (as opposed to returning nothing)."""
        return self in (Source.CACHED_FALLBACK, Source.MOCK_FALLBACK)


@dataclass(frozen=True)
class Resolution:
    value: Any
    source: Source


__all__ = ["Source", "Resolution"]
