"""
Namespaced identifiers for synthetic (mock/seed) records.

Why:
    Mock records from different entity classes must never collide. The
    category prefix is part of the identifier itself, so ``s-1`` (student) and
    ``l-1`` (lesson) are distinct values rather than equal ids with a separate
    type field.

Conventions:
    - Prefix set is closed (see `IdPrefix`).
    - Student repertoire pieces combine both parents: ``sp-<student>-<piece>``.
"""
from __future__ import annotations

from enum import Enum
import itertools
from typing import Dict, Iterator, Optional, Union


class IdPrefix(str, Enum):
    STUDENT = "s-"
    PIECE = "p-"
    STUDENT_PIECE = "sp-"
    LESSON = "l-"
    FILE = "f-"
    MESSAGE = "m-"
    LINK = "link-"


# Longest first so "sp-" is checked before "s-".
_BY_LENGTH = sorted(IdPrefix, key=lambda p: len(p.value), reverse=True)


def entity_type_of(prefixed_id: str) -> Optional[IdPrefix]:
    """Return the category of `prefixed_id`, or None when it carries no known prefix."""
    for prefix in _BY_LENGTH:
        if prefixed_id.startswith(prefix.value):
            return prefix
    return None


def make_id(prefix: IdPrefix, suffix: Union[str, int]) -> str:
    """Build ``<prefix><suffix>``; a suffix already carrying `prefix` is returned as is."""
    raw = str(suffix)
    if entity_type_of(raw) is prefix:
        return raw
    return f"{prefix.value}{raw}"


def strip_prefix(prefixed_id: str) -> str:
    prefix = entity_type_of(prefixed_id)
    if prefix is None:
        return prefixed_id
    return prefixed_id[len(prefix.value):]


def ensure_prefix(value: str, expected: IdPrefix) -> str:
    """Return `value` under `expected`, replacing any other known prefix."""
    return f"{expected.value}{strip_prefix(value)}"


def ids_match(a: str, b: str) -> bool:
    """Compare two ids ignoring their category prefix."""
    return strip_prefix(a) == strip_prefix(b)


def student_piece_id(student_id: Union[str, int], piece_id: Union[str, int]) -> str:
    return f"{IdPrefix.STUDENT_PIECE.value}{strip_prefix(str(student_id))}-{strip_prefix(str(piece_id))}"


class IdGenerator:
    """Hand out ``s-1``, ``s-2``, ... per category; values never repeat within one generator."""

    def __init__(self, start: int = 1):
        self._start = start
        self._counters: Dict[IdPrefix, Iterator[int]] = {}

    def next(self, prefix: IdPrefix) -> str:
        counter = self._counters.get(prefix)
        if counter is None:
            counter = itertools.count(self._start)
            self._counters[prefix] = counter
        return make_id(prefix, next(counter))


__all__ = [
    "IdPrefix",
    "IdGenerator",
    "entity_type_of",
    "make_id",
    "strip_prefix",
    "ensure_prefix",
    "ids_match",
    "student_piece_id",
]
