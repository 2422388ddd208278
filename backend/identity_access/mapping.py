"""
Mapping from the auth provider's user id to the internal backend identity.

Why:
    The auth provider issues textual ids (e.g. ``user_2uFOgpm...``) while every
    backend table keys row ownership on a UUID column. Row ownership must stay
    stable across deployments, so the mapping is a pure function of its input:
    same external id, same UUID, in every process.

Behavior:
    - UUIDv5 (SHA-1 digest) under a fixed namespace; the result always has the
      canonical 8-4-4-4-12 lower-case hex shape, whatever the input length or
      charset.
    - Inputs that already look like a UUID are hashed like any other input.
    - Empty input is rejected; it is never mapped to a placeholder identity.
"""
from __future__ import annotations

import re
import uuid
from typing import Optional

# Do not change once data exists: every owned row is keyed on this namespace.
IDENTITY_NAMESPACE = uuid.UUID("9f58d4c2-0dbd-4a5d-9bbc-8ab8e8f47140")

_CANONICAL_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


class IdentityError(ValueError):
    """Raised when an external identity cannot be mapped."""

    EMPTY_INPUT = "empty_input"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def to_internal_identity(external: Optional[str]) -> str:
    """Return the internal UUID string for an external identity.

    Raises:
        IdentityError: reason ``empty_input`` for ``None``, ``""`` or
        whitespace-only input.
    """
    if external is None or not str(external).strip():
        raise IdentityError(IdentityError.EMPTY_INPUT)
    return str(uuid.uuid5(IDENTITY_NAMESPACE, str(external)))


def is_canonical_identity(value: Optional[str]) -> bool:
    """True when `value` has the canonical grouped lower-case hex shape."""
    if not isinstance(value, str):
        return False
    return _CANONICAL_RE.match(value) is not None


__all__ = ["IDENTITY_NAMESPACE", "IdentityError", "to_internal_identity", "is_canonical_identity"]
