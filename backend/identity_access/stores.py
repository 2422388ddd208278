"""
In-memory session store and the auth context handed to the resolution layer.

Why: Keep session data server-side; cookies carry only an opaque session id.
The external identity (as issued by the auth provider) is stored as is and is
mapped to the internal identity only when a resolution needs it.

Security: Cookies carry only an opaque session id. Session data stays server-side.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional
import secrets
import time

from backend.identity_access.domain import ALLOWED_ROLES


def _now() -> int:
    return int(time.time())


@dataclass(frozen=True)
class AuthContext:
    """What the resolution layer may know about the caller.

    `ready` is False while the auth provider has not finished loading; no
    resolution is attempted in that state.
    """

    external_id: Optional[str]
    ready: bool = True

    @property
    def signed_in(self) -> bool:
        return bool(self.ready and self.external_id)


ANONYMOUS = AuthContext(external_id=None, ready=True)
NOT_READY = AuthContext(external_id=None, ready=False)


@dataclass
class SessionRecord:
    session_id: str
    external_id: str
    roles: list[str] = field(default_factory=list)
    expires_at: Optional[int] = None


class SessionStore:
    def __init__(self):
        self._data: Dict[str, SessionRecord] = {}

    def create(self, *, external_id: str, roles: list[str], ttl_seconds: int = 3600) -> SessionRecord:
        sid = secrets.token_urlsafe(24)
        kept = [r for r in roles if r in ALLOWED_ROLES]
        rec = SessionRecord(session_id=sid, external_id=external_id, roles=kept, expires_at=_now() + ttl_seconds)
        self._data[sid] = rec
        return rec

    def get(self, session_id: str) -> Optional[SessionRecord]:
        rec = self._data.get(session_id)
        if not rec:
            return None
        if rec.expires_at and rec.expires_at < _now():
            self._data.pop(session_id, None)
            return None
        return rec

    def delete(self, session_id: str) -> None:
        self._data.pop(session_id, None)

    def auth_context_for(self, session_id: Optional[str]) -> AuthContext:
        """Resolve a cookie value into an AuthContext (anonymous when unknown or expired)."""
        if not session_id:
            return ANONYMOUS
        rec = self.get(session_id)
        if rec is None:
            return ANONYMOUS
        return AuthContext(external_id=rec.external_id, ready=True)


__all__ = ["AuthContext", "ANONYMOUS", "NOT_READY", "SessionRecord", "SessionStore"]
