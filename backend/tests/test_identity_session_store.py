"""Session store: opaque ids, expiry, and the AuthContext handed to resolution."""
from __future__ import annotations

from backend.identity_access import stores
from backend.identity_access.stores import ANONYMOUS, NOT_READY, SessionStore


def test_create_and_get_roundtrip():
    store = SessionStore()
    rec = store.create(external_id="user_abc", roles=["teacher"])
    assert store.get(rec.session_id) == rec
    assert rec.roles == ["teacher"]
    assert len(rec.session_id) >= 24


def test_auth_context_for_known_session():
    store = SessionStore()
    rec = store.create(external_id="user_abc", roles=["teacher"])
    ctx = store.auth_context_for(rec.session_id)
    assert ctx.external_id == "user_abc"
    assert ctx.ready and ctx.signed_in


def test_unknown_or_missing_session_is_anonymous():
    store = SessionStore()
    assert store.auth_context_for(None) is ANONYMOUS
    assert store.auth_context_for("nope") is ANONYMOUS
    assert not ANONYMOUS.signed_in
    assert not NOT_READY.ready


def test_expired_session_is_dropped(monkeypatch):
    store = SessionStore()
    monkeypatch.setattr(stores, "_now", lambda: 1_000)
    rec = store.create(external_id="user_abc", roles=[], ttl_seconds=10)
    monkeypatch.setattr(stores, "_now", lambda: 1_011)
    assert store.get(rec.session_id) is None
    assert store.auth_context_for(rec.session_id) is ANONYMOUS


def test_delete_is_idempotent():
    store = SessionStore()
    rec = store.create(external_id="user_abc", roles=[])
    store.delete(rec.session_id)
    store.delete(rec.session_id)
    assert store.get(rec.session_id) is None


def test_unknown_roles_are_dropped():
    rec = SessionStore().create(external_id="user_abc", roles=["teacher", "superuser"])
    assert rec.roles == ["teacher"]
