"""
Mode resolver helpers.

Why:
    Exactly one producer may run per call; the other must not be invoked
    speculatively (it may touch the live backend or the cache).
"""
from __future__ import annotations

import logging

import pytest

from backend.mode import Mode, ModeResolver


def _boom():  # pragma: no cover - must never be called
    raise AssertionError("producer for the other mode was invoked")


def test_select_invokes_only_augmented_producer():
    resolver = ModeResolver(Mode.AUGMENTED)
    assert resolver.is_augmented()
    assert resolver.select(lambda: "dev", _boom) == "dev"


def test_select_invokes_only_strict_producer():
    resolver = ModeResolver(Mode.STRICT)
    assert not resolver.is_augmented()
    assert resolver.select(_boom, lambda: "prod") == "prod"


def test_select_returns_result_unmodified():
    payload = {"rows": [1, 2]}
    assert ModeResolver(Mode.STRICT).select(_boom, lambda: payload) is payload


def test_run_guards():
    dev = ModeResolver(Mode.AUGMENTED)
    prod = ModeResolver(Mode.STRICT)
    assert dev.run_augmented(lambda: 1) == 1
    assert dev.run_strict(_boom) is None
    assert prod.run_strict(lambda: 2) == 2
    assert prod.run_augmented(_boom) is None


def test_mode_accepts_string_value():
    assert ModeResolver("augmented").mode is Mode.AUGMENTED
    with pytest.raises(ValueError):
        ModeResolver("sometimes")


def test_log_helpers_only_log_in_matching_mode(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="lessonbook.mode")
    ModeResolver(Mode.AUGMENTED).log_augmented("hello %s", "dev")
    ModeResolver(Mode.AUGMENTED).log_strict("hidden")
    ModeResolver(Mode.STRICT).log_strict("hello %s", "prod")
    ModeResolver(Mode.STRICT).log_augmented("hidden")
    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["[DEV MODE] hello dev", "[PRODUCTION] hello prod"]
