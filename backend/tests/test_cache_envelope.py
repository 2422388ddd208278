"""
Envelope parsing: stored string -> Valid | Corrupt.

Why:
    Anything under the cache namespace may have been written by an older
    build or edited by hand. Malformed envelopes are discarded, never
    partially trusted, and parsing never raises.
"""
from __future__ import annotations

import json

import pytest

from backend.cache.envelope import CacheEnvelope, Corrupt, Valid, encode_envelope, parse_envelope


def test_encode_then_parse_keeps_payload():
    raw = encode_envelope(CacheEnvelope(timestamp=5, payload=[{"id": "s-1"}]))
    assert json.loads(raw) == {"timestamp": 5, "data": [{"id": "s-1"}]}
    parsed = parse_envelope(raw)
    assert isinstance(parsed, Valid)
    assert parsed.envelope == CacheEnvelope(timestamp=5, payload=[{"id": "s-1"}])


def test_nothing_stored_is_not_corrupt():
    assert parse_envelope(None) is None


@pytest.mark.parametrize(
    "raw,reason",
    [
        ("not json", "not_json"),
        ("[1, 2]", "not_an_object"),
        ('{"data": [1]}', "missing_timestamp"),
        ('{"timestamp": 1}', "missing_payload"),
        ('{"timestamp": 1, "data": null}', "missing_payload"),
        ('{"timestamp": "1", "data": [1]}', "timestamp_not_integer"),
        ('{"timestamp": true, "data": [1]}', "timestamp_not_integer"),
        ('{"timestamp": 1.5, "data": [1]}', "timestamp_not_integer"),
        ('{"timestamp": NaN, "data": [1]}', "timestamp_not_integer"),
        ('{"timestamp": Infinity, "data": [1]}', "timestamp_not_integer"),
        ('{"timestamp": -1, "data": [1]}', "timestamp_negative"),
    ],
)
def test_malformed_envelopes_are_corrupt(raw: str, reason: str):
    parsed = parse_envelope(raw)
    assert isinstance(parsed, Corrupt)
    assert parsed.reason == reason


def test_integral_float_timestamp_is_accepted():
    parsed = parse_envelope('{"timestamp": 1700000000000.0, "data": {"id": 1}}')
    assert isinstance(parsed, Valid)
    assert parsed.envelope.timestamp == 1700000000000


def test_freshness_boundary_is_strict():
    env = CacheEnvelope(timestamp=1000, payload=1)
    assert env.is_fresh(now_ms=1999, window_ms=1000)
    assert not env.is_fresh(now_ms=2000, window_ms=1000)
    assert env.is_fresh(now_ms=500, window_ms=1000)


def test_encode_rejects_non_json_payload():
    with pytest.raises((TypeError, ValueError)):
        encode_envelope(CacheEnvelope(timestamp=1, payload={"when": object()}))


def test_deeply_nested_value_is_corrupt_not_an_error():
    parsed = parse_envelope("[" * 200_000)
    assert isinstance(parsed, Corrupt)
    assert parsed.reason == "not_json"
