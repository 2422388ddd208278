"""
Pytest configuration for backend tests.

Why: Force AnyIO to use the asyncio backend to avoid sandbox restrictions
that can affect the Trio backend (e.g., socketpair permission errors).
"""
import sys
from pathlib import Path

import pytest

# Ensure the repository root is importable when running without an install.
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_lessonbook_env(monkeypatch: pytest.MonkeyPatch):
    """Clear env-driven toggles so each test starts from dev/strict defaults.

    Why:
        Settings are read from the environment. A developer shell with
        LESSONBOOK_DEV_MODE=true (or a test that sets it) must not leak into
        unrelated tests.
    """
    for var in (
        "LESSONBOOK_ENV",
        "LESSONBOOK_DEV_MODE",
        "LESSONBOOK_CACHE_PATH",
        "SUPABASE_URL",
        "SUPABASE_ANON_KEY",
    ):
        monkeypatch.delenv(var, raising=False)
    yield


class FakeClock:
    """Millisecond clock under test control."""

    def __init__(self, now_ms: int = 1_700_000_000_000):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
