"""
Process configuration for Lessonbook.

Intent:
    Read every environment variable the resolution layer depends on exactly
    once, at startup, into an immutable `Settings` value. Components receive
    that value (or the `Mode` inside it) at construction time instead of
    consulting the environment per call.

Why:
    A mode that could flip between two reads would let a strict-mode request
    fall back to mock data. Freezing the configuration keeps behavior stable
    for the lifetime of the process and lets tests build alternative settings
    without touching `os.environ`.

Permissions: The caller needs no special privileges. `ensure_secure_config_on_startup`
raises `SystemExit` on fatal misconfiguration.
"""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from backend.mode import Mode


_PROD_LIKE = {"prod", "production", "stage", "staging"}


def _is_prod_like(env: str) -> bool:
    return (env or "").lower() in _PROD_LIKE


def _bool_env(name: str) -> bool:
    return (os.getenv(name) or "").strip().lower() == "true"


@dataclass(frozen=True)
class Settings:
    environment: str
    mode: Mode
    cache_path: Optional[str]
    supabase_url: str
    supabase_key: str

    @property
    def prod_like(self) -> bool:
        return _is_prod_like(self.environment)


def load_settings() -> Settings:
    """
    Parse configuration from environment variables.

    Behavior:
        - `LESSONBOOK_ENV` names the deployment (default: dev).
        - `LESSONBOOK_DEV_MODE=true` enables augmented mode; any other value
          (or unset) means strict mode.
        - `LESSONBOOK_CACHE_PATH` selects the file-backed cache store; unset
          keeps the cache in memory.
        - `SUPABASE_URL` / `SUPABASE_ANON_KEY` configure the live backend.
    """
    environment = (os.getenv("LESSONBOOK_ENV") or "dev").strip().lower()
    mode = Mode.AUGMENTED if _bool_env("LESSONBOOK_DEV_MODE") else Mode.STRICT
    cache_path = (os.getenv("LESSONBOOK_CACHE_PATH") or "").strip() or None
    return Settings(
        environment=environment,
        mode=mode,
        cache_path=cache_path,
        supabase_url=(os.getenv("SUPABASE_URL") or "").strip(),
        supabase_key=(os.getenv("SUPABASE_ANON_KEY") or "").strip(),
    )


def ensure_secure_config_on_startup(settings: Settings) -> None:
    """Fail fast on unsafe production configuration.

    Checks (prod-like environments only):
    - Augmented mode must be off: it would serve cached/mock data in place of a
      failing backend and act as the shared development identity.
    - Supabase URL and key must be set, the key must not be a placeholder and
      the URL must use https.
    """
    if not settings.prod_like:
        return  # dev/test remain permissive

    if settings.mode is Mode.AUGMENTED:
        raise SystemExit(
            "Refusing to start: LESSONBOOK_DEV_MODE=true is not allowed in production/staging."
        )
    if not settings.supabase_url or not settings.supabase_key:
        raise SystemExit("Refusing to start: SUPABASE_URL and SUPABASE_ANON_KEY must be set in production.")
    if settings.supabase_key.upper().startswith(("CHANGE_ME", "DUMMY")):
        raise SystemExit("Refusing to start: SUPABASE_ANON_KEY is a placeholder in production.")
    if settings.supabase_url.lower().startswith("http://"):
        raise SystemExit("Refusing to start: SUPABASE_URL must use https in production (got http).")


__all__ = ["Settings", "load_settings", "ensure_secure_config_on_startup"]
