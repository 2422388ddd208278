"""
Shared wiring for the resolver and the live source used by API routes.

Why:
    App startup may occur before Supabase is reachable or configured. Routes
    always need *some* live source: when the Supabase client cannot be built,
    an `UnconfiguredSource` takes its place so that strict mode reports
    "backend unavailable" and augmented mode falls back to cache/mock data.

Security:
    Uses SUPABASE_URL and SUPABASE_ANON_KEY from settings. Only server-side
    objects are built; no secrets are exposed to clients.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from backend.cache.kv import build_store
from backend.cache.store import DurableCache
from backend.config import Settings
from backend.resolution.pipeline import Resolver
from backend.resolution.sources import SupabaseLessonSource, UnconfiguredSource, build_supabase_client

logger = logging.getLogger("lessonbook.web")

RESOLVER: Optional[Resolver] = None
SOURCE: Any = None


def build_resolver(settings: Settings) -> Resolver:
    store = build_store(settings.cache_path)
    return Resolver(settings.mode, DurableCache(store, settings.mode))


def build_live_source(settings: Settings) -> Any:
    """Supabase source when configured and constructible, otherwise `UnconfiguredSource`.

    Logging:
        - On success, logs an info message.
        - On failure, logs a warning including exception class and message.
    """
    try:
        client = build_supabase_client(settings)
    except Exception as exc:
        logger.warning("Supabase client unavailable: %s: %s", exc.__class__.__name__, str(exc))
        return UnconfiguredSource()
    if client is None:
        logger.info("Live source not configured (SUPABASE_URL/SUPABASE_ANON_KEY unset)")
        return UnconfiguredSource()
    logger.info("Live source wired: Supabase")
    return SupabaseLessonSource(client)


def wire(settings: Settings) -> None:
    """Build resolver and live source from settings (idempotent; replaces previous wiring)."""
    set_resolver(build_resolver(settings))
    set_source(build_live_source(settings))
    logger.info("Resolution wired: mode=%s cache=%s", settings.mode.value, settings.cache_path or "memory")


def set_resolver(resolver: Resolver) -> None:
    global RESOLVER
    RESOLVER = resolver


def set_source(source: Any) -> None:
    global SOURCE
    SOURCE = source


def get_resolver() -> Resolver:
    if RESOLVER is None:
        raise RuntimeError("resolver_not_wired")
    return RESOLVER


def get_source() -> Any:
    if SOURCE is None:
        raise RuntimeError("live_source_not_wired")
    return SOURCE


__all__ = [
    "build_resolver",
    "build_live_source",
    "wire",
    "set_resolver",
    "set_source",
    "get_resolver",
    "get_source",
]
