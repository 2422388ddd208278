"""
Supabase-backed live sources, one async fetcher per logical entity.

This adapter is duck-typed against the supabase-py client: it only needs
``client.table(name)`` returning a PostgREST query builder with ``select``,
``eq``, ``order``, ``limit`` and ``execute`` (whose response exposes ``.data``).
Tests pass a fake with the same shape.

Behavior:
    - supabase-py is blocking; every query runs in a worker thread so the
      event loop is never blocked.
    - Errors (network, PostgREST) propagate unchanged. Turning them into a
      fallback or a `LiveSourceError` is the pipeline's job.
    - Retries and timeouts are left to the client configuration.

Security:
    The caller must build the client with the anon key; row-level security
    restricts rows to the effective identity passed in.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

from backend.config import Settings

from .mocks import LESSONS, REPERTOIRE, STUDENTS, TEACHER_PROFILE
from .pipeline import LiveFetch


def build_supabase_client(settings: Settings) -> Any:
    """Create a supabase client from settings, or None when not configured."""
    if not settings.supabase_url or not settings.supabase_key:
        return None
    from supabase import create_client  # lazy: keeps import cost out of pure cache paths

    return create_client(settings.supabase_url, settings.supabase_key)


def _rows(response: Any) -> List[Dict[str, Any]]:
    data = getattr(response, "data", None)
    if data is None and isinstance(response, dict):
        data = response.get("data")
    if data is None:
        return []
    if isinstance(data, dict):
        return [data]
    return list(data)


class SupabaseLessonSource:
    def __init__(self, client: Any):
        self._client = client

    async def _run(self, build_and_execute) -> List[Dict[str, Any]]:
        response = await asyncio.to_thread(build_and_execute)
        return _rows(response)

    async def teacher_profile(self, identity: str) -> Optional[Dict[str, Any]]:
        rows = await self._run(
            lambda: self._client.table("profiles").select("*").eq("id", identity).limit(1).execute()
        )
        return rows[0] if rows else None

    async def students(self, identity: str) -> List[Dict[str, Any]]:
        return await self._run(
            lambda: self._client.table("students").select("*").eq("user_id", identity).order("name").execute()
        )

    async def lessons(self, identity: str) -> List[Dict[str, Any]]:
        return await self._run(
            lambda: self._client.table("lessons")
            .select("*")
            .eq("teacher_id", identity)
            .order("date", desc=True)
            .execute()
        )

    async def repertoire(self, identity: str) -> List[Dict[str, Any]]:
        return await self._run(
            lambda: self._client.table("master_repertoire").select("*").eq("teacher_id", identity).order("title").execute()
        )

    def fetchers(self) -> Dict[str, LiveFetch]:
        """Logical name -> live fetcher, as consumed by the web layer."""
        return {
            TEACHER_PROFILE: self.teacher_profile,
            STUDENTS: self.students,
            LESSONS: self.lessons,
            REPERTOIRE: self.repertoire,
        }


class UnconfiguredSource:
    """Stand-in when no backend is configured: every fetch fails like an outage."""

    async def _unavailable(self, identity: str) -> Any:
        raise ConnectionError("live backend not configured")

    def fetchers(self) -> Dict[str, LiveFetch]:
        return {name: self._unavailable for name in (TEACHER_PROFILE, STUDENTS, LESSONS, REPERTOIRE)}


__all__ = ["SupabaseLessonSource", "UnconfiguredSource", "build_supabase_client"]
