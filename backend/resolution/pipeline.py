"""
Resolution pipeline: live backend, then durable cache, then mock data.

Intent:
    Give every read path one call that returns a value plus the source that
    produced it. Pages render the value; tests and the dev panel assert on the
    provenance tag.

Order (single attempt per source, no retries):
    1. Strict mode requires a ready auth context with an external identity,
       otherwise `AuthRequired` ("no right to ask" is not "no data").
    2. Effective identity: the fixed development identity in augmented mode,
       the mapped session identity in strict mode.
    3. Live fetch. Non-empty results are written through to the cache and
       tagged LIVE. Empty results are returned as LIVE in strict mode and fall
       through in augmented mode. Failures raise `LiveSourceError` in strict
       mode and fall through in augmented mode.
    4. Cache hit: CACHED (after empty) / CACHED_FALLBACK (after error).
    5. Mock dataset: MOCK (after empty) / MOCK_FALLBACK (after error).
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional

from backend.cache.store import DurableCache
from backend.identity_access.domain import DEV_TEACHER_ID
from backend.identity_access.mapping import to_internal_identity
from backend.identity_access.stores import AuthContext
from backend.mode import Mode, ModeResolver

from .errors import AuthRequired, LiveSourceError
from .mocks import MockProvider, mock_dataset
from .provenance import Resolution, Source

logger = logging.getLogger("lessonbook.resolution")

LiveFetch = Callable[[str], Awaitable[Any]]

_MISS = object()


def is_empty(value: Any) -> bool:
    """None and empty containers/strings count as "no data"."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, str, set)):
        return len(value) == 0
    return False


class Resolver:
    def __init__(self, mode: Mode, cache: DurableCache, *, mocks: Optional[MockProvider] = None):
        self._mode = ModeResolver(mode)
        self._cache = cache
        self._mocks = mocks or mock_dataset

    @property
    def mode(self) -> Mode:
        return self._mode.mode

    @property
    def cache(self) -> DurableCache:
        return self._cache

    def effective_identity(self, auth: AuthContext) -> str:
        """Identity handed to the live source for this caller.

        Raises:
            AuthRequired: strict mode without a ready, signed-in context.
            IdentityError: propagated from the mapper.
        """
        if self._mode.is_augmented():
            return DEV_TEACHER_ID
        if not auth.ready:
            raise AuthRequired("auth_not_ready")
        if not auth.external_id:
            raise AuthRequired()
        return to_internal_identity(auth.external_id)

    async def resolve(self, logical_name: str, live_fetch: LiveFetch, auth: AuthContext) -> Resolution:
        identity = self.effective_identity(auth)
        augmented = self._mode.is_augmented()

        failed = False
        try:
            value = await live_fetch(identity)
        except Exception as exc:
            logger.warning("live fetch failed for %s: %s: %s", logical_name, exc.__class__.__name__, exc)
            if not augmented:
                raise LiveSourceError(logical_name) from exc
            failed = True
            value = None

        if not failed:
            if not is_empty(value):
                self._cache.put(logical_name, value)
                return Resolution(value=value, source=Source.LIVE)
            if not augmented:
                return Resolution(value=value, source=Source.LIVE)
            self._mode.log_augmented("no live data for %s, checking cache", logical_name)

        cached = self._cache.get(logical_name, _MISS)
        if cached is not _MISS and not is_empty(cached):
            source = Source.CACHED_FALLBACK if failed else Source.CACHED
            self._mode.log_augmented("serving %s from cache (%s)", logical_name, source.value)
            return Resolution(value=cached, source=source)

        source = Source.MOCK_FALLBACK if failed else Source.MOCK
        self._mode.log_augmented("serving %s from mock data (%s)", logical_name, source.value)
        return Resolution(value=self._mock(logical_name), source=source)

    def _mock(self, logical_name: str) -> Any:
        try:
            return self._mocks(logical_name)
        except KeyError:
            logger.warning("no mock dataset registered for %s", logical_name)
            return None

    def clear_all_cached(self) -> int:
        return self._cache.clear_all()


__all__ = ["LiveFetch", "Resolver", "is_empty"]
