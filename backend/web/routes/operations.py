"""Operations endpoints (health and dev cache maintenance)."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from backend.mode import Mode
from backend.web import wiring

operations_router = APIRouter(tags=["Operations"])


def _private_response(body: dict, *, status_code: int) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers={"Cache-Control": "private, no-store"})


def _dev_only():
    """404 unless the resolver runs in augmented mode; returns (resolver, error)."""
    resolver = wiring.get_resolver()
    if resolver.mode is not Mode.AUGMENTED:
        return None, _private_response({"error": "not_found"}, status_code=404)
    return resolver, None


@operations_router.get("/health")
async def health():
    resolver = wiring.get_resolver()
    return _private_response({"status": "ok", "mode": resolver.mode.value}, status_code=200)


@operations_router.get("/internal/cache")
async def cache_stats():
    """
    Return diagnostics for the durable cache (entry ages, freshness, sizes).

    Permissions:
        Augmented (dev) mode only; strict mode answers 404.
    """
    resolver, error = _dev_only()
    if error:
        return error
    return _private_response(resolver.cache.stats(), status_code=200)


@operations_router.delete("/internal/cache")
async def clear_cache():
    """Drop every cached envelope. Augmented (dev) mode only."""
    resolver, error = _dev_only()
    if error:
        return error
    return _private_response({"cleared": resolver.clear_all_cached()}, status_code=200)
