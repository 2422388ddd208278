"""
Lesson data API: read endpoints backed by the resolution pipeline.

Why:
    Pages need the value plus the source that produced it ("live", "cached",
    "mock", ...) so the dev UI can show a provenance badge. All reads go
    through `Resolver.resolve`; this module only maps results and errors to
    HTTP.

Permissions:
    Strict mode: a signed-in session (lessonbook_session cookie) is required.
    Augmented mode: requests act as the development teacher.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from backend.identity_access.mapping import IdentityError
from backend.identity_access.stores import NOT_READY
from backend.resolution.errors import AuthRequired, LiveSourceError
from backend.resolution.mocks import LESSONS, REPERTOIRE, STUDENTS, TEACHER_PROFILE
from backend.web import wiring

lessons_router = APIRouter(tags=["Lessons"])

logger = logging.getLogger("lessonbook.web")


def _private_no_store() -> dict:
    return {"Cache-Control": "private, no-store"}


def _private_response(body: dict, *, status_code: int = 200) -> JSONResponse:
    return JSONResponse(body, status_code=status_code, headers=_private_no_store())


async def _resolve(request: Request, logical_name: str) -> JSONResponse:
    auth = getattr(request.state, "auth", None) or NOT_READY
    resolver = wiring.get_resolver()
    fetch = wiring.get_source().fetchers()[logical_name]
    try:
        result = await resolver.resolve(logical_name, fetch, auth)
    except (AuthRequired, IdentityError):
        return _private_response({"error": "unauthenticated"}, status_code=401)
    except LiveSourceError as exc:
        logger.warning("backend unavailable for %s: %s", logical_name, exc.__cause__.__class__.__name__)
        return _private_response({"error": "backend_unavailable"}, status_code=503)
    return _private_response({"data": result.value, "source": result.source.value})


@lessons_router.get("/api/teacher")
async def get_teacher_profile(request: Request):
    """Profile of the acting teacher."""
    return await _resolve(request, TEACHER_PROFILE)


@lessons_router.get("/api/students")
async def list_students(request: Request):
    return await _resolve(request, STUDENTS)


@lessons_router.get("/api/lessons")
async def list_lessons(request: Request):
    """Lessons of the acting teacher, newest first."""
    return await _resolve(request, LESSONS)


@lessons_router.get("/api/repertoire")
async def list_repertoire(request: Request):
    return await _resolve(request, REPERTOIRE)
