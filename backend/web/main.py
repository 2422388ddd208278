"Lessonbook web API"
from __future__ import annotations

import logging
import os
import sys

from fastapi import FastAPI, Request

from backend.config import ensure_secure_config_on_startup, load_settings
from backend.identity_access.stores import SessionStore
from backend.web import wiring


def _should_load_dotenv() -> bool:
    """Decide if we should load a local .env file.

    - Never load under pytest to avoid contaminating test env.
    - Allow explicit opt-out via LESSONBOOK_ENABLE_DOTENV (default true
      outside pytest).
    """
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("LESSONBOOK_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


try:
    from dotenv import load_dotenv
    if _should_load_dotenv():
        load_dotenv()
except ImportError:
    pass

logger = logging.getLogger("lessonbook.web")

# Read once; every component below receives these settings (or their mode).
SETTINGS = load_settings()
ensure_secure_config_on_startup(SETTINGS)

SESSION_COOKIE_NAME = "lessonbook_session"
SESSION_STORE = SessionStore()

app = FastAPI(title="Lessonbook", description="Lesson management API", version="0.1.0")

wiring.wire(SETTINGS)


@app.middleware("http")
async def auth_context_middleware(request: Request, call_next):
    """Attach the caller's AuthContext (from the opaque session cookie) to request.state."""
    sid = request.cookies.get(SESSION_COOKIE_NAME)
    request.state.auth = SESSION_STORE.auth_context_for(sid)
    return await call_next(request)


from backend.web.routes.lessons import lessons_router  # noqa: E402
from backend.web.routes.operations import operations_router  # noqa: E402

app.include_router(lessons_router)
app.include_router(operations_router)
