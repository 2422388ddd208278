"""
Identity domain constants.

Why:
- Centralize allowed roles to avoid drift between the session store and web layer.
- Keep the development identity in one place: mock data, cached responses and
  dev-mode RLS policies all reference it.
"""

from __future__ import annotations

# Keep roles minimal and explicit. Immutable to prevent accidental mutation.
ALLOWED_ROLES = frozenset({"student", "teacher", "admin"})

# Acting identity whenever augmented (dev) mode is active. Do not modify once
# in use; cached envelopes and mock rows reference it.
DEV_TEACHER_ID = "a0eebc99-9c0b-4ef8-bb6d-6bb9bd380a11"

__all__ = ["ALLOWED_ROLES", "DEV_TEACHER_ID"]
