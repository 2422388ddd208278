"""Errors that cross the resolution boundary."""
from __future__ import annotations


class AuthRequired(PermissionError):
    """Strict mode resolution attempted without a ready, signed-in session."""

    def __init__(self, detail: str = "not_authenticated"):
        super().__init__(detail)
        self.detail = detail


class LiveSourceError(RuntimeError):
    """The live backend failed for `logical_name`; the original error is `__cause__`."""

    def __init__(self, logical_name: str, message: str = "backend_unavailable"):
        super().__init__(f"{message}: {logical_name}")
        self.logical_name = logical_name


__all__ = ["AuthRequired", "LiveSourceError"]
