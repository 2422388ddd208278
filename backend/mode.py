"""
Operating mode and mode-guarded helpers.

Augmented mode permits fallback to cached and mock data and acts as the
development identity; strict mode requires a live backend and a signed-in
user. The mode is fixed when a `ModeResolver` is built, so every helper is a
plain branch over a captured value.
"""
from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger("lessonbook.mode")


class Mode(str, Enum):
    AUGMENTED = "augmented"
    STRICT = "strict"


class ModeResolver:
    def __init__(self, mode: Mode):
        self._mode = Mode(mode)

    @property
    def mode(self) -> Mode:
        return self._mode

    def is_augmented(self) -> bool:
        return self._mode is Mode.AUGMENTED

    def select(self, augmented_fn: Callable[[], T], strict_fn: Callable[[], T]) -> T:
        """Invoke exactly one producer for the current mode and return its result."""
        return augmented_fn() if self.is_augmented() else strict_fn()

    def run_augmented(self, fn: Callable[[], T]) -> Optional[T]:
        """Invoke `fn` only in augmented mode; return None otherwise."""
        if self.is_augmented():
            return fn()
        return None

    def run_strict(self, fn: Callable[[], T]) -> Optional[T]:
        """Invoke `fn` only in strict mode; return None otherwise."""
        if not self.is_augmented():
            return fn()
        return None

    def log_augmented(self, msg: str, *args: Any) -> None:
        if self.is_augmented():
            logger.info("[DEV MODE] " + msg, *args)

    def log_strict(self, msg: str, *args: Any) -> None:
        if not self.is_augmented():
            logger.info("[PRODUCTION] " + msg, *args)


__all__ = ["Mode", "ModeResolver"]
