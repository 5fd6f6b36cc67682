"""Cleanup helpers for partially produced output."""

from __future__ import annotations

import os
from typing import Callable, List

from .logging import get_logger

logger = get_logger(__name__)


class CleanupManager:
    """Registers cleanup callbacks to run in LIFO order."""

    def __init__(self) -> None:
        self._callbacks: List[Callable[[], None]] = []

    def register(self, cb: Callable[[], None]) -> None:
        self._callbacks.append(cb)

    def run(self) -> None:
        while self._callbacks:
            cb = self._callbacks.pop()
            try:
                cb()
            except OSError as exc:
                # Best-effort cleanup; keep unwinding the remaining callbacks.
                logger.warning("Cleanup callback failed: %s", exc)

    def __enter__(self) -> "CleanupManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.run()


def remove_file(path: str) -> Callable[[], None]:
    """Build a callback that deletes ``path`` if it still exists."""

    def _remove() -> None:
        if os.path.exists(path):
            os.remove(path)

    return _remove
