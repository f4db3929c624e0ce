"""Per-document debouncing of lint runs.

Only the host debounces; the linters themselves run every call they get.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from lintbridge.logging import get_logger


class DebounceManager:
    """Keeps at most one pending lint task per document URI."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        if logger is None:
            logger = get_logger("lsp.debounce")
        self._logger = logger
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._lock = asyncio.Lock()

    async def schedule(
        self,
        uri: str,
        func: Callable[[], Awaitable[None]],
        delay_ms: int = 300,
    ) -> None:
        """
        Run ``func`` after ``delay_ms``, replacing any task pending for ``uri``.

        A replaced task is cancelled even if its linter is already running;
        the cancellation tears its subprocess down.
        """
        async with self._lock:
            await self._cancel_locked(uri)
            self._tasks[uri] = asyncio.create_task(self._debounced_call(func, delay_ms))

    async def cancel(self, uri: str) -> None:
        """Cancel and forget any task for ``uri``."""
        async with self._lock:
            await self._cancel_locked(uri)
            self._tasks.pop(uri, None)

    async def _cancel_locked(self, uri: str) -> None:
        task = self._tasks.get(uri)
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _debounced_call(
        self, func: Callable[[], Awaitable[None]], delay_ms: int
    ) -> None:
        try:
            await asyncio.sleep(delay_ms / 1000)
            await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            self._logger.exception("Debounced lint task failed")
