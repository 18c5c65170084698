"""Detached task tracking.

A detached task is started by a request but not joined by it. The tracker
keeps a strong reference until the task settles, logs failures so they are
never left unretrieved, and lets callers wait for everything in flight.
"""

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DetachedTaskTracker:
    """Owns background work started on behalf of already-answered requests."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, T], name: str | None = None) -> "asyncio.Task[T]":
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._settle)
        return task

    def _settle(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Detached task %s failed: %s", task.get_name(), exc)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def drain(self) -> None:
        """Wait until every detached task, including ones spawned meanwhile, settles."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
