"""Task ownership for one screen view-model.

Every coroutine a view-model starts goes through ``ControllerScope.launch``
so it can be cancelled when the screen goes away. A ``key`` names an action
kind: launching under a key that still has a running task cancels that task
first, so only the most recently issued call of that kind can fold its
result into the UI state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Coroutine, Dict, Optional, Set

log = logging.getLogger(__name__)


class ControllerScope:
    """Track, replace and cancel the asyncio tasks of one view-model."""

    def __init__(self, name: str = "controller") -> None:
        self.name = name
        self._tasks: Set[asyncio.Task] = set()
        self._keyed: Dict[str, asyncio.Task] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def launch(self, coro: Coroutine[Any, Any, Any], *, key: Optional[str] = None) -> asyncio.Task:
        """Schedule ``coro`` on the running loop.

        Args:
            coro: Coroutine to run.
            key: Action kind; a still-running task under the same key is cancelled.

        Returns:
            The created task.

        Raises:
            RuntimeError: If the scope was closed or no loop is running.
        """
        if self._closed:
            coro.close()
            raise RuntimeError(f"{self.name}: scope is closed")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        if key is not None:
            self.cancel(key)
        task = loop.create_task(coro)
        self._tasks.add(task)
        if key is not None:
            self._keyed[key] = task
        task.add_done_callback(lambda done: self._forget(done, key))
        return task

    def cancel(self, key: str) -> None:
        """Cancel the running task launched under ``key``, if any."""
        task = self._keyed.pop(key, None)
        if task is not None and not task.done():
            log.debug("%s: superseding running '%s' call", self.name, key)
            task.cancel()

    def is_running(self, key: str) -> bool:
        task = self._keyed.get(key)
        return task is not None and not task.done()

    async def join(self) -> None:
        """Wait until no tracked task is left, including ones started meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Cancel every tracked task; later ``launch`` calls fail."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
        self._keyed.clear()

    def _forget(self, task: asyncio.Task, key: Optional[str]) -> None:
        self._tasks.discard(task)
        if key is not None and self._keyed.get(key) is task:
            del self._keyed[key]
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error("%s: task failed", self.name, exc_info=exc)


__all__ = ["ControllerScope"]
