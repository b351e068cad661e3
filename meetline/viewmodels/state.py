"""Replay-latest state holder shared by every screen view-model.

Renderers either register a callback with ``subscribe`` or iterate
``observe()`` from a coroutine. Both see the current snapshot first, then
every later emission in the order it was emitted.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Callable, Generic, List, TypeVar

S = TypeVar("S")

Listener = Callable[[S], None]


class StateStream(Generic[S]):
    """Hot observable holding exactly one UI-state snapshot."""

    def __init__(self, initial: S) -> None:
        self._value: S = initial
        self._listeners: List[Callable[[S], None]] = []

    @property
    def value(self) -> S:
        return self._value

    def emit(self, state: S) -> None:
        """Store ``state`` and notify listeners; an unchanged snapshot is dropped."""
        if state == self._value:
            return
        self._value = state
        for listener in list(self._listeners):
            listener(state)

    def subscribe(self, listener: Callable[[S], None]) -> Callable[[], None]:
        """Deliver the current snapshot now and later ones as emitted.

        Returns:
            Callable removing ``listener``; calling it twice is harmless.
        """
        self._listeners.append(listener)
        listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def observe(self) -> AsyncIterator[S]:
        """Async iterator over snapshots, starting with the current one.

        Nothing is registered until the first ``__anext__``; every call
        returns an independent observer that detaches when closed.
        """
        queue: asyncio.Queue = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()


__all__ = ["Listener", "StateStream"]
