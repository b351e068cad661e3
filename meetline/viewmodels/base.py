from __future__ import annotations

from dataclasses import replace
from typing import Any, AsyncIterator, Generic, Optional, TypeVar

from .scope import ControllerScope
from .state import StateStream

S = TypeVar("S")


class ScreenController(Generic[S]):
    """Common plumbing of the screen view-models.

    Subclasses hold a frozen ``*UiState`` dataclass in ``state`` and replace
    it wholesale on every transition through ``_set``/``_update``.
    """

    def __init__(self, initial: S, *, scope: Optional[ControllerScope] = None) -> None:
        self.state: StateStream[S] = StateStream(initial)
        self.scope = scope or ControllerScope(type(self).__name__)

    @property
    def ui_state(self) -> S:
        return self.state.value

    def observe(self) -> AsyncIterator[S]:
        return self.state.observe()

    async def join(self) -> None:
        """Wait for every in-flight action (tests and orderly teardown)."""
        await self.scope.join()

    def close(self) -> None:
        self.scope.close()

    def _set(self, state: S) -> None:
        self.state.emit(state)

    def _update(self, **changes: Any) -> None:
        self.state.emit(replace(self.state.value, **changes))


__all__ = ["ScreenController"]
