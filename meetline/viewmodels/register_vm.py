from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from meetline.domain.entities import User
from meetline.domain.ports import UseCaseError
from meetline.usecases.register import Register

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisterUiState:
    is_loading: bool = False
    is_success: bool = False
    error: Optional[str] = None
    user: Optional[User] = None
    """The account created by a successful ``register`` call."""


class RegisterVM(ScreenController[RegisterUiState]):
    """Account creation screen state."""

    def __init__(self, *, register: Register, scope: Optional[ControllerScope] = None) -> None:
        super().__init__(RegisterUiState(), scope=scope)
        self._register = register

    def register(self, name: str, email: str, phone: str, password: str) -> asyncio.Task:
        self._update(is_loading=True, error=None)
        return self.scope.launch(self._run_register(name, email, phone, password), key="register")

    def clear_error(self) -> None:
        self._update(error=None)

    async def _run_register(self, name: str, email: str, phone: str, password: str) -> None:
        try:
            user = await self._register(name, email, phone, password)
        except UseCaseError as exc:
            log.info("Registration failed: %s", exc.code)
            self._update(is_loading=False, is_success=False, error=exc.message)
            return
        self._update(is_loading=False, is_success=True, user=user, error=None)


__all__ = ["RegisterUiState", "RegisterVM"]
