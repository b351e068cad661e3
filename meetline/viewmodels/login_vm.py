"""Sign-in screen state.

Construction checks the cached session synchronously: a signed-in user
short-circuits straight to the success state without a network call.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from meetline.domain.entities import User
from meetline.domain.ports import UseCaseError
from meetline.usecases.get_session import GetSession
from meetline.usecases.login import Login

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginUiState:
    is_loading: bool = False
    is_success: bool = False
    error: Optional[str] = None
    user: Optional[User] = None


class LoginVM(ScreenController[LoginUiState]):
    def __init__(
        self,
        *,
        login: Login,
        get_session: GetSession,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(LoginUiState(), scope=scope)
        self._login = login
        user = get_session()
        if user is not None:
            self._set(LoginUiState(is_success=True, user=user))

    def login(self, email: str, password: str) -> asyncio.Task:
        self._update(is_loading=True, error=None)
        return self.scope.launch(self._run_login(email, password), key="login")

    def clear_error(self) -> None:
        self._update(error=None)

    async def _run_login(self, email: str, password: str) -> None:
        try:
            user = await self._login(email, password)
        except UseCaseError as exc:
            log.info("Login failed: %s", exc.code)
            self._update(is_loading=False, is_success=False, error=exc.message)
            return
        self._update(is_loading=False, is_success=True, user=user, error=None)


__all__ = ["LoginUiState", "LoginVM"]
