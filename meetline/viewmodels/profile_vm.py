"""Profile screen state: cached user, background refresh and edit mode."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Optional

from meetline.domain.entities import User
from meetline.domain.ports import UseCaseError
from meetline.usecases.get_session import GetSession
from meetline.usecases.get_user_profile import GetUserProfile
from meetline.usecases.logout import Logout
from meetline.usecases.update_profile import UpdateProfile

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileUiState:
    is_loading: bool = False
    user: Optional[User] = None
    is_editing: bool = False
    is_saving: bool = False
    save_success: bool = False
    error: Optional[str] = None
    is_logged_out: bool = False


class ProfileVM(ScreenController[ProfileUiState]):
    """Shows the cached user at once and refreshes it from the server.

    The refresh is best effort: when it fails the cached user stays on
    screen and no error is shown.
    """

    def __init__(
        self,
        *,
        get_session: GetSession,
        get_user_profile: GetUserProfile,
        update_profile: UpdateProfile,
        logout: Logout,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(ProfileUiState(), scope=scope)
        self._get_session = get_session
        self._get_user_profile = get_user_profile
        self._update_profile = update_profile
        self._logout = logout
        self.load_profile()

    def load_profile(self) -> Optional[asyncio.Task]:
        """Emit the session user as-is and refresh it in the background.

        Only a missing cached user counts as loading; a stale one is shown as is.
        Does nothing once the user logged out.
        """
        if self.ui_state.is_logged_out:
            return None
        cached = self._get_session()
        self._update(user=cached, is_loading=cached is None)
        return self.scope.launch(self._refresh(), key="refresh")

    def start_editing(self) -> None:
        if self.ui_state.is_logged_out:
            return
        self._update(is_editing=True, save_success=False)

    def cancel_editing(self) -> Optional[asyncio.Task]:
        """Leave edit mode, dropping unsaved edits by reloading the profile."""
        if self.ui_state.is_logged_out:
            return None
        self.scope.cancel("save")
        self._update(is_editing=False, is_saving=False)
        return self.load_profile()

    def save_profile(self, name: str, email: str, phone: str) -> Optional[asyncio.Task]:
        current = self.ui_state.user
        if current is None or self.ui_state.is_logged_out:
            return None
        edited = replace(current, name=name.strip(), email=email.strip(), phone=phone.strip())
        self._update(is_saving=True, save_success=False, error=None)
        return self.scope.launch(self._save(edited), key="save")

    def logout(self) -> None:
        self.scope.close()
        self._logout()
        self._set(ProfileUiState(is_logged_out=True))

    def clear_messages(self) -> None:
        self._update(save_success=False, error=None)

    async def _refresh(self) -> None:
        try:
            user = await self._get_user_profile()
        except UseCaseError as exc:
            log.info("Profile refresh failed, keeping cached user: %s", exc.code)
            self._update(is_loading=False)
            return
        self._update(user=user, is_loading=False)

    async def _save(self, edited: User) -> None:
        try:
            saved = await self._update_profile(edited)
        except UseCaseError as exc:
            log.info("Profile save failed: %s", exc.code)
            self._update(is_saving=False, error=exc.message)
            return
        self._update(user=saved, is_saving=False, is_editing=False, save_success=True, error=None)


__all__ = ["ProfileUiState", "ProfileVM"]
