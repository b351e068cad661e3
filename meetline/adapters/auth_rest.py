"""REST adapter implementing ``AuthRepository`` against ``api/client/auth``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from meetline.adapters.api_errors import ApiError, ensure_ok, json_object
from meetline.adapters.http_client import RetryingSession, run_blocking
from meetline.adapters.mapping import (
    user_from_auth_response,
    user_from_payload,
    user_to_payload,
)
from meetline.adapters.session_local import SessionManager
from meetline.domain.entities import User
from meetline.domain.ports import AuthRepository

log = logging.getLogger(__name__)

LOGIN_PATH = "api/client/auth/login"
REGISTER_PATH = "api/client/auth/register"
FORGOT_PASSWORD_PATH = "api/client/auth/forgot-password"
RESET_PASSWORD_PATH = "api/client/auth/reset-password"
ME_PATH = "api/client/auth/me"


class AuthRestAdapter(AuthRepository):
    """HTTP adapter for client authentication and the ``me`` profile."""

    def __init__(self, http: RetryingSession, sessions: SessionManager) -> None:
        self.http = http
        self.sessions = sessions

    # ---- async port surface ----
    # Worker threads only talk HTTP; the session is written back on the loop
    # once the await returns, so a cancelled call leaves it untouched.
    async def login(self, email: str, password: str) -> User:
        user, payload = await run_blocking(self._login, email, password)
        self._save(user, payload)
        log.info("Signed in as %s", user.id)
        return user

    async def register(self, name: str, email: str, phone: str, password: str) -> User:
        user, payload = await run_blocking(self._register, name, email, phone, password)
        self._save(user, payload)
        log.info("Registered account %s", user.id)
        return user

    async def get_user_profile(self) -> User:
        user = await run_blocking(self._get_profile)
        self.sessions.update_user(user)
        return user

    async def update_profile(self, user: User) -> User:
        updated = await run_blocking(self._put_profile, user)
        self.sessions.update_user(updated)
        return updated

    async def request_password_reset(self, email: str) -> None:
        await run_blocking(self._post_no_content, FORGOT_PASSWORD_PATH, {"email": email}, "request_password_reset")

    async def reset_password(self, token: str, new_password: str) -> None:
        body = {"token": token, "newPassword": new_password}
        await run_blocking(self._post_no_content, RESET_PASSWORD_PATH, body, "reset_password")

    # ---- local session ----
    def get_session(self) -> Optional[User]:
        return self.sessions.current_user()

    def logout(self) -> None:
        self.sessions.logout()

    # ---- blocking implementations ----
    def _login(self, email: str, password: str) -> Tuple[User, Dict[str, Any]]:
        resp = self.http.post(LOGIN_PATH, json_body={"email": email, "password": password})
        ensure_ok(resp, "login")
        payload = json_object(resp, "login")
        # Login does not echo the phone number; the profile fetch fills it in.
        return user_from_auth_response(payload), payload

    def _register(self, name: str, email: str, phone: str, password: str) -> Tuple[User, Dict[str, Any]]:
        body = {"email": email, "password": password, "fullName": name, "phone": phone}
        resp = self.http.post(REGISTER_PATH, json_body=body)
        ensure_ok(resp, "register")
        payload = json_object(resp, "register")
        return user_from_auth_response(payload, phone=phone), payload

    def _get_profile(self) -> User:
        resp = self.http.get(ME_PATH)
        ensure_ok(resp, "get_user_profile")
        return user_from_payload(json_object(resp, "get_user_profile"))

    def _put_profile(self, user: User) -> User:
        resp = self.http.put(ME_PATH, json_body=user_to_payload(user))
        ensure_ok(resp, "update_profile")
        return user_from_payload(json_object(resp, "update_profile"))

    def _post_no_content(self, path: str, body: Dict[str, Any], ctx: str) -> None:
        resp = self.http.post(path, json_body=body)
        ensure_ok(resp, ctx)

    def _save(self, user: User, payload: Dict[str, Any]) -> None:
        token = str(payload.get("token") or "")
        if not token:
            raise ApiError("Authentication response carried no token", payload=payload)
        refresh = payload.get("refreshToken") or payload.get("refresh_token")
        expires_at = payload.get("expiresAt") or payload.get("expires_at")
        self.sessions.save_session(
            user,
            token,
            refresh_token=str(refresh) if refresh else None,
            expires_at=int(expires_at) if isinstance(expires_at, (int, float)) else None,
        )


__all__ = ["AuthRestAdapter"]
