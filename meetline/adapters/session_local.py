"""Session persistence: key-value stores plus a typed session view.

``SessionStoreLocal`` keeps the signed-in user and tokens in a small JSON
file so a restarted client skips the login screen; ``InMemorySessionStore``
is the throwaway variant used by tests and the offline catalog.
``SessionManager`` is what the REST adapters and the HTTP transport talk to.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import Any, Dict, Optional

from meetline.domain.entities import User, now_millis
from meetline.domain.ports import SessionStore

log = logging.getLogger(__name__)

KEY_USER = "user"
KEY_AUTH_TOKEN = "auth_token"
KEY_REFRESH_TOKEN = "refresh_token"
KEY_EXPIRES_AT = "token_expires_at"


def _apply(data: Dict[str, Any], values: Dict[str, Any]) -> None:
    # None removes the key
    for key, value in values.items():
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value


class InMemorySessionStore(SessionStore):
    """Dict-backed store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.update({key: value})

    def update(self, values: Dict[str, Any]) -> None:
        with self._lock:
            _apply(self._data, values)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class SessionStoreLocal(SessionStore):
    """JSON file store for the local session (written atomically).

    The HTTP transport may clear the session from an executor thread while
    the loop writes it, so every read-modify-write holds ``_lock``.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._data: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.update({key: value})

    def update(self, values: Dict[str, Any]) -> None:
        with self._lock:
            data = dict(self._load())
            _apply(data, values)
            self._flush(data)

    def clear(self) -> None:
        with self._lock:
            self._data = {}
            if os.path.exists(self.path):
                os.remove(self.path)

    # ---- file handling ----
    def _load(self) -> Dict[str, Any]:
        if self._data is not None:
            return self._data
        if not os.path.exists(self.path):
            self._data = {}
            return self._data
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            payload = {}
        self._data = payload if isinstance(payload, dict) else {}
        return self._data

    def _flush(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".session-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        self._data = data


def user_to_dict(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at,
    }


def user_from_dict(data: Any) -> Optional[User]:
    if not isinstance(data, dict) or not data.get("id"):
        return None
    created_at = data.get("created_at")
    return User(
        id=str(data["id"]),
        name=str(data.get("name") or ""),
        email=str(data.get("email") or ""),
        phone=str(data.get("phone") or ""),
        avatar_url=data.get("avatar_url") or None,
        created_at=int(created_at) if created_at is not None else now_millis(),
    )


class SessionManager:
    """Typed view over a ``SessionStore`` holding the user and auth tokens."""

    def __init__(self, store: SessionStore) -> None:
        self.store = store

    def save_session(
        self,
        user: User,
        token: str,
        refresh_token: Optional[str] = None,
        expires_at: Optional[int] = None,
    ) -> None:
        self.store.update(
            {
                KEY_USER: user_to_dict(user),
                KEY_AUTH_TOKEN: token,
                KEY_REFRESH_TOKEN: refresh_token,
                KEY_EXPIRES_AT: expires_at,
            }
        )
        log.debug("Session saved for user %s", user.id)

    def current_user(self) -> Optional[User]:
        return user_from_dict(self.store.get(KEY_USER))

    def update_user(self, user: User) -> None:
        self.store.set(KEY_USER, user_to_dict(user))

    def auth_token(self) -> Optional[str]:
        token = self.store.get(KEY_AUTH_TOKEN)
        return str(token) if token else None

    def refresh_token(self) -> Optional[str]:
        token = self.store.get(KEY_REFRESH_TOKEN)
        return str(token) if token else None

    def is_logged_in(self) -> bool:
        return self.auth_token() is not None and self.current_user() is not None

    def is_token_expired(self) -> bool:
        """True once the stored expiry (epoch millis) has passed; no expiry means valid."""
        expires_at = self.store.get(KEY_EXPIRES_AT)
        if not expires_at:
            return False
        return now_millis() >= int(expires_at)

    def logout(self) -> None:
        self.store.clear()
        log.info("Local session cleared")


__all__ = [
    "InMemorySessionStore",
    "SessionManager",
    "SessionStoreLocal",
    "user_from_dict",
    "user_to_dict",
]
