"""Use case for signing in with email and password."""

from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.entities import User
from meetline.domain.ports import AuthRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class Login:
    """Validate credentials for presence, then authenticate through ``AuthRepository``."""

    auth_repo: AuthRepository

    async def __call__(self, email: str, password: str) -> User:
        if not (email or "").strip():
            raise UseCaseError("VALIDATION", "Email is required")
        if not (password or "").strip():
            raise UseCaseError("VALIDATION", "Password is required")
        try:
            return await self.auth_repo.login(email.strip(), password)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="LOGIN_FAILED",
                default_message="Sign in failed.",
                unauthorized_message="Invalid email or password.",
            ) from exc


__all__ = ["Login"]
