"""Use case for creating a client account."""

from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.entities import User
from meetline.domain.ports import AuthRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error

MIN_PASSWORD_LENGTH = 6


@dataclass
class Register:
    auth_repo: AuthRepository

    async def __call__(self, name: str, email: str, phone: str, password: str) -> User:
        if not (name or "").strip():
            raise UseCaseError("VALIDATION", "Name is required")
        if not (email or "").strip():
            raise UseCaseError("VALIDATION", "Email is required")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise UseCaseError("VALIDATION", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        try:
            return await self.auth_repo.register(name.strip(), email.strip(), (phone or "").strip(), password)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="REGISTER_FAILED",
                default_message="Registration failed.",
            ) from exc


__all__ = ["MIN_PASSWORD_LENGTH", "Register"]
