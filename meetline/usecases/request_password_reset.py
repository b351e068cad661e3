"""Use cases for the forgot-password flow (request mail, then set a new password)."""

from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.ports import AuthRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error
from meetline.usecases.register import MIN_PASSWORD_LENGTH


@dataclass
class RequestPasswordReset:
    auth_repo: AuthRepository

    async def __call__(self, email: str) -> None:
        if not (email or "").strip():
            raise UseCaseError("VALIDATION", "Email is required")
        try:
            await self.auth_repo.request_password_reset(email.strip())
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="PASSWORD_RESET_FAILED",
                default_message="Could not request a password reset.",
            ) from exc


@dataclass
class ResetPassword:
    auth_repo: AuthRepository

    async def __call__(self, token: str, new_password: str) -> None:
        if not (token or "").strip():
            raise UseCaseError("VALIDATION", "Reset token is required")
        if len(new_password or "") < MIN_PASSWORD_LENGTH:
            raise UseCaseError("VALIDATION", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        try:
            await self.auth_repo.reset_password(token.strip(), new_password)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="PASSWORD_RESET_FAILED",
                default_message="Could not reset the password.",
            ) from exc


__all__ = ["RequestPasswordReset", "ResetPassword"]
