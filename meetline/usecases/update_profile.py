"""Use case for saving edits to the signed-in user's profile."""

from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.entities import User
from meetline.domain.ports import AuthRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class UpdateProfile:
    auth_repo: AuthRepository

    async def __call__(self, user: User) -> User:
        if not user.name.strip():
            raise UseCaseError("VALIDATION", "Name is required")
        if not user.email.strip():
            raise UseCaseError("VALIDATION", "Email is required")
        try:
            return await self.auth_repo.update_profile(user)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="PROFILE_UPDATE_FAILED",
                default_message="Could not save the profile.",
            ) from exc


__all__ = ["UpdateProfile"]
