"""Use case for refreshing the signed-in user's profile from the backend."""

from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.entities import User
from meetline.domain.ports import AuthRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetUserProfile:
    auth_repo: AuthRepository

    async def __call__(self) -> User:
        try:
            return await self.auth_repo.get_user_profile()
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="PROFILE_FETCH_FAILED",
                default_message="Could not load the profile.",
            ) from exc


__all__ = ["GetUserProfile"]
