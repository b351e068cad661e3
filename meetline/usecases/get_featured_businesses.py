from __future__ import annotations

from dataclasses import dataclass
from typing import List

from meetline.domain.entities import Business
from meetline.domain.ports import BusinessRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetFeaturedBusinesses:
    business_repo: BusinessRepository

    async def __call__(self) -> List[Business]:
        try:
            return list(await self.business_repo.get_featured_businesses())
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="FEATURED_FAILED",
                default_message="Could not load featured businesses.",
            ) from exc


__all__ = ["GetFeaturedBusinesses"]
