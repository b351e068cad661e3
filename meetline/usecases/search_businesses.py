from __future__ import annotations

from dataclasses import dataclass
from typing import List

from meetline.domain.entities import Business
from meetline.domain.ports import BusinessRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class SearchBusinesses:
    business_repo: BusinessRepository

    async def __call__(self, query: str) -> List[Business]:
        try:
            return list(await self.business_repo.search_businesses(query))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="SEARCH_FAILED",
                default_message="Search failed.",
            ) from exc


__all__ = ["SearchBusinesses"]
