"""Use case for listing businesses, optionally narrowed to one category."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from meetline.domain.entities import Business, BusinessCategory
from meetline.domain.ports import BusinessRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetBusinessList:
    business_repo: BusinessRepository

    async def __call__(self, category: Optional[BusinessCategory] = None) -> List[Business]:
        """Return every business when ``category`` is ``None``."""
        try:
            return list(await self.business_repo.get_business_list(category))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="BUSINESS_LIST_FAILED",
                default_message="Could not load businesses.",
            ) from exc


__all__ = ["GetBusinessList"]
