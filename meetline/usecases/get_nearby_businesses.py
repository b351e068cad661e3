from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from meetline.domain.entities import Business
from meetline.domain.ports import BusinessRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetNearbyBusinesses:
    """Businesses close to the given coordinates (or a default area when omitted)."""

    business_repo: BusinessRepository

    async def __call__(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> List[Business]:
        if (latitude is None) != (longitude is None):
            raise UseCaseError("VALIDATION", "Latitude and longitude must be given together")
        try:
            return list(await self.business_repo.get_nearby_businesses(latitude, longitude))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="NEARBY_FAILED",
                default_message="Could not load nearby businesses.",
            ) from exc


__all__ = ["GetNearbyBusinesses"]
