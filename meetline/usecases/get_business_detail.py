"""Use case for loading one business with staff, services and contact channels."""

from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.entities import Business
from meetline.domain.ports import BusinessRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetBusinessDetail:
    business_repo: BusinessRepository

    async def __call__(self, business_id: str) -> Business:
        normalized = str(business_id or "").strip()
        if not normalized:
            raise UseCaseError("VALIDATION", "Business id is required")
        try:
            return await self.business_repo.get_business_detail(normalized)
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="BUSINESS_DETAIL_FAILED",
                default_message="Could not load the business.",
            ) from exc


__all__ = ["GetBusinessDetail"]
