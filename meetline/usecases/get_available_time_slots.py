from __future__ import annotations

from dataclasses import dataclass
from typing import List

from meetline.domain.entities import TimeSlot
from meetline.domain.ports import BusinessRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetAvailableTimeSlots:
    """Time slots of one professional on the day containing ``date`` (epoch millis)."""

    business_repo: BusinessRepository

    async def __call__(self, business_id: str, professional_id: str, date: int) -> List[TimeSlot]:
        try:
            return list(await self.business_repo.get_available_time_slots(business_id, professional_id, date))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="SLOTS_FAILED",
                default_message="Could not load available times.",
            ) from exc


__all__ = ["GetAvailableTimeSlots"]
