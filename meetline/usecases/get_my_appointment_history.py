from __future__ import annotations

from dataclasses import dataclass
from typing import List

from meetline.domain.entities import Appointment
from meetline.domain.ports import AppointmentRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetMyAppointmentHistory:
    appointment_repo: AppointmentRepository

    async def __call__(self) -> List[Appointment]:
        try:
            return list(await self.appointment_repo.get_my_appointment_history())
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="APPOINTMENT_HISTORY_FAILED",
                default_message="Could not load your appointment history.",
            ) from exc


__all__ = ["GetMyAppointmentHistory"]
