from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.ports import AppointmentRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class CancelAppointment:
    appointment_repo: AppointmentRepository

    async def __call__(self, appointment_id: str) -> bool:
        normalized = str(appointment_id or "").strip()
        if not normalized:
            raise UseCaseError("VALIDATION", "Appointment id is required")
        try:
            return bool(await self.appointment_repo.cancel_appointment(normalized))
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="CANCEL_FAILED",
                default_message="Could not cancel the appointment.",
            ) from exc


__all__ = ["CancelAppointment"]
