"""Use case exposing the cached appointment views (all, upcoming, past)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable, List

from meetline.domain.entities import Appointment
from meetline.domain.ports import AppointmentRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error


@dataclass
class GetAppointments:
    appointment_repo: AppointmentRepository

    async def __call__(self) -> List[Appointment]:
        return await self.all()

    async def all(self) -> List[Appointment]:
        return await self._run(self.appointment_repo.get_appointments)

    async def upcoming(self) -> List[Appointment]:
        """Future, non-cancelled appointments, soonest first."""
        return await self._run(self.appointment_repo.get_upcoming_appointments)

    async def past(self) -> List[Appointment]:
        """Elapsed or completed appointments, most recent first."""
        return await self._run(self.appointment_repo.get_past_appointments)

    @staticmethod
    async def _run(fetch: Callable[[], Awaitable[List[Appointment]]]) -> List[Appointment]:
        try:
            return list(await fetch())
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="APPOINTMENTS_FAILED",
                default_message="Could not load appointments.",
            ) from exc


__all__ = ["GetAppointments"]
