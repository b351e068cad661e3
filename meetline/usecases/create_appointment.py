"""Use case for booking a service with a professional at a given slot."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from meetline.domain.entities import Appointment, Business, Professional, Service
from meetline.domain.ports import AppointmentRepository, UseCaseError
from meetline.usecases.error_mapping import map_api_error

_CLOCK_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass
class CreateAppointment:
    appointment_repo: AppointmentRepository

    async def __call__(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: int,
        time: str,
        notes: Optional[str] = None,
    ) -> Appointment:
        """Book ``service`` on the day of ``date`` (epoch millis) at ``time`` (``HH:mm``).

        Raises:
            UseCaseError: ``VALIDATION`` for a malformed time, otherwise the
                mapped adapter failure.
        """
        if not _CLOCK_RE.match(time or ""):
            raise UseCaseError("VALIDATION", "Select a valid time")
        cleaned_notes = (notes or "").strip() or None
        try:
            return await self.appointment_repo.create_appointment(
                business, professional, service, date, time, cleaned_notes
            )
        except UseCaseError:
            raise
        except Exception as exc:
            raise map_api_error(
                exc,
                default_code="BOOKING_FAILED",
                default_message="Could not book the appointment.",
            ) from exc


__all__ = ["CreateAppointment"]
