"""REST adapter implementing ``AppointmentRepository``.

Client appointments live on a separate appointments service
(``appointments_url``); creation goes through the main backend. The adapter
keeps the last fetched list as a local cache from which the upcoming/past
views are derived without another round trip.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from meetline.adapters.api_errors import ensure_ok, json_list, json_object
from meetline.adapters.http_client import RetryingSession, run_blocking
from meetline.adapters.mapping import appointment_from_client_payload, create_appointment_payload
from meetline.domain.entities import (
    Appointment,
    AppointmentStatus,
    Business,
    Professional,
    Service,
    User,
    now_millis,
)
from meetline.domain.ports import AppointmentRepository, AuthRepository

log = logging.getLogger(__name__)


class AppointmentRestAdapter(AppointmentRepository):
    """HTTP adapter for the signed-in client's appointments."""

    def __init__(self, http: RetryingSession, auth: AuthRepository, appointments_url: str) -> None:
        self.http = http
        self.auth = auth
        self.appointments_url = appointments_url if appointments_url.endswith("/") else f"{appointments_url}/"
        self._cache: List[Appointment] = []

    # ---- cached views ----
    async def get_appointments(self) -> List[Appointment]:
        return list(self._cache)

    async def get_upcoming_appointments(self) -> List[Appointment]:
        now = now_millis()
        upcoming = [
            a for a in self._cache
            if a.date >= now and a.status != AppointmentStatus.CANCELLED
        ]
        return sorted(upcoming, key=lambda a: a.date)

    async def get_past_appointments(self) -> List[Appointment]:
        now = now_millis()
        past = [
            a for a in self._cache
            if a.date < now or a.status == AppointmentStatus.COMPLETED
        ]
        return sorted(past, key=lambda a: a.date, reverse=True)

    # ---- remote ----
    async def get_my_active_appointments(self) -> List[Appointment]:
        appointments = await run_blocking(self._fetch_client_appointments, True)
        self._cache = list(appointments)
        return appointments

    async def get_my_appointment_history(self) -> List[Appointment]:
        appointments = await run_blocking(self._fetch_client_appointments, False)
        self._cache = list(appointments)
        return appointments

    async def create_appointment(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: int,
        time: str,
        notes: Optional[str] = None,
    ) -> Appointment:
        client = await self.auth.get_user_profile()
        created = await run_blocking(
            self._post_appointment, business, professional, service, date, time, notes, client
        )
        # Keep the richer snapshots the caller already holds.
        appointment = replace(
            created,
            user_id=created.user_id or client.id,
            business=business,
            professional=professional,
            service=service,
            date=created.date or date,
            time=time if not created.date else created.time,
        )
        self._cache.append(appointment)
        log.info("Booked appointment %s at %s", appointment.id, business.id)
        return appointment

    async def cancel_appointment(self, appointment_id: str) -> bool:
        await run_blocking(self._delete_appointment, appointment_id)
        self._cache = [
            replace(a, status=AppointmentStatus.CANCELLED) if a.id == appointment_id else a
            for a in self._cache
        ]
        return True

    # ------------------------------------------------------------------
    def _client_appointments_url(self) -> str:
        return f"{self.appointments_url}api/client/appointments"

    def _fetch_client_appointments(self, pending_only: bool) -> List[Appointment]:
        ctx = "client_appointments[active]" if pending_only else "client_appointments[history]"
        resp = self.http.get(
            self._client_appointments_url(),
            params={"pendingOnly": "true" if pending_only else "false"},
        )
        ensure_ok(resp, ctx)
        return [appointment_from_client_payload(item) for item in json_list(resp, ctx) if isinstance(item, dict)]

    def _post_appointment(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: int,
        time: str,
        notes: Optional[str],
        client: User,
    ) -> Appointment:
        ctx = f"create_appointment[{business.id}]"
        body = create_appointment_payload(business, professional, service, date, time, notes, client)
        resp = self.http.post(f"api/projects/{business.id}/appointments", json_body=body)
        ensure_ok(resp, ctx)
        return appointment_from_client_payload(json_object(resp, ctx))

    def _delete_appointment(self, appointment_id: str) -> None:
        resp = self.http.delete(f"{self._client_appointments_url()}/{appointment_id}")
        ensure_ok(resp, f"cancel_appointment[{appointment_id}]")


__all__ = ["AppointmentRestAdapter"]
