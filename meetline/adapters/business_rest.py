"""REST adapter implementing ``BusinessRepository``.

Every listing is derived from ``GET api/Projects/public``: the backend has no
server-side filtering, ranking or geo search yet, so category filters, text
search and the featured/nearby cuts happen here.
"""

from __future__ import annotations

import logging
from datetime import date as dt_date, datetime
from typing import Any, Dict, List, Optional

from meetline.adapters.api_errors import ApiClientError, ApiError, ensure_ok, json_list, json_object
from meetline.adapters.http_client import RetryingSession, run_blocking
from meetline.adapters.mapping import (
    business_from_project,
    calculate_working_hours,
    contact_channel_from_payload,
    professional_from_employee,
    time_slots_from_availability,
)
from meetline.domain.entities import Business, BusinessCategory, ContactChannel, Professional, TimeSlot
from meetline.domain.ports import BusinessRepository

log = logging.getLogger(__name__)

PROJECTS_PATH = "api/Projects/public"
FEATURED_LIMIT = 5
NEARBY_LIMIT = 6


class BusinessRestAdapter(BusinessRepository):
    """HTTP adapter for public projects, their staff, channels and availability."""

    def __init__(self, http: RetryingSession, appointments_url: str) -> None:
        self.http = http
        self.appointments_url = appointments_url if appointments_url.endswith("/") else f"{appointments_url}/"

    async def get_business_list(self, category: Optional[BusinessCategory]) -> List[Business]:
        businesses = await run_blocking(self._projects)
        if category is None:
            return businesses
        return [b for b in businesses if b.category == category]

    def get_all_categories(self) -> List[BusinessCategory]:
        return list(BusinessCategory)

    async def get_featured_businesses(self) -> List[Business]:
        # No ranking on the backend yet: the first entries stand in for "featured".
        businesses = await run_blocking(self._projects)
        return businesses[:FEATURED_LIMIT]

    async def get_nearby_businesses(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> List[Business]:
        """First ``NEARBY_LIMIT`` public projects.

        The projects endpoint has no location filter, so ``latitude`` and
        ``longitude`` are accepted for the port but not sent.
        """
        businesses = await run_blocking(self._projects)
        return businesses[:NEARBY_LIMIT]

    async def search_businesses(self, query: str) -> List[Business]:
        needle = (query or "").strip().lower()
        businesses = await run_blocking(self._projects)
        return [
            b for b in businesses
            if needle in b.name.lower() or needle in b.description.lower()
        ]

    async def get_business_detail(self, business_id: str) -> Business:
        return await run_blocking(self._detail, business_id)

    async def get_available_time_slots(
        self, business_id: str, professional_id: str, date: int
    ) -> List[TimeSlot]:
        day = datetime.fromtimestamp(date / 1000).date()
        payload = await run_blocking(self._availability, business_id, day)
        return time_slots_from_availability(payload)

    # ------------------------------------------------------------------
    def _project_payloads(self) -> List[Dict[str, Any]]:
        resp = self.http.get(PROJECTS_PATH)
        ensure_ok(resp, "list_projects")
        return [item for item in json_list(resp, "list_projects") if isinstance(item, dict)]

    def _projects(self) -> List[Business]:
        return [business_from_project(item) for item in self._project_payloads()]

    def _availability(self, business_id: str, day: dt_date) -> Dict[str, Any]:
        url = f"{self.appointments_url}api/v1/appointments/projects/{business_id}/available-slots"
        resp = self.http.get(url, params={"date": day.isoformat()})
        ensure_ok(resp, f"available_slots[{business_id}]")
        return json_object(resp, f"available_slots[{business_id}]")

    def _detail(self, business_id: str) -> Business:
        project = next(
            (item for item in self._project_payloads() if str(item.get("id")) == business_id),
            None,
        )
        if project is None:
            ctx = f"get_business_detail[{business_id}]"
            raise ApiClientError(f"{ctx}: business not found", status=404, context=ctx)
        return business_from_project(
            project,
            opening_hours=self._opening_hours(business_id),
            contact_channels=self._contact_channels(business_id),
            professionals=self._professionals(business_id),
        )

    # Enrichment calls are best effort: a failure leaves the default value.
    def _opening_hours(self, business_id: str) -> Optional[str]:
        try:
            payload = self._availability(business_id, dt_date.today())
        except ApiError as exc:
            log.warning("Working hours unavailable for %s: %s", business_id, exc)
            return None
        return calculate_working_hours(payload.get("availableSlots") or [])

    def _contact_channels(self, business_id: str) -> List[ContactChannel]:
        ctx = f"contact_channels[{business_id}]"
        try:
            resp = self.http.get(f"api/projects/{business_id}/channels/public")
            ensure_ok(resp, ctx)
            items = json_list(resp, ctx)
        except ApiError as exc:
            log.warning("Contact channels unavailable for %s: %s", business_id, exc)
            return []
        return [contact_channel_from_payload(item) for item in items if isinstance(item, dict)]

    def _professionals(self, business_id: str) -> List[Professional]:
        ctx = f"employees[{business_id}]"
        try:
            resp = self.http.get(f"api/Projects/{business_id}/employees/public")
            ensure_ok(resp, ctx)
            items = json_list(resp, ctx)
        except ApiError as exc:
            log.warning("Employees unavailable for %s: %s", business_id, exc)
            return []
        return [professional_from_employee(item) for item in items if isinstance(item, dict)]


__all__ = ["BusinessRestAdapter", "FEATURED_LIMIT", "NEARBY_LIMIT"]
