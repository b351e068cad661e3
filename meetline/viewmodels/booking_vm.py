"""Booking flow: pick professional, service, day and time, then confirm."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from meetline.domain.entities import Appointment, Business, Professional, Service, TimeSlot
from meetline.domain.ports import UseCaseError
from meetline.usecases.create_appointment import CreateAppointment
from meetline.usecases.get_available_time_slots import GetAvailableTimeSlots
from meetline.usecases.get_business_detail import GetBusinessDetail

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingUiState:
    is_loading: bool = True
    business: Optional[Business] = None
    selected_professional: Optional[Professional] = None
    selected_service: Optional[Service] = None
    selected_date: Optional[int] = None
    selected_time: Optional[str] = None
    available_time_slots: Tuple[TimeSlot, ...] = ()
    is_loading_slots: bool = False
    is_booking: bool = False
    booking_success: bool = False
    appointment: Optional[Appointment] = None
    error: Optional[str] = None


class BookingVM(ScreenController[BookingUiState]):
    """Holds the booking selection and books it through ``CreateAppointment``.

    ``selected_date`` is epoch millis of the chosen day; ``selected_time``
    is one of the offered ``HH:mm`` slots.
    """

    def __init__(
        self,
        *,
        get_business_detail: GetBusinessDetail,
        get_available_time_slots: GetAvailableTimeSlots,
        create_appointment: CreateAppointment,
        business_id: str,
        professional_id: Optional[str] = None,
        service_id: Optional[str] = None,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(BookingUiState(), scope=scope)
        self._get_business_detail = get_business_detail
        self._get_slots = get_available_time_slots
        self._create_appointment = create_appointment
        self.business_id = business_id
        self._professional_id = professional_id
        self._service_id = service_id
        self.load_business()

    def load_business(self) -> asyncio.Task:
        self._update(is_loading=True, error=None)
        return self.scope.launch(self._load_business(), key="load")

    def select_professional(self, professional: Professional) -> Optional[asyncio.Task]:
        self._update(selected_professional=professional, selected_time=None)
        if self.ui_state.selected_date is None:
            return None
        return self._reload_slots()

    def select_service(self, service: Service) -> None:
        self._update(selected_service=service)

    def select_date(self, date: int) -> Optional[asyncio.Task]:
        self._update(selected_date=date, selected_time=None)
        if self.ui_state.selected_professional is None:
            return None
        return self._reload_slots()

    def select_time(self, time: str) -> None:
        self._update(selected_time=time)

    def can_proceed(self) -> bool:
        s = self.ui_state
        return (
            s.selected_professional is not None
            and s.selected_service is not None
            and s.selected_date is not None
            and s.selected_time is not None
        )

    def confirm_booking(self, notes: Optional[str] = None) -> Optional[asyncio.Task]:
        """Book the current selection; nothing happens while it is incomplete."""
        s = self.ui_state
        if s.business is None or not self.can_proceed():
            log.debug("Booking selection incomplete, not confirming")
            return None
        self._update(is_booking=True, booking_success=False, error=None)
        return self.scope.launch(
            self._book(
                s.business,
                s.selected_professional,
                s.selected_service,
                s.selected_date,
                s.selected_time,
                notes,
            ),
            key="book",
        )

    def clear_error(self) -> None:
        self._update(error=None)

    # ------------------------------------------------------------------
    async def _load_business(self) -> None:
        try:
            business = await self._get_business_detail(self.business_id)
        except UseCaseError as exc:
            log.info("Booking business %s failed to load: %s", self.business_id, exc.code)
            self._update(is_loading=False, error=exc.message)
            return
        professional = None
        if self._professional_id:
            professional = business.find_professional(self._professional_id)
        if professional is None and business.professionals:
            professional = business.professionals[0]
        service = business.find_service(self._service_id) if self._service_id else None
        self._update(
            is_loading=False,
            business=business,
            selected_professional=professional,
            selected_service=service,
            error=None,
        )

    def _reload_slots(self) -> asyncio.Task:
        self._update(is_loading_slots=True, available_time_slots=())
        s = self.ui_state
        return self.scope.launch(
            self._load_slots(s.selected_professional.id, s.selected_date),
            key="slots",
        )

    async def _load_slots(self, professional_id: str, date: int) -> None:
        try:
            slots = await self._get_slots(self.business_id, professional_id, date)
        except UseCaseError as exc:
            log.info("Time slots failed to load: %s", exc.code)
            self._update(is_loading_slots=False, available_time_slots=(), error=exc.message)
            return
        self._update(is_loading_slots=False, available_time_slots=tuple(slots))

    async def _book(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: int,
        time: str,
        notes: Optional[str],
    ) -> None:
        try:
            appointment = await self._create_appointment(business, professional, service, date, time, notes)
        except UseCaseError as exc:
            log.info("Booking failed: %s", exc.code)
            self._update(is_booking=False, booking_success=False, error=exc.message)
            return
        self._update(is_booking=False, booking_success=True, appointment=appointment, error=None)


__all__ = ["BookingUiState", "BookingVM"]
