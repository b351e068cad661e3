from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from meetline.domain.entities import Appointment
from meetline.domain.ports import UseCaseError
from meetline.usecases.cancel_appointment import CancelAppointment
from meetline.usecases.get_my_active_appointments import GetMyActiveAppointments
from meetline.usecases.get_my_appointment_history import GetMyAppointmentHistory

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)

TAB_ACTIVE = 0
TAB_HISTORY = 1


@dataclass(frozen=True)
class AppointmentsUiState:
    is_loading: bool = True
    active_appointments: Tuple[Appointment, ...] = ()
    history_appointments: Tuple[Appointment, ...] = ()
    selected_tab: int = TAB_ACTIVE
    cancelling_id: Optional[str] = None
    error: Optional[str] = None
    session_expired: bool = False


def _is_session_expired(exc: UseCaseError) -> bool:
    return exc.code == "SESSION_EXPIRED" or "session expired" in exc.message.lower()


class AppointmentsVM(ScreenController[AppointmentsUiState]):
    """The my-appointments screen with an active tab and a history tab.

    Both tabs share the ``load`` action key: switching tabs supersedes a
    fetch still running for the other one.
    """

    def __init__(
        self,
        *,
        get_my_active_appointments: GetMyActiveAppointments,
        get_my_appointment_history: GetMyAppointmentHistory,
        cancel_appointment: CancelAppointment,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(AppointmentsUiState(), scope=scope)
        self._get_active = get_my_active_appointments
        self._get_history = get_my_appointment_history
        self._cancel = cancel_appointment
        self.load_active()

    def select_tab(self, index: int) -> asyncio.Task:
        if index == TAB_ACTIVE:
            self._update(selected_tab=index)
            return self.load_active()
        if index == TAB_HISTORY:
            self._update(selected_tab=index)
            return self.load_history()
        raise ValueError(f"Unknown appointments tab: {index}")

    def load_active(self) -> asyncio.Task:
        self._update(is_loading=True, error=None, session_expired=False)
        return self.scope.launch(self._load_active(), key="load")

    def load_history(self) -> asyncio.Task:
        self._update(is_loading=True, error=None, session_expired=False)
        return self.scope.launch(self._load_history(), key="load")

    def cancel_appointment(self, appointment_id: str) -> asyncio.Task:
        self._update(cancelling_id=appointment_id, error=None)
        return self.scope.launch(self._run_cancel(appointment_id), key=f"cancel:{appointment_id}")

    def clear_error(self) -> None:
        self._update(error=None)

    # ------------------------------------------------------------------
    async def _load_active(self) -> None:
        try:
            appointments = await self._get_active()
        except UseCaseError as exc:
            self._fail("Active appointments", exc)
            return
        self._update(is_loading=False, active_appointments=tuple(appointments))

    async def _load_history(self) -> None:
        try:
            appointments = await self._get_history()
        except UseCaseError as exc:
            self._fail("Appointment history", exc)
            return
        self._update(is_loading=False, history_appointments=tuple(appointments))

    async def _run_cancel(self, appointment_id: str) -> None:
        try:
            await self._cancel(appointment_id)
        except UseCaseError as exc:
            log.info("Cancelling %s failed: %s", appointment_id, exc.code)
            self._update(cancelling_id=None, error=exc.message, session_expired=_is_session_expired(exc))
            return
        self._update(cancelling_id=None)
        await self.load_active()

    def _fail(self, what: str, exc: UseCaseError) -> None:
        log.info("%s failed to load: %s", what, exc.code)
        self._update(is_loading=False, error=exc.message, session_expired=_is_session_expired(exc))


__all__ = ["AppointmentsUiState", "AppointmentsVM", "TAB_ACTIVE", "TAB_HISTORY"]
