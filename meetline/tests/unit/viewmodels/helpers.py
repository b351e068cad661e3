from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

from meetline.domain.entities import (
    Appointment,
    AppointmentStatus,
    Business,
    BusinessCategory,
    Location,
    Professional,
    Service,
    TimeSlot,
    User,
)


def make_user(user_id: str = "u1", name: str = "Ana Ruiz", email: str = "ana@example.com") -> User:
    return User(id=user_id, name=name, email=email, phone="3001234567", created_at=0)


def make_professional(prof_id: str = "prof_1", name: str = "Carlos") -> Professional:
    return Professional(prof_id, name, "Barber", "https://img.example/p.png", 4.5, 10)


def make_service(srv_id: str = "srv_1", name: str = "Classic Cut", duration: int = 30) -> Service:
    return Service(srv_id, name, "", 25.0, duration)


def make_business(
    biz_id: str = "biz_1",
    name: str = "Barber One",
    category: BusinessCategory = BusinessCategory.BARBERSHOP,
    *,
    professionals: Sequence[Professional] = (),
    services: Sequence[Service] = (),
) -> Business:
    return Business(
        id=biz_id,
        name=name,
        description=f"{name} description",
        category=category,
        image_url="https://img.example/b.png",
        rating=4.0,
        review_count=3,
        address="Main St 1",
        distance="1.0 km",
        is_open=True,
        opening_hours="09:00 - 18:00",
        professionals=tuple(professionals),
        services=tuple(services),
    )


def make_appointment(
    apt_id: str = "apt_1",
    *,
    date: int = 0,
    time: str = "10:00",
    status: AppointmentStatus = AppointmentStatus.PENDING,
) -> Appointment:
    return Appointment(
        id=apt_id,
        user_id="u1",
        business=make_business(),
        professional=make_professional(),
        service=make_service(),
        date=date,
        time=time,
        status=status,
        created_at=0,
    )


class _Recorder:
    """Records calls and raises a configured error per method name."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}

    async def _enter(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        error = self.errors.get(name)
        if error is not None:
            raise error

    def called(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)


class StubAuthRepo(_Recorder):
    def __init__(self, *, session_user: Optional[User] = None, user: Optional[User] = None) -> None:
        super().__init__()
        self.session_user = session_user
        self.user = user or make_user()
        self.logged_out = False

    async def login(self, email: str, password: str) -> User:
        await self._enter("login", email, password)
        self.session_user = self.user
        return self.user

    async def register(self, name: str, email: str, phone: str, password: str) -> User:
        await self._enter("register", name, email, phone, password)
        self.session_user = self.user
        return self.user

    def get_session(self) -> Optional[User]:
        return self.session_user

    def logout(self) -> None:
        self.logged_out = True
        self.session_user = None

    async def get_user_profile(self) -> User:
        await self._enter("get_user_profile")
        return self.user

    async def update_profile(self, user: User) -> User:
        await self._enter("update_profile", user)
        self.user = user
        return user

    async def request_password_reset(self, email: str) -> None:
        await self._enter("request_password_reset", email)

    async def reset_password(self, token: str, new_password: str) -> None:
        await self._enter("reset_password", token, new_password)


class StubBusinessRepo(_Recorder):
    def __init__(
        self,
        businesses: Sequence[Business] = (),
        *,
        slots: Sequence[TimeSlot] = (),
    ) -> None:
        super().__init__()
        self.businesses = list(businesses)
        self.slots = list(slots)

    async def get_business_list(self, category: Optional[BusinessCategory]) -> List[Business]:
        await self._enter("get_business_list", category)
        return [b for b in self.businesses if category is None or b.category == category]

    async def get_featured_businesses(self) -> List[Business]:
        await self._enter("get_featured_businesses")
        return self.businesses[:5]

    async def get_nearby_businesses(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> List[Business]:
        await self._enter("get_nearby_businesses", latitude, longitude)
        return self.businesses[:6]

    async def search_businesses(self, query: str) -> List[Business]:
        await self._enter("search_businesses", query)
        needle = query.lower()
        return [b for b in self.businesses if needle in b.name.lower()]

    async def get_business_detail(self, business_id: str) -> Business:
        await self._enter("get_business_detail", business_id)
        return next(b for b in self.businesses if b.id == business_id)

    async def get_available_time_slots(self, business_id: str, professional_id: str, date: int) -> List[TimeSlot]:
        await self._enter("get_available_time_slots", business_id, professional_id, date)
        return list(self.slots)

    def get_all_categories(self) -> List[BusinessCategory]:
        return list(BusinessCategory)


class StubAppointmentRepo(_Recorder):
    def __init__(
        self,
        *,
        upcoming: Sequence[Appointment] = (),
        active: Sequence[Appointment] = (),
        history: Sequence[Appointment] = (),
    ) -> None:
        super().__init__()
        self.upcoming = list(upcoming)
        self.active = list(active)
        self.history = list(history)

    async def get_appointments(self) -> List[Appointment]:
        await self._enter("get_appointments")
        return self.upcoming + self.history

    async def get_upcoming_appointments(self) -> List[Appointment]:
        await self._enter("get_upcoming_appointments")
        return list(self.upcoming)

    async def get_past_appointments(self) -> List[Appointment]:
        await self._enter("get_past_appointments")
        return list(self.history)

    async def get_my_active_appointments(self) -> List[Appointment]:
        await self._enter("get_my_active_appointments")
        return list(self.active)

    async def get_my_appointment_history(self) -> List[Appointment]:
        await self._enter("get_my_appointment_history")
        return list(self.history)

    async def create_appointment(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: int,
        time: str,
        notes: Optional[str] = None,
    ) -> Appointment:
        await self._enter("create_appointment", business.id, professional.id, service.id, date, time, notes)
        return Appointment(
            id="apt_new",
            user_id="u1",
            business=business,
            professional=professional,
            service=service,
            date=date,
            time=time,
            notes=notes,
            created_at=0,
        )

    async def cancel_appointment(self, appointment_id: str) -> bool:
        await self._enter("cancel_appointment", appointment_id)
        self.active = [a for a in self.active if a.id != appointment_id]
        return True


class StubLocationProvider:
    def __init__(self, location: Optional[Location] = None) -> None:
        self.location = location

    def has_permission(self) -> bool:
        return self.location is not None

    async def current_location(self) -> Location:
        assert self.location is not None
        return self.location


def record_states(vm: Any) -> List[Any]:
    """Subscribe to ``vm.state`` and return the list that collects every snapshot."""
    states: List[Any] = []
    vm.state.subscribe(states.append)
    return states


__all__ = [
    "StubAppointmentRepo",
    "StubAuthRepo",
    "StubBusinessRepo",
    "StubLocationProvider",
    "make_appointment",
    "make_business",
    "make_professional",
    "make_service",
    "make_user",
    "record_states",
]
