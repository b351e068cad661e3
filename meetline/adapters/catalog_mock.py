from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from meetline.adapters.api_errors import ApiClientError
from meetline.adapters.session_local import InMemorySessionStore, SessionManager
from meetline.domain.entities import (
    Appointment,
    AppointmentStatus,
    Business,
    BusinessCategory,
    ContactChannel,
    ContactChannelType,
    Professional,
    Service,
    TimeSlot,
    User,
    now_millis,
)
from meetline.domain.ports import AppointmentRepository, AuthRepository, BusinessRepository

DAY_MS = 24 * 60 * 60 * 1000
DEMO_EMAIL = "demo@meetline.app"
DEMO_PASSWORD = "password"

_PROFESSIONALS: Dict[str, Professional] = {
    p.id: p
    for p in (
        Professional("prof_1", "Carlos Mendoza", "Senior Barber", "https://randomuser.me/api/portraits/men/32.jpg", 4.9, 156),
        Professional("prof_2", "Miguel Angel", "Barber", "https://randomuser.me/api/portraits/men/45.jpg", 4.7, 89),
        Professional("prof_3", "Juan Pablo", "Junior Barber", "https://randomuser.me/api/portraits/men/67.jpg", 4.5, 34, False),
        Professional("prof_5", "Ana Lucia", "Beautician", "https://randomuser.me/api/portraits/women/65.jpg", 4.8, 178),
        Professional("prof_6", "Laura Martinez", "Massage Therapist", "https://randomuser.me/api/portraits/women/33.jpg", 4.9, 245),
        Professional("prof_7", "Roberto Sanchez", "Civil Lawyer", "https://randomuser.me/api/portraits/men/52.jpg", 4.8, 67),
        Professional("prof_8", "Patricia Lopez", "General Dentist", "https://randomuser.me/api/portraits/women/28.jpg", 4.9, 312),
    )
}

_SERVICES: Dict[str, Tuple[Service, ...]] = {
    "barbershop": (
        Service("srv_1", "Classic Cut", "Traditional scissor haircut", 25.0, 30),
        Service("srv_2", "Cut + Beard", "Haircut plus full beard trim", 40.0, 45),
        Service("srv_3", "Classic Shave", "Straight razor shave with hot towel", 20.0, 25),
    ),
    "spa": (
        Service("srv_6", "Relaxing Massage", "Full body relaxation massage", 80.0, 60),
        Service("srv_8", "Deep Facial", "Deep facial cleansing with hydration", 65.0, 45),
    ),
    "beauty": (
        Service("srv_11", "Manicure", "Full manicure with polish", 25.0, 40),
        Service("srv_12", "Pedicure", "Spa pedicure with hydration", 35.0, 50),
    ),
    "lawyer": (
        Service("srv_16", "Legal Consultation", "Initial 30 minute legal advice", 50.0, 30),
        Service("srv_17", "Contract Review", "Contract analysis and review", 120.0, 60),
    ),
    "dentist": (
        Service("srv_20", "Dental Cleaning", "Professional cleaning and polish", 45.0, 45),
        Service("srv_22", "General Checkup", "Complete dental review", 35.0, 30),
    ),
}


def _business(
    biz_id: str,
    name: str,
    description: str,
    category: BusinessCategory,
    rating: float,
    reviews: int,
    address: str,
    distance_km: float,
    hours: str,
    staff: Tuple[str, ...],
    services: str,
    *,
    is_open: bool = True,
    phone: str = "3025689564",
) -> Business:
    return Business(
        id=biz_id,
        name=name,
        description=description,
        category=category,
        image_url=category.image_url,
        rating=rating,
        review_count=reviews,
        address=address,
        distance=f"{distance_km} km",
        distance_km=distance_km,
        is_open=is_open,
        opening_hours=hours,
        professionals=tuple(_PROFESSIONALS[p] for p in staff),
        services=_SERVICES[services],
        contact_channels=(ContactChannel(ContactChannelType.PHONE, phone, "(302) 568-9564"),),
    )


_BUSINESSES: Tuple[Business, ...] = (
    _business("biz_1", "BarberKing Studio", "Modern and classic cuts by barbers with ten years of experience.",
              BusinessCategory.BARBERSHOP, 4.8, 324, "123 Main St, Downtown", 0.5, "09:00 - 20:00",
              ("prof_1", "prof_2", "prof_3"), "barbershop"),
    _business("biz_2", "Zen Spa & Wellness", "Exclusive treatments for body and mind.",
              BusinessCategory.SPA, 4.9, 567, "456 Calm Ave, Rose District", 1.2, "08:00 - 21:00",
              ("prof_5", "prof_6"), "spa"),
    _business("biz_3", "Glamour Beauty Salon", "Manicure, pedicure and hair treatments.",
              BusinessCategory.BEAUTY_SALON, 4.7, 289, "Plaza Mall, Unit 45", 0.8, "10:00 - 19:00",
              ("prof_5",), "beauty"),
    _business("biz_4", "Sanchez & Partners Law Office", "Civil, commercial and family law.",
              BusinessCategory.LAWYER, 4.8, 156, "Business Tower, Floor 12", 2.5, "08:00 - 18:00",
              ("prof_7",), "lawyer"),
    _business("biz_5", "Smiles Dental Clinic", "Certified dentists and modern equipment.",
              BusinessCategory.DENTIST, 4.9, 423, "789 Health Ave, Medical District", 1.8, "07:00 - 19:00",
              ("prof_8",), "dentist"),
    _business("biz_6", "Urban Cuts", "Fades, designs and current trends.",
              BusinessCategory.BARBERSHOP, 4.6, 198, "321 Trendy St", 1.5, "10:00 - 21:00",
              ("prof_1", "prof_2"), "barbershop", is_open=False),
)

_SLOT_TABLE: Tuple[TimeSlot, ...] = tuple(
    TimeSlot(t, available)
    for t, available in (
        ("08:00", True), ("08:30", True), ("09:00", False), ("09:30", True),
        ("10:00", True), ("10:30", False), ("11:00", True), ("11:30", True),
        ("14:00", True), ("14:30", True), ("15:00", True), ("15:30", False),
        ("16:00", True), ("16:30", True), ("17:00", True), ("17:30", False),
    )
)


@dataclass
class MockCatalog(AuthRepository, BusinessRepository, AppointmentRepository):
    """Offline substitute for the three REST adapters with deterministic responses.

    Accounts, the session and booked appointments live in memory. The demo
    account ``demo@meetline.app`` / ``password`` exists from the start.
    """

    sessions: SessionManager = field(default_factory=lambda: SessionManager(InMemorySessionStore()))

    def __post_init__(self) -> None:
        demo = User(id="user_demo", name="Demo User", email=DEMO_EMAIL, phone="3001234567")
        self._accounts: Dict[str, Tuple[User, str]] = {DEMO_EMAIL: (demo, DEMO_PASSWORD)}
        self._appointments: List[Appointment] = self._seed_appointments(demo)

    # ---------- AuthRepository ----------

    async def login(self, email: str, password: str) -> User:
        account = self._accounts.get(email.strip().lower())
        if account is None or account[1] != password:
            raise ApiClientError("login: invalid credentials", status=401, hint="Invalid email or password", context="login")
        user = account[0]
        self.sessions.save_session(user, f"mock-token-{user.id}")
        return user

    async def register(self, name: str, email: str, phone: str, password: str) -> User:
        key = email.strip().lower()
        if key in self._accounts:
            raise ApiClientError("register: duplicate", status=409, hint="Email already exists", context="register")
        user = User(id=f"user_{uuid4().hex[:8]}", name=name, email=key, phone=phone)
        self._accounts[key] = (user, password)
        self.sessions.save_session(user, f"mock-token-{user.id}")
        return user

    def get_session(self) -> Optional[User]:
        return self.sessions.current_user()

    def logout(self) -> None:
        self.sessions.logout()

    async def get_user_profile(self) -> User:
        return self._require_user()

    async def update_profile(self, user: User) -> User:
        current = self._require_user()
        updated = replace(current, name=user.name, email=user.email, phone=user.phone, avatar_url=user.avatar_url)
        password = self._accounts.pop(current.email, (current, ""))[1]
        self._accounts[updated.email] = (updated, password)
        self.sessions.update_user(updated)
        return updated

    async def request_password_reset(self, email: str) -> None:
        return None

    async def reset_password(self, token: str, new_password: str) -> None:
        if not token:
            raise ApiClientError("reset_password: missing token", status=422, hint="Reset token is required")

    # ---------- BusinessRepository ----------

    async def get_business_list(self, category: Optional[BusinessCategory]) -> List[Business]:
        return [b for b in _BUSINESSES if category is None or b.category == category]

    def get_all_categories(self) -> List[BusinessCategory]:
        return list(BusinessCategory)

    async def get_featured_businesses(self) -> List[Business]:
        ranked = sorted(_BUSINESSES, key=lambda b: b.rating, reverse=True)
        return ranked[:5]

    async def get_nearby_businesses(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> List[Business]:
        ranked = sorted(_BUSINESSES, key=lambda b: b.distance_km if b.distance_km is not None else math.inf)
        return ranked[:6]

    async def search_businesses(self, query: str) -> List[Business]:
        needle = query.strip().lower()
        return [b for b in _BUSINESSES if needle in b.name.lower() or needle in b.description.lower()]

    async def get_business_detail(self, business_id: str) -> Business:
        for business in _BUSINESSES:
            if business.id == business_id:
                return business
        raise ApiClientError(f"get_business_detail[{business_id}]: not found", status=404)

    async def get_available_time_slots(self, business_id: str, professional_id: str, date: int) -> List[TimeSlot]:
        business = await self.get_business_detail(business_id)
        professional = business.find_professional(professional_id)
        if professional is not None and not professional.is_available:
            return [replace(slot, is_available=False) for slot in _SLOT_TABLE]
        return list(_SLOT_TABLE)

    # ---------- AppointmentRepository ----------

    async def get_appointments(self) -> List[Appointment]:
        return self._mine()

    async def get_upcoming_appointments(self) -> List[Appointment]:
        now = now_millis()
        upcoming = [a for a in self._mine() if a.date >= now and a.status != AppointmentStatus.CANCELLED]
        return sorted(upcoming, key=lambda a: a.date)

    async def get_past_appointments(self) -> List[Appointment]:
        now = now_millis()
        past = [a for a in self._mine() if a.date < now or a.status == AppointmentStatus.COMPLETED]
        return sorted(past, key=lambda a: a.date, reverse=True)

    async def get_my_active_appointments(self) -> List[Appointment]:
        active = {AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED}
        return [a for a in await self.get_upcoming_appointments() if a.status in active]

    async def get_my_appointment_history(self) -> List[Appointment]:
        return sorted(self._mine(), key=lambda a: a.date, reverse=True)

    async def create_appointment(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: int,
        time: str,
        notes: Optional[str] = None,
    ) -> Appointment:
        user = self._require_user()
        appointment = Appointment(
            id=f"apt_{uuid4().hex[:8]}",
            user_id=user.id,
            business=business,
            professional=professional,
            service=service,
            date=date,
            time=time,
            notes=notes,
        )
        self._appointments.append(appointment)
        return appointment

    async def cancel_appointment(self, appointment_id: str) -> bool:
        for index, appointment in enumerate(self._appointments):
            if appointment.id == appointment_id:
                self._appointments[index] = replace(appointment, status=AppointmentStatus.CANCELLED)
                return True
        raise ApiClientError(f"cancel_appointment[{appointment_id}]: not found", status=404)

    # ---------- helpers ----------

    def _require_user(self) -> User:
        user = self.sessions.current_user()
        if user is None:
            raise ApiClientError("No active session", status=401)
        return user

    def _mine(self) -> List[Appointment]:
        user = self.sessions.current_user()
        if user is None:
            return []
        return [a for a in self._appointments if a.user_id == user.id]

    @staticmethod
    def _seed_appointments(user: User) -> List[Appointment]:
        now = now_millis()
        barber, spa = _BUSINESSES[0], _BUSINESSES[1]
        return [
            Appointment("apt_seed_1", user.id, barber, barber.professionals[0], barber.services[1],
                        now + 2 * DAY_MS, "10:00", AppointmentStatus.CONFIRMED),
            Appointment("apt_seed_2", user.id, spa, spa.professionals[1], spa.services[0],
                        now + 5 * DAY_MS, "16:30", AppointmentStatus.PENDING),
            Appointment("apt_seed_3", user.id, barber, barber.professionals[1], barber.services[0],
                        now - 7 * DAY_MS, "11:00", AppointmentStatus.COMPLETED),
        ]


__all__ = ["DEMO_EMAIL", "DEMO_PASSWORD", "MockCatalog"]
