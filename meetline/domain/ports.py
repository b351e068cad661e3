from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .entities import (
    Appointment,
    Business,
    BusinessCategory,
    Location,
    Professional,
    Service,
    TimeSlot,
    User,
)

BusinessId = str
ProfessionalId = str
AppointmentId = str
EpochMillis = int


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta


# ---- Ports (Hexagonal boundaries) ----
class SessionStore(Protocol):
    """Key-value storage for the locally persisted session."""

    def get(self, key: str, default: Any = None) -> Any: ...
    def set(self, key: str, value: Any) -> None: ...
    def update(self, values: Dict[str, Any]) -> None: ...  # all keys in one write
    def clear(self) -> None: ...


class AuthRepository(Protocol):
    """Account operations against the backend plus the cached session."""

    async def login(self, email: str, password: str) -> User: ...
    async def register(self, name: str, email: str, phone: str, password: str) -> User: ...
    def get_session(self) -> Optional[User]: ...  # local read, no I/O
    def logout(self) -> None: ...
    async def get_user_profile(self) -> User: ...
    async def update_profile(self, user: User) -> User: ...
    async def request_password_reset(self, email: str) -> None: ...
    async def reset_password(self, token: str, new_password: str) -> None: ...


class BusinessRepository(Protocol):
    """Business discovery: listings, search, detail and availability."""

    async def get_business_list(self, category: Optional[BusinessCategory]) -> List[Business]: ...
    def get_all_categories(self) -> List[BusinessCategory]: ...
    async def get_featured_businesses(self) -> List[Business]: ...
    async def get_nearby_businesses(
        self, latitude: Optional[float] = None, longitude: Optional[float] = None
    ) -> List[Business]: ...
    async def search_businesses(self, query: str) -> List[Business]: ...
    async def get_business_detail(self, business_id: BusinessId) -> Business: ...
    async def get_available_time_slots(
        self, business_id: BusinessId, professional_id: ProfessionalId, date: EpochMillis
    ) -> List[TimeSlot]: ...


class AppointmentRepository(Protocol):
    """Appointments of the signed-in client."""

    async def get_appointments(self) -> List[Appointment]: ...
    async def get_upcoming_appointments(self) -> List[Appointment]: ...
    async def get_past_appointments(self) -> List[Appointment]: ...
    async def get_my_active_appointments(self) -> List[Appointment]: ...
    async def get_my_appointment_history(self) -> List[Appointment]: ...
    async def create_appointment(
        self,
        business: Business,
        professional: Professional,
        service: Service,
        date: EpochMillis,
        time: str,
        notes: Optional[str] = None,
    ) -> Appointment: ...
    async def cancel_appointment(self, appointment_id: AppointmentId) -> bool: ...


class LocationProvider(Protocol):
    """Device location source used for "nearby" queries."""

    def has_permission(self) -> bool: ...
    async def current_location(self) -> Location: ...
