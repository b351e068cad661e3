"""Domain package exports for entities and port protocols."""

from .entities import (
    Appointment,
    AppointmentStatus,
    Business,
    BusinessCategory,
    ContactChannel,
    ContactChannelType,
    Location,
    Professional,
    Service,
    TimeSlot,
    User,
    now_millis,
)
from .ports import (
    AppointmentRepository,
    AuthRepository,
    BusinessRepository,
    LocationProvider,
    SessionStore,
    UseCaseError,
)

__all__ = [
    "Appointment",
    "AppointmentRepository",
    "AppointmentStatus",
    "AuthRepository",
    "Business",
    "BusinessCategory",
    "BusinessRepository",
    "ContactChannel",
    "ContactChannelType",
    "Location",
    "LocationProvider",
    "Professional",
    "Service",
    "SessionStore",
    "TimeSlot",
    "UseCaseError",
    "User",
    "now_millis",
]
