"""Domain value objects shared across adapters, use-cases, and view models."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def now_millis() -> int:
    """Return the current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


def _check_rating(owner: str, value: float) -> float:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise TypeError(f"{owner}.rating expects a numeric value.")
    numeric = float(value)
    if numeric < 0.0 or numeric > 5.0:
        raise ValueError(f"{owner}.rating must be within the inclusive range [0, 5].")
    return numeric


@dataclass(frozen=True)
class User:
    """Authenticated account as cached in the session and shown on the profile."""

    id: str
    name: str
    email: str
    phone: str
    avatar_url: Optional[str] = None
    created_at: int = field(default_factory=now_millis)
    """Account creation timestamp in epoch milliseconds."""


class BusinessCategory(Enum):
    """Business categories offered by the platform."""

    BARBERSHOP = ("Barbershop", "https://images.unsplash.com/photo-1585747860715-2ba37e788b70?w=400")
    SPA = ("Spa & Wellness", "https://images.unsplash.com/photo-1544161515-4ab6ce6db874?w=400")
    BEAUTY_SALON = ("Beauty Salon", "https://images.unsplash.com/photo-1560066984-138dadb4c035?w=400")
    LAWYER = ("Lawyer", "https://images.unsplash.com/photo-1589829545856-d10d557cf95f?w=400")
    DENTIST = ("Dentist", "https://images.unsplash.com/photo-1629909613654-28e377c37b09?w=400")
    DOCTOR = ("Doctor", "https://images.unsplash.com/photo-1631217868264-e5b90bb7e133?w=400")
    GYM = ("Gym", "https://images.unsplash.com/photo-1534438327276-14e5300c3a48?w=400")
    RESTAURANT = ("Restaurant", "https://images.unsplash.com/photo-1517248135467-4c7edcad34c4?w=400")
    VETERINARY = ("Veterinary", "https://images.unsplash.com/photo-1628009368231-7bb7cfcb0def?w=400")
    OTHER = ("Other", "https://images.unsplash.com/photo-1497366216548-37526070297c?w=400")

    def __init__(self, display_name: str, image_url: str) -> None:
        self.display_name = display_name
        self.image_url = image_url

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["BusinessCategory"]:
        """Resolve a member by its enum name (``"SPA"``), ``None`` when unknown."""
        if not name:
            return None
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            return None

    @classmethod
    def from_industry(cls, industry: Optional[str]) -> "BusinessCategory":
        """Map the backend ``industry`` label to a category (``OTHER`` fallback)."""
        key = (industry or "").strip().lower()
        return _INDUSTRY_ALIASES.get(key, cls.OTHER)


_INDUSTRY_ALIASES = {
    "restaurante": BusinessCategory.RESTAURANT,
    "restaurant": BusinessCategory.RESTAURANT,
    "barbería": BusinessCategory.BARBERSHOP,
    "barberia": BusinessCategory.BARBERSHOP,
    "barbershop": BusinessCategory.BARBERSHOP,
    "spa": BusinessCategory.SPA,
    "spa & bienestar": BusinessCategory.SPA,
    "salón de belleza": BusinessCategory.BEAUTY_SALON,
    "salon de belleza": BusinessCategory.BEAUTY_SALON,
    "belleza": BusinessCategory.BEAUTY_SALON,
    "beauty": BusinessCategory.BEAUTY_SALON,
    "abogado": BusinessCategory.LAWYER,
    "legal": BusinessCategory.LAWYER,
    "lawyer": BusinessCategory.LAWYER,
    "dentista": BusinessCategory.DENTIST,
    "odontología": BusinessCategory.DENTIST,
    "odontologia": BusinessCategory.DENTIST,
    "dentist": BusinessCategory.DENTIST,
    "médico": BusinessCategory.DOCTOR,
    "medico": BusinessCategory.DOCTOR,
    "medicina": BusinessCategory.DOCTOR,
    "salud": BusinessCategory.DOCTOR,
    "doctor": BusinessCategory.DOCTOR,
    "gimnasio": BusinessCategory.GYM,
    "gym": BusinessCategory.GYM,
    "fitness": BusinessCategory.GYM,
    "veterinaria": BusinessCategory.VETERINARY,
    "veterinario": BusinessCategory.VETERINARY,
    "veterinary": BusinessCategory.VETERINARY,
}


@dataclass(frozen=True)
class Professional:
    """Staff member of a business that clients can book with."""

    id: str
    name: str
    role: str
    image_url: str
    rating: float = 0.0
    review_count: int = 0
    is_available: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "rating", _check_rating("Professional", self.rating))


@dataclass(frozen=True)
class Service:
    """Bookable service; ``duration`` is expressed in minutes."""

    id: str
    name: str
    description: str
    price: float
    duration: int
    image_url: Optional[str] = None


class ContactChannelType(Enum):
    WHATSAPP = "whatsapp"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    WEBSITE = "website"
    EMAIL = "email"
    PHONE = "phone"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "ContactChannelType":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class ContactChannel:
    """One way of reaching a business (phone number, social handle, URL...)."""

    type: ContactChannelType
    value: str
    display_value: str = ""

    def __post_init__(self) -> None:
        if not self.display_value:
            object.__setattr__(self, "display_value", self.value)


@dataclass(frozen=True)
class Business:
    """Business listing together with its staff, services and contact channels.

    The nested collections are tuples: a business owns them by value and a
    snapshot never changes after construction.
    """

    id: str
    name: str
    description: str
    category: BusinessCategory
    image_url: str
    rating: float
    review_count: int
    address: str
    distance: str
    is_open: bool
    opening_hours: str
    distance_km: Optional[float] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    professionals: Tuple[Professional, ...] = ()
    services: Tuple[Service, ...] = ()
    contact_channels: Tuple[ContactChannel, ...] = ()
    is_favorite: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "rating", _check_rating("Business", self.rating))
        object.__setattr__(self, "professionals", tuple(self.professionals))
        object.__setattr__(self, "services", tuple(self.services))
        object.__setattr__(self, "contact_channels", tuple(self.contact_channels))

    def find_professional(self, professional_id: Optional[str]) -> Optional[Professional]:
        if not professional_id:
            return None
        return next((p for p in self.professionals if p.id == professional_id), None)

    def find_service(self, service_id: Optional[str]) -> Optional[Service]:
        if not service_id:
            return None
        return next((s for s in self.services if s.id == service_id), None)


class AppointmentStatus(Enum):
    """Appointment lifecycle states with display name and ARGB color."""

    PENDING = ("Pending", 0xFFFFA726)
    CONFIRMED = ("Confirmed", 0xFF66BB6A)
    COMPLETED = ("Completed", 0xFF42A5F5)
    CANCELLED = ("Cancelled", 0xFFEF5350)

    def __init__(self, display_name: str, color: int) -> None:
        self.display_name = display_name
        self.color = color

    @classmethod
    def from_string(cls, value: Optional[str]) -> "AppointmentStatus":
        """Resolve a backend status label; unknown labels map to ``PENDING``."""
        try:
            return cls[(value or "").strip().upper()]
        except KeyError:
            return cls.PENDING


@dataclass(frozen=True)
class Appointment:
    """Booked appointment with an embedded business/professional/service snapshot."""

    id: str
    user_id: str
    business: Business
    professional: Professional
    service: Service
    date: int
    """Appointment day as epoch milliseconds."""
    time: str
    """Start time in ``HH:mm`` notation."""
    status: AppointmentStatus = AppointmentStatus.PENDING
    notes: Optional[str] = None
    created_at: int = field(default_factory=now_millis)

    def __post_init__(self) -> None:
        if not isinstance(self.time, str) or not _TIME_RE.match(self.time):
            raise ValueError(f"Appointment.time must use HH:mm notation, got {self.time!r}.")


@dataclass(frozen=True)
class TimeSlot:
    time: str
    is_available: bool = True


@dataclass(frozen=True)
class Location:
    """Device coordinates in decimal degrees."""

    latitude: float
    longitude: float


__all__ = [
    "Appointment",
    "AppointmentStatus",
    "Business",
    "BusinessCategory",
    "ContactChannel",
    "ContactChannelType",
    "Location",
    "Professional",
    "Service",
    "TimeSlot",
    "User",
    "now_millis",
]
