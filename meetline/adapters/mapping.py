"""Backend payload <-> domain entity conversion for the REST adapters.

The public backend speaks camelCase JSON (``projectId``, ``startTime``...)
and leaves most of what the client shows unset: projects have no rating,
address or services yet, so the mappers fill display defaults.
"""

from __future__ import annotations

import base64
import json
from datetime import datetime, time as dt_time, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

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

UNKNOWN_USER_ID = "unknown_user"
ADDRESS_UNAVAILABLE = "Address not available"
DISTANCE_UNAVAILABLE = "N/A"
HOURS_UNAVAILABLE = "Hours not available"

# Projects carry no service catalog yet; every business offers this one so
# the booking flow can be exercised end to end.
DEFAULT_SERVICE = Service(
    id="1",
    name="Trial service",
    description="Service used to check availability",
    price=15000.0,
    duration=60,
    image_url="https://images.unsplash.com/photo-1585747860715-2ba37e788b70?w=400",
)

_HANDLE_CHANNELS = frozenset(
    {
        ContactChannelType.FACEBOOK,
        ContactChannelType.TIKTOK,
        ContactChannelType.INSTAGRAM,
        ContactChannelType.TWITTER,
    }
)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_iso(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (``Z`` suffix accepted); ``None`` on failure."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def clock_of(iso_value: str) -> str:
    """``"2025-12-15T09:00:00-05:00"`` -> ``"09:00"`` in the timestamp's own offset."""
    parsed = parse_iso(iso_value)
    if parsed is not None:
        return parsed.strftime("%H:%M")
    _, _, tail = (iso_value or "").partition("T")
    return tail[:5]


# ---- Auth ----
def decode_jwt_subject(token: Optional[str]) -> str:
    """Return the ``sub`` claim of a JWT without verifying its signature."""
    parts = (token or "").split(".")
    if len(parts) < 2:
        return UNKNOWN_USER_ID
    segment = parts[1] + "=" * (-len(parts[1]) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(segment.encode("ascii")))
    except (ValueError, UnicodeError):
        return UNKNOWN_USER_ID
    subject = claims.get("sub") if isinstance(claims, dict) else None
    return subject if isinstance(subject, str) and subject else UNKNOWN_USER_ID


def user_from_auth_response(payload: Mapping[str, Any], *, phone: str = "") -> User:
    """Build the session user from a login/register response."""
    token = _text(payload.get("token"))
    return User(
        id=decode_jwt_subject(token),
        name=_text(payload.get("fullName") or payload.get("name")),
        email=_text(payload.get("email")),
        phone=phone,
        avatar_url=None,
    )


def user_from_payload(payload: Mapping[str, Any]) -> User:
    created = payload.get("created_at") or payload.get("createdAt")
    return User(
        id=_text(payload.get("id")),
        name=_text(payload.get("name") or payload.get("fullName")),
        email=_text(payload.get("email")),
        phone=_text(payload.get("phone")),
        avatar_url=payload.get("avatar_url") or payload.get("avatarUrl") or None,
        created_at=int(created) if isinstance(created, (int, float)) else now_millis(),
    )


def user_to_payload(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "phone": user.phone,
        "avatar_url": user.avatar_url,
        "created_at": user.created_at,
    }


# ---- Businesses ----
def business_from_project(
    payload: Mapping[str, Any],
    *,
    opening_hours: Optional[str] = None,
    contact_channels: Iterable[ContactChannel] = (),
    professionals: Iterable[Professional] = (),
) -> Business:
    category = BusinessCategory.from_industry(payload.get("industry"))
    return Business(
        id=_text(payload.get("id")),
        name=_text(payload.get("name")),
        description=_text(payload.get("description")),
        category=category,
        image_url=category.image_url,
        rating=0.0,
        review_count=0,
        address=ADDRESS_UNAVAILABLE,
        distance=DISTANCE_UNAVAILABLE,
        is_open=True,
        opening_hours=opening_hours or HOURS_UNAVAILABLE,
        professionals=tuple(professionals),
        services=(DEFAULT_SERVICE,),
        contact_channels=tuple(contact_channels),
    )


def professional_from_employee(payload: Mapping[str, Any]) -> Professional:
    name = _text(payload.get("name"))
    return Professional(
        id=_text(payload.get("id")),
        name=name,
        role=_text(payload.get("role")),
        image_url=f"https://ui-avatars.com/api/?name={name.replace(' ', '+')}&background=random",
    )


def format_contact_display(channel_type: ContactChannelType, value: str) -> str:
    """Human form of a contact value: phone numbers grouped, social links as ``@handle``."""
    if channel_type in (ContactChannelType.WHATSAPP, ContactChannelType.PHONE):
        if len(value) == 10 and value.isdigit():
            return f"({value[:3]}) {value[3:6]}-{value[6:]}"
        return value
    if channel_type in _HANDLE_CHANNELS:
        if value.startswith("http"):
            username = value.rstrip("/").rsplit("/", 1)[-1]
            return f"@{username}" if username else value
        return value if value.startswith("@") else f"@{value}"
    return value


def contact_channel_from_payload(payload: Mapping[str, Any]) -> ContactChannel:
    raw = _text(payload.get("value"))
    # The backend stores channel values as embedded JSON: '{"value": "3025689564"}'.
    value = raw
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = None
    if isinstance(decoded, dict) and decoded.get("value") is not None:
        value = _text(decoded["value"])
    channel_type = ContactChannelType.from_string(payload.get("type"))
    return ContactChannel(
        type=channel_type,
        value=value,
        display_value=format_contact_display(channel_type, value),
    )


def calculate_working_hours(slots: Sequence[Mapping[str, Any]]) -> str:
    """Summarize a day of availability as ``"HH:mm - HH:mm"``."""
    if not slots:
        return HOURS_UNAVAILABLE
    opening = clock_of(_text(slots[0].get("startTime")))
    closing = clock_of(_text(slots[-1].get("endTime")))
    if not opening or not closing:
        return HOURS_UNAVAILABLE
    return f"{opening} - {closing}"


def time_slots_from_availability(payload: Mapping[str, Any]) -> List[TimeSlot]:
    slots = payload.get("availableSlots") or []
    return [TimeSlot(time=clock_of(_text(slot.get("startTime"))), is_available=True) for slot in slots]


# ---- Appointments ----
def appointment_from_client_payload(payload: Mapping[str, Any]) -> Appointment:
    """Map one ``/api/client/appointments`` entry; times land in the local zone."""
    start = parse_iso(payload.get("startTime"))
    if start is not None:
        start = start.astimezone()
        date_ms = int(start.timestamp() * 1000)
        clock = start.strftime("%H:%M")
    else:
        date_ms = 0
        clock = "00:00"
    created = parse_iso(payload.get("createdAt"))
    created_ms = int(created.timestamp() * 1000) if created is not None else now_millis()
    price = payload.get("price")
    return Appointment(
        id=_text(payload.get("id") if payload.get("id") is not None else 0),
        user_id=_text(payload.get("userId")),
        business=Business(
            id=_text(payload.get("projectId")),
            name=_text(payload.get("projectName")),
            description="",
            category=BusinessCategory.OTHER,
            image_url="",
            rating=0.0,
            review_count=0,
            address="",
            distance="",
            is_open=True,
            opening_hours="",
        ),
        professional=Professional(
            id=_text(payload.get("employeeId")),
            name=_text(payload.get("employeeName")),
            role="",
            image_url="",
        ),
        service=Service(
            id=_text(payload.get("serviceId") if payload.get("serviceId") is not None else 0),
            name=_text(payload.get("serviceName")),
            description="",
            price=float(price) if isinstance(price, (int, float)) else 0.0,
            duration=0,
        ),
        date=date_ms,
        time=clock,
        status=AppointmentStatus.from_string(payload.get("status")),
        notes=payload.get("userNotes"),
        created_at=created_ms,
    )


def appointment_window(date_ms: int, clock: str, duration_min: int) -> tuple[str, str]:
    """ISO-8601 start/end (local offset) for a booking on ``date_ms`` at ``clock``."""
    day = datetime.fromtimestamp(date_ms / 1000).date()
    hour, minute = (int(part) for part in clock.split(":", 1))
    start = datetime.combine(day, dt_time(hour, minute)).astimezone()
    end = start + timedelta(minutes=int(duration_min))
    return start.isoformat(timespec="seconds"), end.isoformat(timespec="seconds")


def create_appointment_payload(
    business: Business,
    professional: Professional,
    service: Service,
    date_ms: int,
    clock: str,
    notes: Optional[str],
    client: User,
) -> Dict[str, Any]:
    start, end = appointment_window(date_ms, clock, service.duration)
    return {
        "projectId": business.id,
        "serviceId": int(service.id) if service.id.isdigit() else 0,
        "employeeId": professional.id,
        "startTime": start,
        "endTime": end,
        "userNotes": notes,
        "clientName": client.name,
        "clientEmail": client.email,
        "clientPhone": client.phone,
    }


__all__ = [
    "ADDRESS_UNAVAILABLE",
    "DEFAULT_SERVICE",
    "HOURS_UNAVAILABLE",
    "UNKNOWN_USER_ID",
    "appointment_from_client_payload",
    "appointment_window",
    "business_from_project",
    "calculate_working_hours",
    "clock_of",
    "contact_channel_from_payload",
    "create_appointment_payload",
    "decode_jwt_subject",
    "format_contact_display",
    "parse_iso",
    "professional_from_employee",
    "time_slots_from_availability",
    "user_from_auth_response",
    "user_from_payload",
    "user_to_payload",
]
