from datetime import datetime, timedelta, timezone

from meetline.adapters.mapping import (
    DEFAULT_SERVICE,
    HOURS_UNAVAILABLE,
    UNKNOWN_USER_ID,
    appointment_from_client_payload,
    appointment_window,
    business_from_project,
    calculate_working_hours,
    clock_of,
    contact_channel_from_payload,
    create_appointment_payload,
    decode_jwt_subject,
    format_contact_display,
    parse_iso,
    time_slots_from_availability,
    user_from_auth_response,
)
from meetline.domain.entities import AppointmentStatus, BusinessCategory, ContactChannelType, TimeSlot
from meetline.tests.unit.adapters.http_stubs import make_jwt
from meetline.tests.unit.viewmodels.helpers import make_business, make_professional, make_service, make_user


def test_jwt_subject_is_user_id():
    assert decode_jwt_subject(make_jwt({"sub": "42"})) == "42"
    assert decode_jwt_subject("not-a-token") == UNKNOWN_USER_ID
    assert decode_jwt_subject("a.!!!.c") == UNKNOWN_USER_ID
    assert decode_jwt_subject(make_jwt({"name": "no subject"})) == UNKNOWN_USER_ID


def test_user_from_auth_response_prefers_full_name():
    payload = {"token": make_jwt({"sub": "u7"}), "fullName": "Ana Ruiz", "email": "ana@example.com"}

    user = user_from_auth_response(payload, phone="300")

    assert (user.id, user.name, user.email, user.phone) == ("u7", "Ana Ruiz", "ana@example.com", "300")


def test_project_maps_industry_and_display_defaults():
    business = business_from_project({"id": 3, "name": "Fade Kings", "description": "Cuts", "industry": "Barbería"})

    assert business.id == "3"
    assert business.category is BusinessCategory.BARBERSHOP
    assert business.image_url == BusinessCategory.BARBERSHOP.image_url
    assert business.opening_hours == HOURS_UNAVAILABLE
    assert business.services == (DEFAULT_SERVICE,)
    assert business_from_project({"id": 4, "industry": "Bakery"}).category is BusinessCategory.OTHER


def test_contact_display_formatting():
    assert format_contact_display(ContactChannelType.PHONE, "3025689564") == "(302) 568-9564"
    assert format_contact_display(ContactChannelType.WHATSAPP, "+57 300") == "+57 300"
    assert format_contact_display(ContactChannelType.INSTAGRAM, "https://instagram.com/fadekings/") == "@fadekings"
    assert format_contact_display(ContactChannelType.TIKTOK, "fadekings") == "@fadekings"
    assert format_contact_display(ContactChannelType.TWITTER, "@fade") == "@fade"
    assert format_contact_display(ContactChannelType.WEBSITE, "https://fade.test") == "https://fade.test"


def test_contact_channel_decodes_embedded_json_value():
    channel = contact_channel_from_payload({"type": "WhatsApp", "value": '{"value": "3025689564"}'})

    assert channel.type is ContactChannelType.WHATSAPP
    assert channel.value == "3025689564"
    assert channel.display_value == "(302) 568-9564"
    assert contact_channel_from_payload({"type": "fax", "value": "123"}).type is ContactChannelType.OTHER


def test_working_hours_and_slots_from_availability():
    slots = [
        {"startTime": "2025-12-15T09:00:00-05:00", "endTime": "2025-12-15T09:30:00-05:00"},
        {"startTime": "2025-12-15T17:30:00-05:00", "endTime": "2025-12-15T18:00:00-05:00"},
    ]

    assert calculate_working_hours(slots) == "09:00 - 18:00"
    assert calculate_working_hours([]) == HOURS_UNAVAILABLE
    assert time_slots_from_availability({"availableSlots": slots}) == [TimeSlot("09:00"), TimeSlot("17:30")]
    assert time_slots_from_availability({}) == []


def test_clock_of_and_parse_iso():
    assert clock_of("2025-12-15T07:05:00Z") == "07:05"
    assert parse_iso("garbage") is None
    assert parse_iso("2025-12-15T07:05:00Z").tzinfo is not None


def test_client_appointment_payload():
    start = datetime(2025, 12, 15, 14, 0, tzinfo=timezone.utc)
    appointment = appointment_from_client_payload(
        {
            "id": 12,
            "userId": "u1",
            "projectId": 3,
            "projectName": "Fade Kings",
            "employeeId": "e1",
            "employeeName": "Carlos",
            "serviceId": 1,
            "serviceName": "Cut",
            "price": 25,
            "startTime": "2025-12-15T14:00:00Z",
            "status": "Confirmed",
            "userNotes": "window seat",
        }
    )

    assert appointment.id == "12"
    assert appointment.business.name == "Fade Kings"
    assert appointment.date == int(start.timestamp() * 1000)
    assert appointment.time == start.astimezone().strftime("%H:%M")
    assert appointment.status is AppointmentStatus.CONFIRMED
    assert appointment.service.price == 25.0
    assert appointment.notes == "window seat"


def test_client_appointment_without_start_time():
    appointment = appointment_from_client_payload({"id": 1, "status": "mystery"})

    assert appointment.date == 0
    assert appointment.time == "00:00"
    assert appointment.status is AppointmentStatus.PENDING


def test_appointment_window_spans_service_duration():
    date_ms = int(datetime(2025, 12, 15, 12, 0).timestamp() * 1000)

    start, end = appointment_window(date_ms, "09:30", 45)

    assert parse_iso(start).strftime("%H:%M") == "09:30"
    assert parse_iso(end) - parse_iso(start) == timedelta(minutes=45)


def test_create_appointment_payload_fields():
    date_ms = int(datetime(2025, 12, 15, 12, 0).timestamp() * 1000)
    client = make_user("u1", name="Ana", email="ana@example.com")

    numeric = create_appointment_payload(
        make_business("3"), make_professional("e1"), make_service("1"), date_ms, "10:00", None, client
    )
    named = create_appointment_payload(
        make_business("3"), make_professional("e1"), make_service("srv_1"), date_ms, "10:00", "hi", client
    )

    assert numeric["projectId"] == "3"
    assert numeric["serviceId"] == 1
    assert numeric["employeeId"] == "e1"
    assert numeric["clientName"] == "Ana"
    assert numeric["clientPhone"] == client.phone
    assert named["serviceId"] == 0
    assert named["userNotes"] == "hi"
