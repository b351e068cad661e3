import pytest

from meetline.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from meetline.domain.ports import UseCaseError
from meetline.usecases.error_mapping import SESSION_EXPIRED_MESSAGE, map_api_error


@pytest.mark.parametrize(
    "exc, code, message",
    [
        (ApiTimeoutError("ctx"), "REQUEST_TIMEOUT", "Request timed out. Check connection."),
        (ApiClientError("ctx", status=401), "SESSION_EXPIRED", SESSION_EXPIRED_MESSAGE),
        (ApiClientError("ctx", status=403), "SESSION_EXPIRED", SESSION_EXPIRED_MESSAGE),
        (ApiClientError("ctx", status=404), "NOT_FOUND", "Not found"),
        (ApiClientError("ctx", status=409, hint="Email already exists"), "CONFLICT", "Email already exists"),
        (ApiClientError("ctx", status=409), "CONFLICT", "Conflict."),
        (ApiClientError("ctx", status=422, hint="date is required"), "INVALID_PARAMS", "date is required"),
        (ApiClientError("ctx", status=400, hint="bad input"), "REQUEST_FAILED", "Request failed (HTTP 400): bad input"),
        (ApiServerError("ctx", status=503), "SERVER_ERROR", "Server error, try again."),
        (ApiError("weird response"), "API_ERROR", "weird response"),
    ],
)
def test_adapter_errors_map_to_stable_codes(exc, code, message):
    mapped = map_api_error(exc, default_code="DEFAULT")

    assert mapped.code == code
    assert mapped.message == message


def test_hint_falls_back_to_payload():
    exc = ApiClientError("ctx", status=422, payload={"title": "One or more validation errors occurred."})

    assert map_api_error(exc, default_code="X").message == "One or more validation errors occurred."


def test_unauthorized_message_overrides_session_expired():
    mapped = map_api_error(
        ApiClientError("ctx", status=401),
        default_code="LOGIN_FAILED",
        unauthorized_message="Invalid email or password.",
    )

    assert mapped.code == "AUTH_FAILED"
    assert mapped.message == "Invalid email or password."


def test_unknown_errors_use_defaults():
    assert map_api_error(RuntimeError(""), default_code="X", default_message="Nope").message == "Nope"
    assert map_api_error(RuntimeError("boom"), default_code="X").message == "boom"
    assert map_api_error(RuntimeError(""), default_code="X").message == "Unexpected error."


def test_use_case_error_passes_through():
    original = UseCaseError("VALIDATION", "Email is required")

    assert map_api_error(original, default_code="X") is original
