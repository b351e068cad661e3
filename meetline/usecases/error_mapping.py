"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from meetline.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
)
from meetline.domain.ports import UseCaseError

SESSION_EXPIRED_MESSAGE = "Session expired. Please sign in again."


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
    unauthorized_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port call.
        default_code: Code used when ``exc`` is not an adapter error.
        default_message: Message used for non-adapter errors without text.
        unauthorized_message: Replaces the session-expired text for 401/403,
            for flows where the user is not signed in yet (login).

    Returns:
        UseCaseError: ``exc`` itself when it already is one.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or extract_error_hint(getattr(exc, "payload", None))
        if status in (401, 403):
            if unauthorized_message:
                return UseCaseError("AUTH_FAILED", unauthorized_message)
            return UseCaseError("SESSION_EXPIRED", SESSION_EXPIRED_MESSAGE)
        if status == 404:
            return UseCaseError("NOT_FOUND", "Not found")
        if status == 409:
            return UseCaseError("CONFLICT", _compose_error_message("Conflict", hint, bare=True))
        if status == 422:
            return UseCaseError("INVALID_PARAMS", _compose_error_message("Invalid parameters", hint, bare=True))
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Server error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str], *, bare: bool = False) -> str:
    """Combine a base label with backend hint text.

    With ``bare`` the hint replaces the label entirely, so a 409
    ``"Email already exists"`` reaches the screen verbatim.
    """
    hint_text = (hint or "").strip()
    if hint_text:
        return hint_text if bare else f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["SESSION_EXPIRED_MESSAGE", "map_api_error"]
