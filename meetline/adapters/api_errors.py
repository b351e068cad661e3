"""Typed failures raised by the MeetLine REST adapters.

``ensure_ok`` turns a non-2xx ``requests.Response`` into one of the
``ApiError`` subclasses. The backend answers errors as plain text, as a
``{"message": ..., "code": ...}`` envelope or as an ASP.NET
``ProblemDetails`` body; ``extract_error_hint`` reads all three.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

HINT_LIMIT = 200
BODY_SNIPPET = 400

_HINT_KEYS = ("message", "detail", "hint", "error")
_CODE_KEYS = ("code", "errorCode", "error_code")


class ApiError(RuntimeError):
    """Base class for REST adapter failures.

    ``status`` is the HTTP status when a response arrived, ``code`` and
    ``hint`` come from the error body, ``context`` names the adapter call.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx."""


class ApiServerError(ApiError):
    """HTTP 5xx."""


class ApiTimeoutError(ApiError):
    """No response: timeout or connection failure after all retries."""


def ensure_ok(resp: Any, ctx: str) -> None:
    """Raise a typed ``ApiError`` unless ``resp`` carries a 2xx status."""
    status = int(resp.status_code)
    if 200 <= status < 300:
        return
    payload = _error_body(resp)
    hint = extract_error_hint(payload)
    message = f"{ctx}: {hint} (HTTP {status})" if hint else f"{ctx}: HTTP {status}"
    if 400 <= status < 500:
        error_cls = ApiClientError
    elif 500 <= status < 600:
        error_cls = ApiServerError
    else:
        error_cls = ApiError
    raise error_cls(
        message,
        status=status,
        code=_error_code(payload),
        hint=hint,
        payload=payload,
        context=ctx,
    )


def json_object(resp: Any, ctx: str) -> Dict[str, Any]:
    """Decode a 2xx body that must be a JSON object."""
    payload = _decode(resp, ctx)
    if not isinstance(payload, dict):
        raise ApiError(f"{ctx}: expected a JSON object", payload=payload, context=ctx)
    return payload


def json_list(resp: Any, ctx: str) -> List[Any]:
    """Decode a 2xx body that must be a JSON array."""
    payload = _decode(resp, ctx)
    if not isinstance(payload, list):
        raise ApiError(f"{ctx}: expected a JSON array", payload=payload, context=ctx)
    return payload


def extract_error_hint(payload: Any) -> Optional[str]:
    """Return the most specific human text in an error body.

    ``message``/``detail`` win over the generic ProblemDetails ``title`` so a
    409 such as ``{"title": "Conflict", "message": "Email already exists"}``
    surfaces the backend's own wording. Validation ``errors`` maps come out
    as ``"Field: text"``.
    """
    if isinstance(payload, dict):
        for key in _HINT_KEYS:
            text = _flatten(payload.get(key))
            if text:
                return text
        return _flatten(payload.get("errors")) or _flatten(payload.get("title"))
    return _flatten(payload)


def _decode(resp: Any, ctx: str) -> Any:
    try:
        return resp.json()
    except ValueError as exc:
        raise ApiError(f"{ctx}: response was not JSON", context=ctx) from exc


def _error_body(resp: Any) -> Any:
    try:
        return resp.json()
    except ValueError:
        return (getattr(resp, "text", "") or "")[:BODY_SNIPPET] or None


def _error_code(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    for key in _CODE_KEYS:
        if payload.get(key) is not None:
            return str(payload[key])
    return None


def _flatten(data: Any) -> Optional[str]:
    if data is None:
        return None
    if isinstance(data, list):
        parts = [text for text in (_flatten(item) for item in data) if text]
        text = "; ".join(parts[:3])
    elif isinstance(data, dict):
        # {"Email": ["The Email field is required."]}
        parts = [f"{key}: {_flatten(value)}" for key, value in data.items() if _flatten(value)]
        text = ", ".join(parts[:4])
    else:
        text = str(data).strip()
    return text[:HINT_LIMIT] or None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "ensure_ok",
    "extract_error_hint",
    "json_list",
    "json_object",
]
