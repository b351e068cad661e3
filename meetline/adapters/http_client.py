"""Shared HTTP transport utilities for the MeetLine REST adapters.

This module wraps ``requests.Session`` so every repository adapter shares the
same timeout policy, retry behavior and header construction (common client
headers plus the bearer token of the current session).

Dependencies:
    - ``requests`` for network I/O.
    - ``meetline.adapters.api_errors.ApiTimeoutError`` for typed transport failures.
    - ``meetline.adapters.session_local.SessionManager`` for the bearer token.

Call context:
    - Constructed once by ``meetline.app.composition.AppContainer`` and shared by
      ``AuthRestAdapter``, ``BusinessRestAdapter`` and ``AppointmentRestAdapter``.
    - Blocking; the adapters call it through ``run_blocking`` so the event loop
      driving the view-models never waits on a socket.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar
from urllib.parse import urlsplit

import requests
from requests import exceptions as req_exc

from meetline.adapters.api_errors import ApiTimeoutError
from meetline.adapters.session_local import SessionManager

log = logging.getLogger(__name__)

T = TypeVar("T")

APP_VERSION = "1.0.0"
PLATFORM = "python"

# Path fragments reachable without a bearer token.
PUBLIC_ENDPOINTS: Tuple[str, ...] = (
    "auth/login",
    "auth/register",
    "auth/forgot-password",
    "auth/reset-password",
    "available-slots",
    "working-hours",
    "Projects/public",
    "/projects/public",
    "employees/public",
    "services/public",
    "channels/public",
)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


def requires_auth(url: str) -> bool:
    """Return ``True`` when ``url`` is not one of the public endpoints."""
    path = urlsplit(url).path
    return not any(fragment in path for fragment in PUBLIC_ENDPOINTS)


async def run_blocking(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a blocking adapter call in the loop's default executor."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))


class RetryingSession:
    """Shared requests wrapper with auth headers and retry loops.

    This class is transport-only. Callers provide endpoint paths (relative to
    ``base_url``) or absolute URLs and decide how to map non-2xx responses into
    domain errors, usually via ``api_errors.ensure_ok``.
    """

    def __init__(
        self,
        base_url: str,
        cfg: HttpConfig,
        *,
        session_manager: Optional[SessionManager] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a retry-enabled session.

        Args:
            base_url: Root of the main backend, for example ``https://api.example/``.
            cfg: Shared timeout and retry settings.
            session_manager: Source of the bearer token; cleared on a 401 from an
                authenticated endpoint.
            session: Optional pre-built ``requests.Session`` (tests inject stubs).
        """
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self.cfg = cfg
        self.session_manager = session_manager
        self.session = session or requests.Session()

    def url(self, path: str) -> str:
        """Resolve ``path`` against ``base_url``; absolute URLs pass through."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}{path.lstrip('/')}"

    def _headers(self, method: str, url: str) -> Dict[str, str]:
        """Build request headers for adapter calls.

        Args:
            method: Upper-case HTTP method.
            url: Absolute endpoint URL, used to decide whether a token is sent.

        Returns:
            Dictionary of request headers.
        """
        headers = {
            "Accept": "application/json",
            "X-Platform": PLATFORM,
            "X-App-Version": APP_VERSION,
        }
        # Content-Type only for methods that may send a body.
        if method in _BODY_METHODS:
            headers["Content-Type"] = "application/json"
        if self.session_manager is not None and requires_auth(url):
            token = self.session_manager.auth_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one request with retries on timeout/connectivity failures.

        Args:
            method: HTTP method name.
            path: Endpoint path relative to ``base_url`` or an absolute URL.
            params: Optional query parameter mapping.
            json_body: Optional payload serialized to JSON text.
            timeout: Optional timeout override in seconds.

        Returns:
            ``requests.Response`` from the first attempt that reached the server.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.

        Side Effects:
            Logs out the local session when an authenticated endpoint answers 401.
        """
        method = method.upper()
        url = self.url(path)
        context = f"{method} {url}"
        data = None if json_body is None else json.dumps(json_body)
        headers = self._headers(method, url)
        last_err: ApiTimeoutError | None = None
        attempts = self.cfg.retries + 1
        for attempt in range(attempts):
            try:
                log.debug("%s (attempt %d/%d)", context, attempt + 1, attempts)
                resp = self.session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=headers,
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
                continue
            if resp.status_code == 401 and self.session_manager is not None and requires_auth(url):
                log.info("401 from %s, clearing local session", url)
                self.session_manager.logout()
            return resp
        raise last_err

    def get(self, path: str, *, params: Optional[Dict[str, Any]] = None, timeout: Optional[int] = None) -> requests.Response:
        return self.request("GET", path, params=params, timeout=timeout)

    def post(self, path: str, *, json_body: Any = None, timeout: Optional[int] = None) -> requests.Response:
        return self.request("POST", path, json_body=json_body, timeout=timeout)

    def put(self, path: str, *, json_body: Any = None, timeout: Optional[int] = None) -> requests.Response:
        return self.request("PUT", path, json_body=json_body, timeout=timeout)

    def delete(self, path: str, *, timeout: Optional[int] = None) -> requests.Response:
        return self.request("DELETE", path, timeout=timeout)


__all__ = [
    "APP_VERSION",
    "HttpConfig",
    "PUBLIC_ENDPOINTS",
    "RetryingSession",
    "requires_auth",
    "run_blocking",
]
