from __future__ import annotations

import base64
import json
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from meetline.adapters.http_client import HttpConfig, RetryingSession
from meetline.adapters.session_local import InMemorySessionStore, SessionManager

NO_BODY = object()


class ResponseStub:
    def __init__(self, payload: Any = NO_BODY, status_code: int = 200, text: str = "") -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text or ("" if payload is NO_BODY else json.dumps(payload))

    def json(self) -> Any:
        if self._payload is NO_BODY:
            raise ValueError("No JSON body")
        return self._payload


Route = Union[ResponseStub, Exception]


class SessionStub:
    """Stands in for ``requests.Session``; answers by URL fragment, first match wins.

    A route value may be a list, consumed one entry per matching call.
    """

    def __init__(self, routes: Sequence[Tuple[str, Union[Route, List[Route]]]]) -> None:
        self.routes = [(fragment, list(r) if isinstance(r, list) else r) for fragment, r in routes]
        self.calls: List[Dict[str, Any]] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> ResponseStub:
        self.calls.append(
            {
                "method": method,
                "url": url,
                "params": params,
                "json": json.loads(data) if data else None,
                "headers": dict(headers or {}),
                "timeout": timeout,
            }
        )
        for fragment, route in self.routes:
            if f"{method} {url}".find(fragment) == -1:
                continue
            if isinstance(route, list):
                route = route.pop(0) if len(route) > 1 else route[0]
            if isinstance(route, Exception):
                raise route
            return route
        raise AssertionError(f"No stub route for {method} {url}")

    def calls_to(self, fragment: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if fragment in f"{c['method']} {c['url']}"]


def make_http(
    routes: Sequence[Tuple[str, Union[Route, List[Route]]]],
    *,
    sessions: Optional[SessionManager] = None,
    retries: int = 0,
) -> Tuple[RetryingSession, SessionStub, SessionManager]:
    sessions = sessions or SessionManager(InMemorySessionStore())
    stub = SessionStub(routes)
    http = RetryingSession(
        "http://api.test/",
        HttpConfig(request_timeout_s=5, retries=retries),
        session_manager=sessions,
        session=stub,  # type: ignore[arg-type]
    )
    return http, stub, sessions


def make_jwt(claims: Dict[str, Any]) -> str:
    def part(data: Dict[str, Any]) -> str:
        raw = base64.urlsafe_b64encode(json.dumps(data).encode("utf-8")).decode("ascii")
        return raw.rstrip("=")

    return f"{part({'alg': 'HS256', 'typ': 'JWT'})}.{part(claims)}.signature"


__all__ = ["NO_BODY", "ResponseStub", "SessionStub", "make_http", "make_jwt"]
