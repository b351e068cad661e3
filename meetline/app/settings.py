"""Typed runtime settings.

Values are layered: dataclass defaults, then an optional JSON file named by
``MEETLINE_SETTINGS_FILE`` (or passed explicitly), then ``MEETLINE_*``
environment variables. Every layer goes through the same coercion, so a bad
value fails early with ``ValueError`` instead of surfacing as a transport
error later.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

SETTINGS_FILE_ENV = "MEETLINE_SETTINGS_FILE"
ENV_PREFIX = "MEETLINE_"


def _default_session_path() -> str:
    return str(Path.home() / ".meetline" / "session.json")


@dataclass(frozen=True)
class AppSettings:
    api_base_url: str = "http://localhost:8080/"
    appointments_url: str = "http://localhost:8080/"
    request_timeout_s: int = 10
    retries: int = 2
    session_path: str = ""
    use_mock: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    debug_logging: bool = False

    def __post_init__(self) -> None:
        if not self.session_path:
            object.__setattr__(self, "session_path", _default_session_path())

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None


_FIELD_NAMES = tuple(f.name for f in fields(AppSettings))


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    path: Optional[str] = None,
) -> AppSettings:
    """Build settings from defaults, a JSON file and the environment.

    Args:
        env: Environment mapping; ``os.environ`` when omitted.
        path: JSON settings file. Falls back to ``MEETLINE_SETTINGS_FILE``.

    Raises:
        ValueError: On unknown keys, malformed JSON or values that fail coercion.
    """
    env = os.environ if env is None else env
    settings = AppSettings()

    file_path = path or env.get(SETTINGS_FILE_ENV)
    if file_path:
        settings = apply_overrides(settings, _read_json(file_path))

    env_values: Dict[str, Any] = {}
    for name in _FIELD_NAMES:
        raw = env.get(f"{ENV_PREFIX}{name.upper()}")
        if raw is not None:
            env_values[name] = raw
    if env_values:
        settings = apply_overrides(settings, env_values)
    return settings


def apply_overrides(settings: AppSettings, values: Mapping[str, Any]) -> AppSettings:
    """Return ``settings`` with ``values`` coerced and applied."""
    coerced: Dict[str, Any] = {}
    for key, raw in values.items():
        if key not in _FIELD_NAMES:
            raise ValueError(f"Unknown setting: {key}")
        coerced[key] = _coerce_value(key, raw)
    return replace(settings, **coerced)


def _read_json(file_path: str) -> Dict[str, Any]:
    try:
        with open(file_path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Settings file {file_path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Settings file {file_path} must contain a JSON object.")
    return data


def _coerce_value(key: str, raw: Any) -> Any:
    if key in {"api_base_url", "appointments_url"}:
        return _coerce_url(key, raw)
    if key == "request_timeout_s":
        value = _coerce_int(key, raw)
        if value <= 0:
            raise ValueError(f"{key} must be positive.")
        return value
    if key == "retries":
        return _coerce_int(key, raw, allow_negative=False)
    if key == "session_path":
        return _coerce_path(key, raw)
    if key in {"use_mock", "debug_logging"}:
        return _coerce_bool(raw)
    if key in {"latitude", "longitude"}:
        return _coerce_optional_float(key, raw)
    raise ValueError(f"Unhandled setting: {key}")


def _coerce_url(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty URL.")
    text = value.strip()
    if not text.startswith(("http://", "https://")):
        raise ValueError(f"{name} must start with http:// or https://.")
    return text if text.endswith("/") else f"{text}/"


def _coerce_path(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string path.")
    return os.path.expanduser(value.strip())


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _coerce_int(name: str, value: Any, *, allow_negative: bool = True) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer.")
    if isinstance(value, (int, float)):
        coerced = int(value)
    elif isinstance(value, str):
        try:
            coerced = int(value.strip())
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer.") from exc
    else:
        raise ValueError(f"{name} must be an integer.")
    if not allow_negative and coerced < 0:
        raise ValueError(f"{name} must be non-negative.")
    return coerced


def _coerce_optional_float(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number.")
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError as exc:
            raise ValueError(f"{name} must be a number.") from exc
    if isinstance(value, (int, float)):
        return float(value)
    raise ValueError(f"{name} must be a number.")


__all__ = ["AppSettings", "apply_overrides", "load_settings"]
