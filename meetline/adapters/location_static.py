from __future__ import annotations

from typing import Optional

from meetline.domain.entities import Location
from meetline.domain.ports import LocationProvider


class LocationUnavailableError(RuntimeError):
    """Raised when no device location may be read."""


class StaticLocationProvider(LocationProvider):
    """Fixed coordinates from settings; no coordinates means no permission."""

    def __init__(self, latitude: Optional[float] = None, longitude: Optional[float] = None) -> None:
        self._location = (
            Location(latitude=float(latitude), longitude=float(longitude))
            if latitude is not None and longitude is not None
            else None
        )

    def has_permission(self) -> bool:
        return self._location is not None

    async def current_location(self) -> Location:
        if self._location is None:
            raise LocationUnavailableError("Location permission not granted")
        return self._location


__all__ = ["LocationUnavailableError", "StaticLocationProvider"]
