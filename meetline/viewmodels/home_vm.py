"""Home screen state: greeting, category strip, featured/nearby rails,
the next appointments and the inline business search.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from meetline.domain.entities import Appointment, Business, BusinessCategory, Location, User
from meetline.domain.ports import LocationProvider, UseCaseError
from meetline.usecases.get_all_categories import GetAllCategories
from meetline.usecases.get_appointments import GetAppointments
from meetline.usecases.get_featured_businesses import GetFeaturedBusinesses
from meetline.usecases.get_nearby_businesses import GetNearbyBusinesses
from meetline.usecases.get_session import GetSession
from meetline.usecases.search_businesses import SearchBusinesses

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)

UPCOMING_PREVIEW_COUNT = 2


@dataclass(frozen=True)
class HomeUiState:
    is_loading: bool = True
    user: Optional[User] = None
    featured_businesses: Tuple[Business, ...] = ()
    nearby_businesses: Tuple[Business, ...] = ()
    upcoming_appointments: Tuple[Appointment, ...] = ()
    categories: Tuple[BusinessCategory, ...] = ()
    search_query: str = ""
    search_results: Tuple[Business, ...] = ()
    is_searching: bool = False
    error: Optional[str] = None


class HomeVM(ScreenController[HomeUiState]):
    """Aggregates several independent fetches into one home screen state.

    Featured, nearby and upcoming are loaded side by side; each failure only
    empties its own rail, so a partial backend outage still renders a page.
    """

    def __init__(
        self,
        *,
        get_session: GetSession,
        get_all_categories: GetAllCategories,
        get_featured_businesses: GetFeaturedBusinesses,
        get_nearby_businesses: GetNearbyBusinesses,
        get_appointments: GetAppointments,
        search_businesses: SearchBusinesses,
        location_provider: Optional[LocationProvider] = None,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(HomeUiState(), scope=scope)
        self._get_session = get_session
        self._get_featured = get_featured_businesses
        self._get_nearby = get_nearby_businesses
        self._get_appointments = get_appointments
        self._search = search_businesses
        self._location_provider = location_provider
        self._update(categories=tuple(get_all_categories()))
        self.refresh()

    def refresh(self) -> asyncio.Task:
        """Re-read the session user and re-issue the featured, nearby and upcoming fetches."""
        self._update(is_loading=True, user=self._get_session(), error=None)
        return self.scope.launch(self._load_all(), key="load")

    def search(self, query: str) -> Optional[asyncio.Task]:
        """Search businesses; a blank query clears results without a request."""
        if not query.strip():
            self.scope.cancel("search")
            self._update(search_query=query, search_results=(), is_searching=False)
            return None
        self._update(search_query=query, is_searching=True, error=None)
        return self.scope.launch(self._run_search(query), key="search")

    def clear_search(self) -> None:
        self.scope.cancel("search")
        self._update(search_query="", search_results=(), is_searching=False)

    def clear_error(self) -> None:
        self._update(error=None)

    # ------------------------------------------------------------------
    async def _load_all(self) -> None:
        await asyncio.gather(self._load_featured(), self._load_nearby(), self._load_upcoming())
        self._update(is_loading=False)

    async def _load_featured(self) -> None:
        try:
            featured = await self._get_featured()
        except UseCaseError as exc:
            log.info("Featured businesses unavailable: %s", exc.code)
            featured = []
        self._update(featured_businesses=tuple(featured))

    async def _load_nearby(self) -> None:
        location = await self._device_location()
        try:
            if location is None:
                nearby = await self._get_nearby()
            else:
                nearby = await self._get_nearby(location.latitude, location.longitude)
        except UseCaseError as exc:
            log.info("Nearby businesses unavailable: %s", exc.code)
            nearby = []
        self._update(nearby_businesses=tuple(nearby))

    async def _load_upcoming(self) -> None:
        try:
            upcoming = await self._get_appointments.upcoming()
        except UseCaseError as exc:
            log.info("Upcoming appointments unavailable: %s", exc.code)
            upcoming = []
        self._update(upcoming_appointments=tuple(upcoming[:UPCOMING_PREVIEW_COUNT]))

    async def _device_location(self) -> Optional[Location]:
        provider = self._location_provider
        if provider is None or not provider.has_permission():
            log.debug("No location permission, nearby query without coordinates")
            return None
        try:
            return await provider.current_location()
        except Exception as exc:
            log.warning("Could not read device location: %s", exc)
            return None

    async def _run_search(self, query: str) -> None:
        try:
            results = await self._search(query)
        except UseCaseError as exc:
            log.info("Search failed: %s", exc.code)
            self._update(is_searching=False, search_results=(), error=exc.message)
            return
        self._update(is_searching=False, search_results=tuple(results))


__all__ = ["HomeUiState", "HomeVM", "UPCOMING_PREVIEW_COUNT"]
