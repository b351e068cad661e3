from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from meetline.domain.entities import Business, BusinessCategory
from meetline.domain.ports import UseCaseError
from meetline.usecases.get_all_categories import GetAllCategories
from meetline.usecases.get_business_list import GetBusinessList

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusinessListUiState:
    is_loading: bool = True
    businesses: Tuple[Business, ...] = ()
    selected_category: Optional[BusinessCategory] = None
    categories: Tuple[BusinessCategory, ...] = ()
    error: Optional[str] = None


class BusinessListVM(ScreenController[BusinessListUiState]):
    """Business listing with a category filter chip row.

    ``category_name`` is the enum name passed along by navigation (for
    example ``"SPA"``); unknown names fall back to the unfiltered list.
    """

    def __init__(
        self,
        *,
        get_business_list: GetBusinessList,
        get_all_categories: GetAllCategories,
        category_name: Optional[str] = None,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(BusinessListUiState(), scope=scope)
        self._get_business_list = get_business_list
        categories = tuple(get_all_categories())
        preselected = BusinessCategory.from_name(category_name)
        if preselected not in categories:
            preselected = None
        self._update(categories=categories)
        self.filter_by_category(preselected)

    def filter_by_category(self, category: Optional[BusinessCategory]) -> asyncio.Task:
        """Fetch businesses of ``category``; ``None`` clears the filter."""
        self._update(is_loading=True, selected_category=category, error=None)
        return self.scope.launch(self._load(category), key="businesses")

    def clear_error(self) -> None:
        self._update(error=None)

    async def _load(self, category: Optional[BusinessCategory]) -> None:
        try:
            businesses = await self._get_business_list(category)
        except UseCaseError as exc:
            log.info("Business list failed for %s: %s", category, exc.code)
            self._update(is_loading=False, businesses=(), error=exc.message)
            return
        self._update(is_loading=False, businesses=tuple(businesses), error=None)


__all__ = ["BusinessListUiState", "BusinessListVM"]
