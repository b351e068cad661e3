from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from meetline.domain.entities import Business
from meetline.domain.ports import UseCaseError
from meetline.usecases.get_business_detail import GetBusinessDetail

from .base import ScreenController
from .scope import ControllerScope

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BusinessDetailUiState:
    is_loading: bool = True
    business: Optional[Business] = None
    error: Optional[str] = None


class BusinessDetailVM(ScreenController[BusinessDetailUiState]):
    def __init__(
        self,
        *,
        get_business_detail: GetBusinessDetail,
        business_id: str,
        scope: Optional[ControllerScope] = None,
    ) -> None:
        super().__init__(BusinessDetailUiState(), scope=scope)
        self._get_business_detail = get_business_detail
        self.business_id = business_id
        self.reload()

    def reload(self) -> asyncio.Task:
        self._update(is_loading=True, error=None)
        return self.scope.launch(self._load(), key="load")

    def clear_error(self) -> None:
        self._update(error=None)

    async def _load(self) -> None:
        try:
            business = await self._get_business_detail(self.business_id)
        except UseCaseError as exc:
            log.info("Business %s failed to load: %s", self.business_id, exc.code)
            self._update(is_loading=False, error=exc.message)
            return
        self._update(is_loading=False, business=business, error=None)


__all__ = ["BusinessDetailUiState", "BusinessDetailVM"]
