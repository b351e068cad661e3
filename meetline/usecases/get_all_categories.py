from __future__ import annotations

from dataclasses import dataclass
from typing import List

from meetline.domain.entities import BusinessCategory
from meetline.domain.ports import BusinessRepository


@dataclass
class GetAllCategories:
    business_repo: BusinessRepository

    def __call__(self) -> List[BusinessCategory]:
        return list(self.business_repo.get_all_categories())


__all__ = ["GetAllCategories"]
