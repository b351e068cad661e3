from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from meetline.domain.entities import User
from meetline.domain.ports import AuthRepository


@dataclass
class GetSession:
    """Return the locally cached user, ``None`` when signed out. No network."""

    auth_repo: AuthRepository

    def __call__(self) -> Optional[User]:
        return self.auth_repo.get_session()


__all__ = ["GetSession"]
