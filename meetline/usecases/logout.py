from __future__ import annotations

from dataclasses import dataclass

from meetline.domain.ports import AuthRepository


@dataclass
class Logout:
    auth_repo: AuthRepository

    def __call__(self) -> None:
        self.auth_repo.logout()


__all__ = ["Logout"]
