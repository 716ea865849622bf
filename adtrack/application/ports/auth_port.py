from __future__ import annotations

from typing import Protocol

from adtrack.domain.entities.user import User


class AuthPort(Protocol):
    def get_user_by_id(self, *, user_id: str) -> User | None:
        ...
