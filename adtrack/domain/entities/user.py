from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


UserRole = Literal["user", "admin"]


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    is_active: bool
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
