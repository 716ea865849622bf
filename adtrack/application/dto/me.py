from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MeOutput:
    user_id: str
    name: str
    email: str
    role: str
    is_admin: bool
    plan_name: str | None
