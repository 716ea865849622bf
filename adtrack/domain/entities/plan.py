from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Plan:
    id: str
    code: str
    name: str
    description: str | None
    is_active: bool
    sort_order: int
