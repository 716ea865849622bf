from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Subscription:
    id: str
    user_id: str
    plan_id: str
    is_active: bool
    current_period_start: datetime | None
    current_period_end: datetime | None
    created_at: datetime

    @property
    def period_start(self) -> datetime:
        # Subscriptions created before billing sync have no period yet.
        return self.current_period_start or self.created_at
