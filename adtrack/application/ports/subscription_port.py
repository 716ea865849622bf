from __future__ import annotations

from datetime import datetime
from typing import Protocol

from adtrack.domain.entities.plan import Plan
from adtrack.domain.entities.subscription import Subscription


class SubscriptionPort(Protocol):
    def get_active_subscription_for_user(self, *, user_id: str) -> Subscription | None:
        ...

    def get_subscription_by_id(self, *, subscription_id: str) -> Subscription | None:
        ...

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        ...

    def update_subscription_period(
        self,
        *,
        subscription_id: str,
        current_period_start: datetime,
        current_period_end: datetime | None,
        now: datetime,
    ) -> Subscription:
        ...
