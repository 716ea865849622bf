from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FeatureUsageStatsOutput:
    feature_id: str
    name: str
    total_usage: int
    distinct_users: int
    interactions: dict[str, int]


@dataclass(frozen=True)
class AdvanceBillingPeriodInput:
    subscription_id: str
    now: datetime


@dataclass(frozen=True)
class BillingPeriodOutput:
    subscription_id: str
    current_period_start: datetime
    current_period_end: datetime | None
