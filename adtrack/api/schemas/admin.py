from __future__ import annotations

from datetime import datetime

from adtrack.api.schemas.subscription import CamelModel


class FeatureUsageStatsResponse(CamelModel):
    feature_id: str
    name: str
    total_usage: int
    distinct_users: int
    interactions: dict[str, int]


class FeatureUsageAnalyticsResponse(CamelModel):
    features: list[FeatureUsageStatsResponse]


class BillingPeriodResponse(CamelModel):
    subscription_id: str
    current_period_start: datetime
    current_period_end: datetime | None
