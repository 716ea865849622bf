from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CheckFeatureAccessInput:
    user_id: str
    feature_key: str


@dataclass(frozen=True)
class AccessResultOutput:
    has_access: bool
    level: str
    reason: str | None = None
    plan_name: str | None = None
    limit: int | None = None
    used: int | None = None
    remaining: int | None = None
    resets_at: datetime | None = None


@dataclass(frozen=True)
class TrackFeatureUsageInput:
    user_id: str
    feature_key: str


@dataclass(frozen=True)
class TrackFeatureUsageOutput:
    success: bool
    level: str
    limit: int | None = None
    used: int | None = None
    remaining: int | None = None


@dataclass(frozen=True)
class FeatureUsageInfoOutput:
    feature_id: str
    name: str
    description: str
    category: str
    used: int
    limit: int | None
    level: str


@dataclass(frozen=True)
class UsageSummaryOutput:
    features: dict[str, FeatureUsageInfoOutput]


@dataclass(frozen=True)
class FeatureOutput:
    feature_id: str
    name: str
    description: str
    category: str


@dataclass(frozen=True)
class RecordFeatureInteractionInput:
    user_id: str
    feature_key: str
    interaction_type: str
