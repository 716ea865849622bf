from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from adtrack.domain.entities.feature import AccessLevelName


@dataclass(frozen=True)
class AccessDecision:
    has_access: bool
    level: AccessLevelName
    reason: str | None = None
    plan_name: str | None = None
    limit: int | None = None
    used: int | None = None
    remaining: int | None = None
    resets_at: datetime | None = None


@dataclass(frozen=True)
class FeatureUsageInfo:
    feature_key: str
    name: str
    description: str
    category: str
    used: int
    limit: int | None
    level: AccessLevelName
