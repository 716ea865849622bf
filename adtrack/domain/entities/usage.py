from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FeatureUsageStats:
    feature_key: str
    name: str
    total_usage: int
    distinct_users: int
    interactions: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class UsageTotals:
    feature_key: str
    total_usage: int
    distinct_users: int
