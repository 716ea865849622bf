from __future__ import annotations

from adtrack.domain.entities.feature import Feature
from adtrack.domain.entities.usage import FeatureUsageStats, UsageTotals


def build_feature_usage_stats(
    *,
    features: list[Feature],
    totals: list[UsageTotals],
    interactions: dict[str, dict[str, int]],
) -> list[FeatureUsageStats]:
    totals_by_key = {item.feature_key: item for item in totals}
    stats: list[FeatureUsageStats] = []

    for feature in features:
        item = totals_by_key.get(feature.key)
        stats.append(
            FeatureUsageStats(
                feature_key=feature.key,
                name=feature.name,
                total_usage=item.total_usage if item is not None else 0,
                distinct_users=item.distinct_users if item is not None else 0,
                interactions=dict(interactions.get(feature.key, {})),
            )
        )

    stats.sort(key=lambda s: (-s.total_usage, s.feature_key))
    return stats
