from __future__ import annotations

from adtrack.application.dto.admin import FeatureUsageStatsOutput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.usage_ledger_port import FeatureInteractionPort, UsageLedgerPort
from adtrack.domain.services.usage_analytics import build_feature_usage_stats


class GetFeatureUsageAnalyticsUseCase:
    def __init__(
        self,
        *,
        catalog_port: FeatureCatalogPort,
        usage_port: UsageLedgerPort,
        interaction_port: FeatureInteractionPort,
    ):
        self._catalog_port = catalog_port
        self._usage_port = usage_port
        self._interaction_port = interaction_port

    def execute(self) -> list[FeatureUsageStatsOutput]:
        stats = build_feature_usage_stats(
            features=self._catalog_port.list_features(),
            totals=self._usage_port.list_usage_totals(),
            interactions=self._interaction_port.count_interactions_by_feature(),
        )
        return [
            FeatureUsageStatsOutput(
                feature_id=item.feature_key,
                name=item.name,
                total_usage=item.total_usage,
                distinct_users=item.distinct_users,
                interactions=item.interactions,
            )
            for item in stats
        ]
