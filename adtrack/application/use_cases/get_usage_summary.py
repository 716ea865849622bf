from __future__ import annotations

from adtrack.application.dto.feature_access import UsageSummaryOutput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.subscription_port import SubscriptionPort
from adtrack.application.ports.usage_ledger_port import UsageLedgerPort
from adtrack.domain.exceptions import NoActiveSubscriptionError
from adtrack.domain.services.feature_access import build_usage_summary

from .feature_access_common import build_feature_usage_info_output


class GetUsageSummaryUseCase:
    def __init__(
        self,
        *,
        catalog_port: FeatureCatalogPort,
        subscription_port: SubscriptionPort,
        usage_port: UsageLedgerPort,
    ):
        self._catalog_port = catalog_port
        self._subscription_port = subscription_port
        self._usage_port = usage_port

    def execute(self, *, user_id: str) -> UsageSummaryOutput:
        subscription = self._subscription_port.get_active_subscription_for_user(user_id=user_id)
        if subscription is None:
            raise NoActiveSubscriptionError("No active subscription found.")

        features = self._catalog_port.list_features()
        rules = self._catalog_port.list_access_rules(plan_id=subscription.plan_id)
        usage_counts = self._usage_port.list_usage_counts(
            user_id=user_id,
            period_start=subscription.period_start,
        )

        summary = build_usage_summary(features=features, rules=rules, usage_counts=usage_counts)
        return UsageSummaryOutput(
            features={key: build_feature_usage_info_output(info) for key, info in summary.items()}
        )
