from __future__ import annotations

import logging

from adtrack.application.dto.feature_access import TrackFeatureUsageInput, TrackFeatureUsageOutput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.subscription_port import SubscriptionPort
from adtrack.application.ports.usage_ledger_port import FeatureInteractionPort, UsageLedgerPort
from adtrack.domain.entities.feature import FullAccess, LimitedAccess
from adtrack.domain.exceptions import (
    FeatureAccessDeniedError,
    NoActiveSubscriptionError,
    UsageLimitExceededError,
)

from .feature_access_common import record_interaction_safely, require_feature_exists


logger = logging.getLogger(__name__)


class TrackFeatureUsageUseCase:
    def __init__(
        self,
        *,
        catalog_port: FeatureCatalogPort,
        subscription_port: SubscriptionPort,
        usage_port: UsageLedgerPort,
        interaction_port: FeatureInteractionPort | None = None,
    ):
        self._catalog_port = catalog_port
        self._subscription_port = subscription_port
        self._usage_port = usage_port
        self._interaction_port = interaction_port

    def execute(self, command: TrackFeatureUsageInput) -> TrackFeatureUsageOutput:
        require_feature_exists(catalog_port=self._catalog_port, feature_key=command.feature_key)

        subscription = self._subscription_port.get_active_subscription_for_user(user_id=command.user_id)
        if subscription is None:
            self._record(command, "limit_reached")
            raise NoActiveSubscriptionError("No active subscription found.")

        rule = self._catalog_port.get_access_rule(
            plan_id=subscription.plan_id,
            feature_key=command.feature_key,
        )
        access = rule.access if rule is not None else None

        if isinstance(access, FullAccess):
            self._record(command, "use")
            return TrackFeatureUsageOutput(success=True, level="full")

        if not isinstance(access, LimitedAccess):
            self._record(command, "limit_reached")
            logger.info(
                "feature_usage_denied user_id=%s feature=%s plan_id=%s",
                command.user_id,
                command.feature_key,
                subscription.plan_id,
            )
            raise FeatureAccessDeniedError("Access denied to this feature.")

        # Increment first, then compare: concurrent requests may overshoot the limit.
        used = self._usage_port.increment_usage(
            user_id=command.user_id,
            feature_key=command.feature_key,
            subscription_id=subscription.id,
            period_start=subscription.period_start,
        )
        if used > access.limit:
            self._record(command, "limit_reached")
            logger.info(
                "feature_usage_limit_exceeded user_id=%s feature=%s limit=%s used=%s",
                command.user_id,
                command.feature_key,
                access.limit,
                used,
            )
            raise UsageLimitExceededError("Usage limit exceeded.", limit=access.limit, used=used)

        self._record(command, "use")
        return TrackFeatureUsageOutput(
            success=True,
            level="limited",
            limit=access.limit,
            used=used,
            remaining=access.limit - used,
        )

    def _record(self, command: TrackFeatureUsageInput, interaction_type: str) -> None:
        record_interaction_safely(
            interaction_port=self._interaction_port,
            user_id=command.user_id,
            feature_key=command.feature_key,
            interaction_type=interaction_type,
        )
