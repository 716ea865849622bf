from __future__ import annotations

import logging

from adtrack.application.dto.feature_access import AccessResultOutput, CheckFeatureAccessInput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.subscription_port import SubscriptionPort
from adtrack.application.ports.usage_ledger_port import UsageLedgerPort
from adtrack.domain.entities.feature import LimitedAccess
from adtrack.domain.services.feature_access import decide_access, no_subscription_decision

from .feature_access_common import build_access_result_output, require_feature_exists


logger = logging.getLogger(__name__)


class CheckFeatureAccessUseCase:
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

    def execute(self, command: CheckFeatureAccessInput) -> AccessResultOutput:
        require_feature_exists(catalog_port=self._catalog_port, feature_key=command.feature_key)

        subscription = self._subscription_port.get_active_subscription_for_user(user_id=command.user_id)
        if subscription is None:
            return build_access_result_output(no_subscription_decision())

        plan = self._subscription_port.get_plan_by_id(plan_id=subscription.plan_id)
        plan_name = plan.name if plan is not None else None

        rule = self._catalog_port.get_access_rule(
            plan_id=subscription.plan_id,
            feature_key=command.feature_key,
        )
        access = rule.access if rule is not None else None

        used = 0
        if isinstance(access, LimitedAccess):
            used = self._usage_port.get_usage_count(
                user_id=command.user_id,
                feature_key=command.feature_key,
                period_start=subscription.period_start,
            )

        decision = decide_access(
            access=access,
            plan_name=plan_name,
            used=used,
            resets_at=subscription.current_period_end,
        )
        if not decision.has_access:
            logger.info(
                "feature_access_denied user_id=%s feature=%s level=%s reason=%s",
                command.user_id,
                command.feature_key,
                decision.level,
                decision.reason,
            )
        return build_access_result_output(decision)
