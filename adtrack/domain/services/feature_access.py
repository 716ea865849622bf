from __future__ import annotations

from datetime import datetime

from adtrack.domain.entities.access import AccessDecision, FeatureUsageInfo
from adtrack.domain.entities.feature import (
    AccessLevel,
    Feature,
    FeatureAccessRule,
    FullAccess,
    LimitedAccess,
)


REASON_NO_SUBSCRIPTION = "no active subscription"
REASON_UPGRADE_REQUIRED = "upgrade required"
REASON_LIMIT_EXCEEDED = "usage limit exceeded"


def no_subscription_decision() -> AccessDecision:
    return AccessDecision(has_access=False, level="none", reason=REASON_NO_SUBSCRIPTION)


def decide_access(
    *,
    access: AccessLevel | None,
    plan_name: str | None,
    used: int,
    resets_at: datetime | None = None,
) -> AccessDecision:
    if isinstance(access, FullAccess):
        return AccessDecision(has_access=True, level="full", plan_name=plan_name)

    if isinstance(access, LimitedAccess):
        if used >= access.limit:
            return AccessDecision(
                has_access=False,
                level="limited",
                reason=REASON_LIMIT_EXCEEDED,
                plan_name=plan_name,
                limit=access.limit,
                used=used,
                resets_at=resets_at,
            )
        return AccessDecision(
            has_access=True,
            level="limited",
            plan_name=plan_name,
            limit=access.limit,
            used=used,
            remaining=access.limit - used,
            resets_at=resets_at,
        )

    return AccessDecision(
        has_access=False,
        level="none",
        reason=REASON_UPGRADE_REQUIRED,
        plan_name=plan_name,
    )


def build_usage_summary(
    *,
    features: list[Feature],
    rules: list[FeatureAccessRule],
    usage_counts: dict[str, int],
) -> dict[str, FeatureUsageInfo]:
    """Join the catalog, the plan's rules and the period's usage counts.

    Features without a rule for the plan are reported as ``none`` with no
    usage, whatever the ledger holds for them.
    """
    rules_by_key = {rule.feature_key: rule for rule in rules}
    summary: dict[str, FeatureUsageInfo] = {}

    for feature in features:
        rule = rules_by_key.get(feature.key)
        if rule is None:
            used = 0
            limit = None
            level = "none"
        else:
            used = int(usage_counts.get(feature.key, 0))
            limit = rule.access.limit if isinstance(rule.access, LimitedAccess) else None
            level = rule.access.name

        summary[feature.key] = FeatureUsageInfo(
            feature_key=feature.key,
            name=feature.name,
            description=feature.description,
            category=feature.category,
            used=used,
            limit=limit,
            level=level,
        )

    return summary
