from __future__ import annotations

import logging
from datetime import datetime, timezone

from adtrack.application.dto.feature_access import AccessResultOutput, FeatureUsageInfoOutput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.usage_ledger_port import FeatureInteractionPort
from adtrack.domain.entities.access import AccessDecision, FeatureUsageInfo
from adtrack.domain.entities.feature import Feature, FeatureInteraction
from adtrack.domain.exceptions import FeatureNotFoundError


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_feature_exists(*, catalog_port: FeatureCatalogPort, feature_key: str) -> Feature:
    feature = catalog_port.get_feature_by_key(feature_key=feature_key)
    if feature is None:
        raise FeatureNotFoundError(f"Feature '{feature_key}' not found.")
    return feature


def record_interaction_safely(
    *,
    interaction_port: FeatureInteractionPort | None,
    user_id: str,
    feature_key: str,
    interaction_type: str,
) -> None:
    if interaction_port is None:
        return
    try:
        interaction_port.record_interaction(
            interaction=FeatureInteraction(
                user_id=user_id,
                feature_key=feature_key,
                interaction_type=interaction_type,
                occurred_at=utcnow(),
            )
        )
    except Exception:
        logger.warning(
            "feature_interaction_write_failed user_id=%s feature=%s type=%s",
            user_id,
            feature_key,
            interaction_type,
            exc_info=True,
        )


def build_access_result_output(decision: AccessDecision) -> AccessResultOutput:
    return AccessResultOutput(
        has_access=decision.has_access,
        level=decision.level,
        reason=decision.reason,
        plan_name=decision.plan_name,
        limit=decision.limit,
        used=decision.used,
        remaining=decision.remaining,
        resets_at=decision.resets_at,
    )


def build_feature_usage_info_output(info: FeatureUsageInfo) -> FeatureUsageInfoOutput:
    return FeatureUsageInfoOutput(
        feature_id=info.feature_key,
        name=info.name,
        description=info.description,
        category=info.category,
        used=info.used,
        limit=info.limit,
        level=info.level,
    )
