from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from adtrack.api.deps import (
    get_advance_billing_period_use_case,
    get_feature_usage_analytics_use_case,
    require_admin,
)
from adtrack.api.schemas.admin import BillingPeriodResponse, FeatureUsageAnalyticsResponse
from adtrack.application.dto.admin import AdvanceBillingPeriodInput
from adtrack.application.use_cases.advance_billing_period import AdvanceBillingPeriodUseCase
from adtrack.application.use_cases.feature_access_common import utcnow
from adtrack.application.use_cases.get_feature_usage_analytics import GetFeatureUsageAnalyticsUseCase
from adtrack.domain.entities.user import User
from adtrack.domain.exceptions import SubscriptionNotFoundError


router = APIRouter(prefix="/api/admin")


@router.get("/feature-usage", response_model=FeatureUsageAnalyticsResponse)
def get_feature_usage_analytics(
    _admin: User = Depends(require_admin),
    use_case: GetFeatureUsageAnalyticsUseCase = Depends(get_feature_usage_analytics_use_case),
):
    rows = use_case.execute()
    return FeatureUsageAnalyticsResponse(
        features=[
            {
                "feature_id": row.feature_id,
                "name": row.name,
                "total_usage": row.total_usage,
                "distinct_users": row.distinct_users,
                "interactions": row.interactions,
            }
            for row in rows
        ]
    )


@router.post("/subscriptions/{subscription_id}/advance-period", response_model=BillingPeriodResponse)
def advance_billing_period(
    subscription_id: str,
    _admin: User = Depends(require_admin),
    use_case: AdvanceBillingPeriodUseCase = Depends(get_advance_billing_period_use_case),
):
    try:
        output = use_case.execute(
            AdvanceBillingPeriodInput(
                subscription_id=subscription_id,
                now=utcnow(),
            )
        )
    except SubscriptionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return BillingPeriodResponse(
        subscription_id=output.subscription_id,
        current_period_start=output.current_period_start,
        current_period_end=output.current_period_end,
    )
