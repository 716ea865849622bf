from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from adtrack.api.schemas.subscription import build_access_result_response
from adtrack.application.dto.feature_access import AccessResultOutput, CheckFeatureAccessInput
from adtrack.application.ports.usage_ledger_port import FeatureInteractionPort
from adtrack.application.use_cases.advance_billing_period import AdvanceBillingPeriodUseCase
from adtrack.application.use_cases.check_feature_access import CheckFeatureAccessUseCase
from adtrack.application.use_cases.feature_access_common import record_interaction_safely
from adtrack.application.use_cases.get_feature_usage_analytics import GetFeatureUsageAnalyticsUseCase
from adtrack.application.use_cases.get_me import GetMeUseCase
from adtrack.application.use_cases.get_usage_summary import GetUsageSummaryUseCase
from adtrack.application.use_cases.list_features import ListFeaturesUseCase
from adtrack.application.use_cases.record_feature_interaction import RecordFeatureInteractionUseCase
from adtrack.application.use_cases.track_feature_usage import TrackFeatureUsageUseCase
from adtrack.domain.entities.user import User
from adtrack.domain.exceptions import FeatureNotFoundError
from adtrack.infrastructure.db.engine import get_engine
from adtrack.infrastructure.db.repositories.feature_usage_repository import SqlFeatureUsageRepository
from adtrack.infrastructure.db.repositories.subscription_repository import SqlSubscriptionRepository
from adtrack.infrastructure.security.token_service import JwtTokenService
from adtrack.shared.config import get_settings


def _get_db_engine():
    settings = get_settings()
    if not settings.postgres_dsn:
        raise HTTPException(status_code=500, detail="POSTGRES_DSN is required.")
    return get_engine(settings.postgres_dsn)


def _get_subscription_repository() -> SqlSubscriptionRepository:
    return SqlSubscriptionRepository(_get_db_engine())


def _get_feature_usage_repository() -> SqlFeatureUsageRepository:
    return SqlFeatureUsageRepository(_get_db_engine())


@lru_cache(maxsize=1)
def _get_token_service() -> JwtTokenService:
    settings = get_settings()
    if not settings.jwt_secret:
        raise HTTPException(status_code=500, detail="JWT_SECRET is required.")
    return JwtTokenService(
        jwt_secret=settings.jwt_secret,
        access_ttl_minutes=settings.jwt_access_ttl_minutes,
        issuer=settings.jwt_issuer,
    )


def get_check_feature_access_use_case() -> CheckFeatureAccessUseCase:
    subscriptions = _get_subscription_repository()
    return CheckFeatureAccessUseCase(
        catalog_port=subscriptions,
        subscription_port=subscriptions,
        usage_port=_get_feature_usage_repository(),
    )


def get_track_feature_usage_use_case() -> TrackFeatureUsageUseCase:
    subscriptions = _get_subscription_repository()
    usage = _get_feature_usage_repository()
    return TrackFeatureUsageUseCase(
        catalog_port=subscriptions,
        subscription_port=subscriptions,
        usage_port=usage,
        interaction_port=usage,
    )


def get_usage_summary_use_case() -> GetUsageSummaryUseCase:
    subscriptions = _get_subscription_repository()
    return GetUsageSummaryUseCase(
        catalog_port=subscriptions,
        subscription_port=subscriptions,
        usage_port=_get_feature_usage_repository(),
    )


def get_list_features_use_case() -> ListFeaturesUseCase:
    return ListFeaturesUseCase(catalog_port=_get_subscription_repository())


def get_record_feature_interaction_use_case() -> RecordFeatureInteractionUseCase:
    return RecordFeatureInteractionUseCase(
        catalog_port=_get_subscription_repository(),
        interaction_port=_get_feature_usage_repository(),
    )


def get_feature_usage_analytics_use_case() -> GetFeatureUsageAnalyticsUseCase:
    usage = _get_feature_usage_repository()
    return GetFeatureUsageAnalyticsUseCase(
        catalog_port=_get_subscription_repository(),
        usage_port=usage,
        interaction_port=usage,
    )


def get_feature_interaction_port() -> SqlFeatureUsageRepository:
    return _get_feature_usage_repository()


def get_advance_billing_period_use_case() -> AdvanceBillingPeriodUseCase:
    return AdvanceBillingPeriodUseCase(subscription_port=_get_subscription_repository())


def get_get_me_use_case() -> GetMeUseCase:
    return GetMeUseCase(subscription_port=_get_subscription_repository())


def get_current_user(
    authorization: str | None = Header(None),
) -> User:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header.")
    token = authorization.replace("Bearer ", "", 1).strip()
    if not token:
        raise HTTPException(status_code=401, detail="Missing access token.")

    token_service = _get_token_service()
    auth_port = _get_subscription_repository()

    try:
        payload = token_service.decode_access_token(token=token)
    except ValueError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    user = auth_port.get_user_by_id(user_id=payload.user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found.")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User is inactive.")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    # Role comes from the users row loaded above, never from the request.
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required.")
    return user


def require_feature(feature_key: str):
    def _dependency(
        user: User = Depends(get_current_user),
        use_case: CheckFeatureAccessUseCase = Depends(get_check_feature_access_use_case),
        interaction_port: FeatureInteractionPort = Depends(get_feature_interaction_port),
    ) -> AccessResultOutput:
        try:
            result = use_case.execute(CheckFeatureAccessInput(user_id=user.id, feature_key=feature_key))
        except FeatureNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

        if not result.has_access:
            record_interaction_safely(
                interaction_port=interaction_port,
                user_id=user.id,
                feature_key=feature_key,
                interaction_type="limit_reached",
            )
            raise HTTPException(
                status_code=403,
                detail={
                    "message": f"Feature '{feature_key}' is not available on your plan.",
                    "upgradeUrl": f"/pricing?feature={feature_key}",
                    "access": build_access_result_response(result).model_dump(
                        by_alias=True,
                        exclude_none=True,
                        mode="json",
                    ),
                },
            )
        return result

    return _dependency
