from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from adtrack.api.deps import (
    get_check_feature_access_use_case,
    get_current_user,
    get_list_features_use_case,
    get_record_feature_interaction_use_case,
    get_track_feature_usage_use_case,
    get_usage_summary_use_case,
)
from adtrack.api.schemas.subscription import (
    AccessResultResponse,
    FeatureInteractionRequest,
    FeatureListResponse,
    SuccessResponse,
    TrackUsageRequest,
    TrackUsageResponse,
    UsageSummaryResponse,
    build_access_result_response,
)
from adtrack.application.dto.feature_access import (
    CheckFeatureAccessInput,
    RecordFeatureInteractionInput,
    TrackFeatureUsageInput,
)
from adtrack.application.use_cases.check_feature_access import CheckFeatureAccessUseCase
from adtrack.application.use_cases.get_usage_summary import GetUsageSummaryUseCase
from adtrack.application.use_cases.list_features import ListFeaturesUseCase
from adtrack.application.use_cases.record_feature_interaction import RecordFeatureInteractionUseCase
from adtrack.application.use_cases.track_feature_usage import TrackFeatureUsageUseCase
from adtrack.domain.entities.user import User
from adtrack.domain.exceptions import (
    FeatureNotFoundError,
    ForbiddenError,
    UsageLimitExceededError,
)


router = APIRouter(prefix="/api/subscription")


@router.post(
    "/track-usage",
    response_model=TrackUsageResponse,
    response_model_exclude_none=True,
)
def track_usage(
    req: TrackUsageRequest,
    current_user: User = Depends(get_current_user),
    use_case: TrackFeatureUsageUseCase = Depends(get_track_feature_usage_use_case),
):
    try:
        output = use_case.execute(
            TrackFeatureUsageInput(
                user_id=current_user.id,
                feature_key=req.feature_id,
            )
        )
    except FeatureNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UsageLimitExceededError as exc:
        raise HTTPException(
            status_code=403,
            detail={"message": str(exc), "limit": exc.limit, "used": exc.used},
        ) from exc
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc

    return TrackUsageResponse(
        success=output.success,
        level=output.level,
        limit=output.limit,
        used=output.used,
        remaining=output.remaining,
    )


@router.get("/usage", response_model=UsageSummaryResponse)
def get_usage(
    current_user: User = Depends(get_current_user),
    use_case: GetUsageSummaryUseCase = Depends(get_usage_summary_use_case),
):
    try:
        output = use_case.execute(user_id=current_user.id)
    except ForbiddenError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc

    return UsageSummaryResponse(
        features={
            key: {
                "feature_id": info.feature_id,
                "name": info.name,
                "description": info.description,
                "category": info.category,
                "used": info.used,
                "limit": info.limit,
                "level": info.level,
            }
            for key, info in output.features.items()
        }
    )


@router.get(
    "/check-access/{feature_id}",
    response_model=AccessResultResponse,
    response_model_exclude_none=True,
)
def check_access(
    feature_id: str,
    current_user: User = Depends(get_current_user),
    use_case: CheckFeatureAccessUseCase = Depends(get_check_feature_access_use_case),
):
    try:
        output = use_case.execute(
            CheckFeatureAccessInput(
                user_id=current_user.id,
                feature_key=feature_id,
            )
        )
    except FeatureNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return build_access_result_response(output)


@router.get("/features", response_model=FeatureListResponse)
def list_features(
    _current_user: User = Depends(get_current_user),
    use_case: ListFeaturesUseCase = Depends(get_list_features_use_case),
):
    rows = use_case.execute()
    return FeatureListResponse(
        features=[
            {
                "feature_id": row.feature_id,
                "name": row.name,
                "description": row.description,
                "category": row.category,
            }
            for row in rows
        ]
    )


@router.post("/interactions", response_model=SuccessResponse)
def record_interaction(
    req: FeatureInteractionRequest,
    current_user: User = Depends(get_current_user),
    use_case: RecordFeatureInteractionUseCase = Depends(get_record_feature_interaction_use_case),
):
    try:
        use_case.execute(
            RecordFeatureInteractionInput(
                user_id=current_user.id,
                feature_key=req.feature_id,
                interaction_type=req.interaction_type,
            )
        )
    except FeatureNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc

    return SuccessResponse(success=True)
