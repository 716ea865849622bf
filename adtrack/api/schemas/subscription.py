from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from adtrack.application.dto.feature_access import AccessResultOutput
from adtrack.domain.entities.feature import AccessLevelName, ClientInteractionType


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TrackUsageRequest(CamelModel):
    feature_id: str = Field(..., min_length=1)


class TrackUsageResponse(CamelModel):
    success: bool
    level: str | None = None
    limit: int | None = None
    used: int | None = None
    remaining: int | None = None


class AccessResultResponse(CamelModel):
    has_access: bool
    level: AccessLevelName
    reason: str | None = None
    plan_name: str | None = None
    limit: int | None = None
    used: int | None = None
    remaining: int | None = None
    resets_at: datetime | None = None


class FeatureUsageInfoResponse(CamelModel):
    feature_id: str
    name: str
    description: str
    category: str
    used: int
    limit: int | None
    level: AccessLevelName


class UsageSummaryResponse(CamelModel):
    features: dict[str, FeatureUsageInfoResponse]


class FeatureResponse(CamelModel):
    feature_id: str
    name: str
    description: str
    category: str


class FeatureListResponse(CamelModel):
    features: list[FeatureResponse]


class FeatureInteractionRequest(CamelModel):
    feature_id: str = Field(..., min_length=1)
    interaction_type: ClientInteractionType


class SuccessResponse(CamelModel):
    success: bool


def build_access_result_response(output: AccessResultOutput) -> AccessResultResponse:
    return AccessResultResponse(
        has_access=output.has_access,
        level=output.level,
        reason=output.reason,
        plan_name=output.plan_name,
        limit=output.limit,
        used=output.used,
        remaining=output.remaining,
        resets_at=output.resets_at,
    )
