from __future__ import annotations

from fastapi import APIRouter, Depends

from adtrack.api.deps import get_current_user, get_get_me_use_case
from adtrack.api.schemas.me import MeResponse
from adtrack.application.use_cases.get_me import GetMeUseCase
from adtrack.domain.entities.user import User


router = APIRouter()


@router.get("/api/me", response_model=MeResponse)
def get_me(
    current_user: User = Depends(get_current_user),
    use_case: GetMeUseCase = Depends(get_get_me_use_case),
):
    output = use_case.execute(user=current_user)
    return MeResponse(
        user={
            "id": output.user_id,
            "name": output.name,
            "email": output.email,
        },
        role=output.role,
        is_admin=output.is_admin,
        plan_name=output.plan_name,
    )
