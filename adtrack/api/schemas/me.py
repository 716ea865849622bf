from __future__ import annotations

from pydantic import BaseModel

from adtrack.api.schemas.subscription import CamelModel


class MeUserResponse(BaseModel):
    id: str
    name: str
    email: str


class MeResponse(CamelModel):
    user: MeUserResponse
    role: str
    is_admin: bool
    plan_name: str | None
