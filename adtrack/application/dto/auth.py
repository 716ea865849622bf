from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AccessTokenPayload:
    user_id: str
