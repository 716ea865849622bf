from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Union, get_args

from adtrack.domain.exceptions import InvalidAccessRuleError


AccessLevelName = Literal["none", "limited", "full"]

# Events the UI may post; "use" and "limit_reached" are only written by usage tracking.
ClientInteractionType = Literal["view", "upgrade_shown", "upgrade_clicked"]

InteractionType = Literal[ClientInteractionType, "use", "limit_reached"]

CLIENT_INTERACTION_TYPES: frozenset[str] = frozenset(get_args(ClientInteractionType))


@dataclass(frozen=True)
class Feature:
    key: str
    name: str
    description: str
    category: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class NoAccess:
    name: AccessLevelName = "none"


@dataclass(frozen=True)
class LimitedAccess:
    limit: int
    name: AccessLevelName = "limited"

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise InvalidAccessRuleError("Limited access requires a non-negative usage limit.")


@dataclass(frozen=True)
class FullAccess:
    name: AccessLevelName = "full"


AccessLevel = Union[NoAccess, LimitedAccess, FullAccess]


def build_access_level(level: str, usage_limit: int | None) -> AccessLevel:
    """Build the access level from its stored ``(level, usage_limit)`` pair.

    A ``limited`` level without a limit is rejected here instead of being
    treated as unlimited at request time.
    """
    if level == "none":
        return NoAccess()
    if level == "full":
        return FullAccess()
    if level == "limited":
        if usage_limit is None:
            raise InvalidAccessRuleError("Limited access requires a usage limit.")
        return LimitedAccess(limit=int(usage_limit))
    raise InvalidAccessRuleError(f"Unknown access level '{level}'.")


@dataclass(frozen=True)
class FeatureAccessRule:
    plan_id: str
    feature_key: str
    access: AccessLevel


@dataclass(frozen=True)
class FeatureInteraction:
    user_id: str
    feature_key: str
    interaction_type: InteractionType
    occurred_at: datetime
