from __future__ import annotations

from typing import Any, Mapping

from adtrack.domain.entities.feature import Feature, FeatureAccessRule, build_access_level
from adtrack.domain.entities.plan import Plan
from adtrack.domain.entities.subscription import Subscription
from adtrack.domain.entities.usage import UsageTotals
from adtrack.domain.entities.user import User


def _as_str(value: Any) -> str:
    return str(value)


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        name=row["name"],
        email=row["email"],
        is_active=bool(row["is_active"]),
        role="admin" if row.get("role") == "admin" else "user",
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_plan(row: Mapping[str, Any]) -> Plan:
    return Plan(
        id=_as_str(row["id"]),
        code=row["code"],
        name=row["name"],
        description=row.get("description"),
        is_active=bool(row["is_active"]),
        sort_order=int(row["sort_order"]),
    )


def map_row_to_subscription(row: Mapping[str, Any]) -> Subscription:
    return Subscription(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        plan_id=_as_str(row["plan_id"]),
        is_active=bool(row["is_active"]),
        current_period_start=row.get("current_period_start"),
        current_period_end=row.get("current_period_end"),
        created_at=row["created_at"],
    )


def map_row_to_feature(row: Mapping[str, Any]) -> Feature:
    return Feature(
        key=row["key"],
        name=row["name"],
        description=row.get("description") or "",
        category=row["category"],
        created_at=row.get("created_at"),
    )


def map_row_to_feature_access_rule(row: Mapping[str, Any]) -> FeatureAccessRule:
    usage_limit = int(row["usage_limit"]) if row.get("usage_limit") is not None else None
    return FeatureAccessRule(
        plan_id=_as_str(row["plan_id"]),
        feature_key=row["feature_key"],
        access=build_access_level(row["level"], usage_limit),
    )


def map_row_to_usage_totals(row: Mapping[str, Any]) -> UsageTotals:
    return UsageTotals(
        feature_key=row["feature_key"],
        total_usage=int(row["total_usage"] or 0),
        distinct_users=int(row["distinct_users"] or 0),
    )
