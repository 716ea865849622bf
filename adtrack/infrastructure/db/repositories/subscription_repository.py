from __future__ import annotations

from datetime import datetime

from sqlalchemy import text

from adtrack.application.ports.auth_port import AuthPort
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.subscription_port import SubscriptionPort
from adtrack.domain.exceptions import SubscriptionNotFoundError
from adtrack.infrastructure.db.mappers.subscription_mapper import (
    map_row_to_feature,
    map_row_to_feature_access_rule,
    map_row_to_plan,
    map_row_to_subscription,
    map_row_to_user,
)


_SUBSCRIPTION_COLUMNS = """
    id, user_id, plan_id, is_active, current_period_start, current_period_end, created_at
"""


class SqlSubscriptionRepository(AuthPort, SubscriptionPort, FeatureCatalogPort):
    def __init__(self, engine):
        self._engine = engine

    def get_user_by_id(self, *, user_id: str):
        sql = """
            SELECT id, name, email, is_active, role, created_at, updated_at
            FROM public.users
            WHERE id = :user_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def get_active_subscription_for_user(self, *, user_id: str):
        sql = f"""
            SELECT {_SUBSCRIPTION_COLUMNS}
            FROM public.user_subscriptions
            WHERE user_id = :user_id
              AND is_active = true
            ORDER BY created_at DESC
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_subscription(row)

    def get_subscription_by_id(self, *, subscription_id: str):
        sql = f"""
            SELECT {_SUBSCRIPTION_COLUMNS}
            FROM public.user_subscriptions
            WHERE id = :subscription_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"subscription_id": subscription_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_subscription(row)

    def get_plan_by_id(self, *, plan_id: str):
        sql = """
            SELECT id, code, name, description, is_active, sort_order
            FROM public.subscription_plans
            WHERE id = :plan_id
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"plan_id": plan_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_plan(row)

    def update_subscription_period(
        self,
        *,
        subscription_id: str,
        current_period_start: datetime,
        current_period_end: datetime | None,
        now: datetime,
    ):
        sql = f"""
            UPDATE public.user_subscriptions
            SET current_period_start = :current_period_start,
                current_period_end = :current_period_end,
                updated_at = :updated_at
            WHERE id = :subscription_id
            RETURNING {_SUBSCRIPTION_COLUMNS}
        """
        with self._engine.begin() as conn:
            row = conn.execute(
                text(sql),
                {
                    "subscription_id": subscription_id,
                    "current_period_start": current_period_start,
                    "current_period_end": current_period_end,
                    "updated_at": now,
                },
            ).mappings().first()
        if row is None:
            raise SubscriptionNotFoundError("Subscription not found.")
        return map_row_to_subscription(row)

    def get_feature_by_key(self, *, feature_key: str):
        sql = """
            SELECT key, name, description, category, created_at
            FROM public.features
            WHERE key = :feature_key
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(text(sql), {"feature_key": feature_key}).mappings().first()
        if row is None:
            return None
        return map_row_to_feature(row)

    def list_features(self):
        sql = """
            SELECT key, name, description, category, created_at
            FROM public.features
            ORDER BY category, key
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_feature(row) for row in rows]

    def get_access_rule(self, *, plan_id: str, feature_key: str):
        sql = """
            SELECT plan_id, feature_key, level, usage_limit
            FROM public.feature_access
            WHERE plan_id = :plan_id
              AND feature_key = :feature_key
            LIMIT 1
        """
        with self._engine.connect() as conn:
            row = conn.execute(
                text(sql),
                {
                    "plan_id": plan_id,
                    "feature_key": feature_key,
                },
            ).mappings().first()
        if row is None:
            return None
        return map_row_to_feature_access_rule(row)

    def list_access_rules(self, *, plan_id: str):
        sql = """
            SELECT plan_id, feature_key, level, usage_limit
            FROM public.feature_access
            WHERE plan_id = :plan_id
            ORDER BY feature_key
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql), {"plan_id": plan_id}).mappings().all()
        return [map_row_to_feature_access_rule(row) for row in rows]
