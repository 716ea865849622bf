from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime

from sqlalchemy import text

from adtrack.application.ports.usage_ledger_port import FeatureInteractionPort, UsageLedgerPort
from adtrack.domain.entities.feature import FeatureInteraction
from adtrack.infrastructure.db.mappers.subscription_mapper import map_row_to_usage_totals


logger = logging.getLogger(__name__)


class SqlFeatureUsageRepository(UsageLedgerPort, FeatureInteractionPort):
    def __init__(self, engine):
        self._engine = engine

    def increment_usage(
        self,
        *,
        user_id: str,
        feature_key: str,
        subscription_id: str,
        period_start: datetime,
    ) -> int:
        # Single statement: concurrent callers serialize on the unique key, no lost updates.
        sql = """
            INSERT INTO public.feature_usage (
                user_id, feature_key, subscription_id, usage_count, period_start, last_used_at
            ) VALUES (
                :user_id, :feature_key, :subscription_id, 1, :period_start, now()
            )
            ON CONFLICT (user_id, feature_key, period_start)
            DO UPDATE SET usage_count = feature_usage.usage_count + 1,
                          last_used_at = now()
            RETURNING usage_count
        """
        with self._engine.begin() as conn:
            usage_count = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "feature_key": feature_key,
                    "subscription_id": subscription_id,
                    "period_start": period_start,
                },
            ).scalar_one()
        logger.debug(
            "feature_usage_incremented user_id=%s feature=%s period_start=%s usage_count=%s",
            user_id,
            feature_key,
            period_start,
            usage_count,
        )
        return int(usage_count)

    def get_usage_count(self, *, user_id: str, feature_key: str, period_start: datetime) -> int:
        sql = """
            SELECT usage_count
            FROM public.feature_usage
            WHERE user_id = :user_id
              AND feature_key = :feature_key
              AND period_start = :period_start
            LIMIT 1
        """
        with self._engine.connect() as conn:
            usage_count = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "feature_key": feature_key,
                    "period_start": period_start,
                },
            ).scalar_one_or_none()
        return int(usage_count) if usage_count is not None else 0

    def list_usage_counts(self, *, user_id: str, period_start: datetime) -> dict[str, int]:
        sql = """
            SELECT feature_key, usage_count
            FROM public.feature_usage
            WHERE user_id = :user_id
              AND period_start = :period_start
        """
        with self._engine.connect() as conn:
            rows = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "period_start": period_start,
                },
            ).mappings().all()
        return {row["feature_key"]: int(row["usage_count"]) for row in rows}

    def list_usage_totals(self):
        sql = """
            SELECT
                feature_key,
                SUM(usage_count) AS total_usage,
                COUNT(DISTINCT user_id) AS distinct_users
            FROM public.feature_usage
            GROUP BY feature_key
            ORDER BY feature_key
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()
        return [map_row_to_usage_totals(row) for row in rows]

    def record_interaction(self, *, interaction: FeatureInteraction) -> None:
        sql = """
            INSERT INTO public.feature_interactions (
                user_id, feature_key, interaction_type, occurred_at
            ) VALUES (
                :user_id, :feature_key, :interaction_type, :occurred_at
            )
        """
        with self._engine.begin() as conn:
            conn.execute(
                text(sql),
                {
                    "user_id": interaction.user_id,
                    "feature_key": interaction.feature_key,
                    "interaction_type": interaction.interaction_type,
                    "occurred_at": interaction.occurred_at,
                },
            )

    def count_interactions_by_feature(self) -> dict[str, dict[str, int]]:
        sql = """
            SELECT feature_key, interaction_type, COUNT(*) AS total
            FROM public.feature_interactions
            GROUP BY feature_key, interaction_type
        """
        with self._engine.connect() as conn:
            rows = conn.execute(text(sql)).mappings().all()

        counts: dict[str, dict[str, int]] = defaultdict(dict)
        for row in rows:
            counts[row["feature_key"]][row["interaction_type"]] = int(row["total"])
        return dict(counts)
