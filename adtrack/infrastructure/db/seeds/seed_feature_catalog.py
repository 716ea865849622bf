from __future__ import annotations

import json
import logging
from uuid import uuid4

from sqlalchemy import text

from adtrack.domain.entities.feature import FullAccess, LimitedAccess, NoAccess, build_access_level


logger = logging.getLogger(__name__)


DEFAULT_PLANS = (
    {"code": "basic", "name": "Basic", "description": "Entry plan for single-location businesses", "sort_order": 0},
    {"code": "professional", "name": "Professional", "description": "Growing businesses", "sort_order": 10},
    {"code": "premium", "name": "Premium", "description": "Multi-location businesses", "sort_order": 20},
)

# Per-plan limits: an int is a monthly cap, -1 is unlimited, a missing plan means no access.
DEFAULT_FEATURES = (
    {
        "key": "competitor_insights",
        "name": "Competitor Insights",
        "description": "Access to anonymized data about competitors in your area",
        "category": "analytics",
        "limits": {"basic": 5, "professional": 30, "premium": 100},
    },
    {
        "key": "ai_marketing_advisor",
        "name": "AI Marketing Advisor",
        "description": "Get personalized marketing advice from our AI",
        "category": "ai",
        "limits": {"basic": 3, "professional": 20, "premium": -1},
    },
    {
        "key": "advanced_reports",
        "name": "Advanced Reports",
        "description": "Generate detailed performance reports with custom metrics",
        "category": "reporting",
        "limits": {"basic": 2, "professional": 15, "premium": 50},
    },
    {
        "key": "performance_exports",
        "name": "Performance Exports",
        "description": "Export campaign performance data in various formats",
        "category": "reporting",
        "limits": {"basic": 3, "professional": 10, "premium": 30},
    },
    {
        "key": "marketing_insights",
        "name": "Marketing Insights",
        "description": "AI-generated marketing insights and storytelling",
        "category": "ai",
        "limits": {"basic": 1, "professional": 10, "premium": 30},
    },
)


def access_row_for_limit(limit: int | None) -> tuple[str, int | None]:
    if limit is None:
        access = NoAccess()
    elif limit < 0:
        access = FullAccess()
    else:
        access = build_access_level("limited", limit)

    if isinstance(access, LimitedAccess):
        return access.name, access.limit
    return access.name, None


def load_feature_catalog(raw_json: str | None) -> tuple[dict, ...]:
    if not raw_json:
        return DEFAULT_FEATURES
    features = json.loads(raw_json)
    if not isinstance(features, list):
        raise ValueError("FEATURE_CATALOG_JSON must be a JSON list.")
    for feature in features:
        missing = {"key", "name", "description", "category", "limits"} - set(feature)
        if missing:
            raise ValueError(f"Feature catalog entry is missing {sorted(missing)}.")
    return tuple(features)


def seed_feature_catalog(
    engine,
    *,
    features: tuple[dict, ...] = DEFAULT_FEATURES,
    plans: tuple[dict, ...] = DEFAULT_PLANS,
) -> None:
    with engine.begin() as conn:
        for plan in plans:
            conn.execute(
                text(
                    """
                    INSERT INTO public.subscription_plans (id, code, name, description, is_active, sort_order)
                    VALUES (:id, :code, :name, :description, true, :sort_order)
                    ON CONFLICT (code) DO UPDATE
                    SET name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        is_active = EXCLUDED.is_active,
                        sort_order = EXCLUDED.sort_order
                    """
                ),
                {
                    "id": str(uuid4()),
                    "code": plan["code"],
                    "name": plan["name"],
                    "description": plan["description"],
                    "sort_order": plan["sort_order"],
                },
            )

        plan_ids = {
            row["code"]: str(row["id"])
            for row in conn.execute(text("SELECT id, code FROM public.subscription_plans")).mappings().all()
        }

        for feature in features:
            conn.execute(
                text(
                    """
                    INSERT INTO public.features (key, name, description, category, limits, created_at)
                    VALUES (:key, :name, :description, :category, CAST(:limits AS jsonb), now())
                    ON CONFLICT (key) DO UPDATE
                    SET name = EXCLUDED.name,
                        description = EXCLUDED.description,
                        category = EXCLUDED.category,
                        limits = EXCLUDED.limits
                    """
                ),
                {
                    "key": feature["key"],
                    "name": feature["name"],
                    "description": feature["description"],
                    "category": feature["category"],
                    "limits": json.dumps(feature["limits"]),
                },
            )

            for plan in plans:
                level, usage_limit = access_row_for_limit(feature["limits"].get(plan["code"]))
                conn.execute(
                    text(
                        """
                        INSERT INTO public.feature_access (plan_id, feature_key, level, usage_limit)
                        VALUES (:plan_id, :feature_key, :level, :usage_limit)
                        ON CONFLICT (plan_id, feature_key) DO UPDATE
                        SET level = EXCLUDED.level,
                            usage_limit = EXCLUDED.usage_limit
                        """
                    ),
                    {
                        "plan_id": plan_ids[plan["code"]],
                        "feature_key": feature["key"],
                        "level": level,
                        "usage_limit": usage_limit,
                    },
                )

    logger.info("feature_catalog_seeded plans=%s features=%s", len(plans), len(features))


if __name__ == "__main__":
    from adtrack.infrastructure.db.engine import create_schema, get_engine
    from adtrack.shared.config import get_settings

    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    if not settings.postgres_dsn:
        raise SystemExit("POSTGRES_DSN is required.")
    db_engine = get_engine(settings.postgres_dsn)
    create_schema(db_engine)
    seed_feature_catalog(db_engine, features=load_feature_catalog(settings.feature_catalog_json))
