from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from adtrack.domain.entities.feature import Feature, FeatureAccessRule, FeatureInteraction, build_access_level
from adtrack.domain.entities.plan import Plan
from adtrack.domain.entities.subscription import Subscription
from adtrack.domain.entities.usage import UsageTotals
from adtrack.domain.entities.user import User


PERIOD_START = datetime(2026, 10, 1, tzinfo=timezone.utc)
PERIOD_END = datetime(2026, 11, 1, tzinfo=timezone.utc)


class FakeStore:
    """In-memory stand-in for every storage port; increments are atomic under a lock."""

    def __init__(self):
        self.users: dict[str, User] = {}
        self.plans: dict[str, Plan] = {}
        self.subscriptions: dict[str, Subscription] = {}
        self.features: dict[str, Feature] = {}
        self.rules: dict[tuple[str, str], FeatureAccessRule] = {}
        self.usage: dict[tuple[str, str, datetime], int] = {}
        self.interactions: list[FeatureInteraction] = []
        self.increment_calls = 0
        self._lock = threading.Lock()

    def add_user(self, user_id: str, *, role: str = "user", is_active: bool = True) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            id=user_id,
            name=user_id.title(),
            email=f"{user_id}@example.com",
            is_active=is_active,
            role=role,
            created_at=now,
            updated_at=now,
        )
        self.users[user_id] = user
        return user

    def add_plan(self, plan_id: str, code: str, name: str) -> Plan:
        plan = Plan(id=plan_id, code=code, name=name, description=None, is_active=True, sort_order=0)
        self.plans[plan_id] = plan
        return plan

    def add_feature(self, key: str, *, category: str = "analytics") -> Feature:
        feature = Feature(
            key=key,
            name=key.replace("_", " ").title(),
            description=f"{key} description",
            category=category,
        )
        self.features[key] = feature
        return feature

    def add_rule(self, plan_id: str, feature_key: str, level: str, usage_limit: int | None = None) -> None:
        self.rules[(plan_id, feature_key)] = FeatureAccessRule(
            plan_id=plan_id,
            feature_key=feature_key,
            access=build_access_level(level, usage_limit),
        )

    def subscribe(
        self,
        subscription_id: str,
        *,
        user_id: str,
        plan_id: str,
        current_period_start: datetime | None = PERIOD_START,
        current_period_end: datetime | None = PERIOD_END,
        created_at: datetime = datetime(2026, 9, 15, tzinfo=timezone.utc),
        is_active: bool = True,
    ) -> Subscription:
        subscription = Subscription(
            id=subscription_id,
            user_id=user_id,
            plan_id=plan_id,
            is_active=is_active,
            current_period_start=current_period_start,
            current_period_end=current_period_end,
            created_at=created_at,
        )
        self.subscriptions[subscription_id] = subscription
        return subscription

    # AuthPort
    def get_user_by_id(self, *, user_id: str) -> User | None:
        return self.users.get(user_id)

    # SubscriptionPort
    def get_active_subscription_for_user(self, *, user_id: str) -> Subscription | None:
        for subscription in self.subscriptions.values():
            if subscription.user_id == user_id and subscription.is_active:
                return subscription
        return None

    def get_subscription_by_id(self, *, subscription_id: str) -> Subscription | None:
        return self.subscriptions.get(subscription_id)

    def get_plan_by_id(self, *, plan_id: str) -> Plan | None:
        return self.plans.get(plan_id)

    def update_subscription_period(
        self,
        *,
        subscription_id: str,
        current_period_start: datetime,
        current_period_end: datetime | None,
        now: datetime,
    ) -> Subscription:
        subscription = replace(
            self.subscriptions[subscription_id],
            current_period_start=current_period_start,
            current_period_end=current_period_end,
        )
        self.subscriptions[subscription_id] = subscription
        return subscription

    # FeatureCatalogPort
    def get_feature_by_key(self, *, feature_key: str) -> Feature | None:
        return self.features.get(feature_key)

    def list_features(self) -> list[Feature]:
        return list(self.features.values())

    def get_access_rule(self, *, plan_id: str, feature_key: str) -> FeatureAccessRule | None:
        return self.rules.get((plan_id, feature_key))

    def list_access_rules(self, *, plan_id: str) -> list[FeatureAccessRule]:
        return [rule for (rule_plan_id, _), rule in self.rules.items() if rule_plan_id == plan_id]

    # UsageLedgerPort
    def increment_usage(
        self,
        *,
        user_id: str,
        feature_key: str,
        subscription_id: str,
        period_start: datetime,
    ) -> int:
        with self._lock:
            self.increment_calls += 1
            key = (user_id, feature_key, period_start)
            self.usage[key] = self.usage.get(key, 0) + 1
            return self.usage[key]

    def get_usage_count(self, *, user_id: str, feature_key: str, period_start: datetime) -> int:
        return self.usage.get((user_id, feature_key, period_start), 0)

    def list_usage_counts(self, *, user_id: str, period_start: datetime) -> dict[str, int]:
        return {
            feature_key: count
            for (usage_user_id, feature_key, usage_period), count in self.usage.items()
            if usage_user_id == user_id and usage_period == period_start
        }

    def list_usage_totals(self) -> list[UsageTotals]:
        totals: dict[str, int] = defaultdict(int)
        users: dict[str, set[str]] = defaultdict(set)
        for (user_id, feature_key, _), count in self.usage.items():
            totals[feature_key] += count
            users[feature_key].add(user_id)
        return [
            UsageTotals(feature_key=key, total_usage=totals[key], distinct_users=len(users[key]))
            for key in sorted(totals)
        ]

    # FeatureInteractionPort
    def record_interaction(self, *, interaction: FeatureInteraction) -> None:
        with self._lock:
            self.interactions.append(interaction)

    def count_interactions_by_feature(self) -> dict[str, dict[str, int]]:
        counts: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        for interaction in self.interactions:
            counts[interaction.feature_key][interaction.interaction_type] += 1
        return {key: dict(value) for key, value in counts.items()}


@pytest.fixture
def store() -> FakeStore:
    fake = FakeStore()
    fake.add_user("user-1")
    fake.add_user("admin-1", role="admin")
    fake.add_user("user-no-sub")
    fake.add_plan("plan-basic", "basic", "Basic")
    fake.add_plan("plan-premium", "premium", "Premium")

    fake.add_feature("competitor_insights", category="analytics")
    fake.add_feature("ai_marketing_advisor", category="ai")
    fake.add_feature("advanced_reports", category="reporting")
    fake.add_feature("performance_exports", category="reporting")

    fake.add_rule("plan-basic", "competitor_insights", "limited", 5)
    fake.add_rule("plan-basic", "ai_marketing_advisor", "full")
    fake.add_rule("plan-basic", "advanced_reports", "none")
    fake.add_rule("plan-premium", "competitor_insights", "full")

    fake.subscribe("sub-1", user_id="user-1", plan_id="plan-basic")
    return fake
