from __future__ import annotations

from datetime import datetime, timezone

import pytest

from adtrack.application.dto.admin import AdvanceBillingPeriodInput
from adtrack.application.dto.feature_access import CheckFeatureAccessInput, TrackFeatureUsageInput
from adtrack.application.use_cases.advance_billing_period import AdvanceBillingPeriodUseCase
from adtrack.application.use_cases.check_feature_access import CheckFeatureAccessUseCase
from adtrack.application.use_cases.get_usage_summary import GetUsageSummaryUseCase
from adtrack.application.use_cases.track_feature_usage import TrackFeatureUsageUseCase
from adtrack.domain.exceptions import NoActiveSubscriptionError, SubscriptionNotFoundError

from conftest import PERIOD_END, PERIOD_START


def _summary_use_case(store) -> GetUsageSummaryUseCase:
    return GetUsageSummaryUseCase(catalog_port=store, subscription_port=store, usage_port=store)


def test_summary_requires_active_subscription(store):
    with pytest.raises(NoActiveSubscriptionError):
        _summary_use_case(store).execute(user_id="user-no-sub")


def test_summary_covers_every_catalog_feature(store):
    store.usage[("user-1", "competitor_insights", PERIOD_START)] = 3

    output = _summary_use_case(store).execute(user_id="user-1")

    assert set(output.features) == set(store.features)
    insights = output.features["competitor_insights"]
    assert insights.feature_id == "competitor_insights"
    assert insights.used == 3
    assert insights.limit == 5
    assert insights.level == "limited"
    assert output.features["ai_marketing_advisor"].level == "full"
    assert output.features["ai_marketing_advisor"].limit is None
    assert output.features["advanced_reports"].level == "none"
    assert output.features["performance_exports"].level == "none"
    assert output.features["performance_exports"].used == 0
    assert output.features["performance_exports"].limit is None


def test_period_rollover_resets_exhausted_feature(store):
    track = TrackFeatureUsageUseCase(catalog_port=store, subscription_port=store, usage_port=store)
    check = CheckFeatureAccessUseCase(catalog_port=store, subscription_port=store, usage_port=store)
    store.usage[("user-1", "competitor_insights", PERIOD_START)] = 5
    assert check.execute(
        CheckFeatureAccessInput(user_id="user-1", feature_key="competitor_insights")
    ).has_access is False

    advanced = AdvanceBillingPeriodUseCase(subscription_port=store).execute(
        AdvanceBillingPeriodInput(subscription_id="sub-1", now=datetime(2026, 11, 1, tzinfo=timezone.utc))
    )

    assert advanced.current_period_start == PERIOD_END
    summary = _summary_use_case(store).execute(user_id="user-1")
    assert summary.features["competitor_insights"].used == 0
    assert check.execute(
        CheckFeatureAccessInput(user_id="user-1", feature_key="competitor_insights")
    ).has_access is True

    output = track.execute(TrackFeatureUsageInput(user_id="user-1", feature_key="competitor_insights"))
    assert output.used == 1
    # The previous period's row is left untouched.
    assert store.usage[("user-1", "competitor_insights", PERIOD_START)] == 5


def test_advance_period_keeps_period_length(store):
    output = AdvanceBillingPeriodUseCase(subscription_port=store).execute(
        AdvanceBillingPeriodInput(subscription_id="sub-1", now=datetime(2026, 10, 20, tzinfo=timezone.utc))
    )

    assert output.current_period_start == PERIOD_END
    assert output.current_period_end == PERIOD_END + (PERIOD_END - PERIOD_START)


def test_advance_period_without_known_end_starts_now(store):
    store.subscribe("sub-1", user_id="user-1", plan_id="plan-basic", current_period_start=None, current_period_end=None)
    now = datetime(2026, 10, 20, tzinfo=timezone.utc)

    output = AdvanceBillingPeriodUseCase(subscription_port=store).execute(
        AdvanceBillingPeriodInput(subscription_id="sub-1", now=now)
    )

    assert output.current_period_start == now
    assert output.current_period_end is None


@pytest.mark.parametrize("subscription_id", ["missing", "sub-inactive"])
def test_advance_period_rejects_unknown_or_inactive(store, subscription_id):
    store.subscribe("sub-inactive", user_id="user-no-sub", plan_id="plan-basic", is_active=False)

    with pytest.raises(SubscriptionNotFoundError):
        AdvanceBillingPeriodUseCase(subscription_port=store).execute(
            AdvanceBillingPeriodInput(subscription_id=subscription_id, now=datetime.now(timezone.utc))
        )
