from __future__ import annotations

import pytest

from adtrack.application.dto.feature_access import RecordFeatureInteractionInput
from adtrack.application.use_cases.record_feature_interaction import RecordFeatureInteractionUseCase
from adtrack.domain.exceptions import FeatureNotFoundError


def _use_case(store) -> RecordFeatureInteractionUseCase:
    return RecordFeatureInteractionUseCase(catalog_port=store, interaction_port=store)


@pytest.mark.parametrize("interaction_type", ["view", "upgrade_shown", "upgrade_clicked"])
def test_client_interaction_types_are_recorded(store, interaction_type):
    _use_case(store).execute(
        RecordFeatureInteractionInput(
            user_id="user-1",
            feature_key="advanced_reports",
            interaction_type=interaction_type,
        )
    )

    assert [(i.feature_key, i.interaction_type) for i in store.interactions] == [
        ("advanced_reports", interaction_type)
    ]


@pytest.mark.parametrize("interaction_type", ["use", "limit_reached", "clicked_twice"])
def test_server_side_and_unknown_types_are_rejected(store, interaction_type):
    with pytest.raises(ValueError):
        _use_case(store).execute(
            RecordFeatureInteractionInput(
                user_id="user-1",
                feature_key="competitor_insights",
                interaction_type=interaction_type,
            )
        )

    assert store.interactions == []


def test_unknown_feature_raises_not_found(store):
    with pytest.raises(FeatureNotFoundError):
        _use_case(store).execute(
            RecordFeatureInteractionInput(
                user_id="user-1",
                feature_key="nonexistent_feature",
                interaction_type="view",
            )
        )
