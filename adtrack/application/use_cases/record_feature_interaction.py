from __future__ import annotations

from adtrack.application.dto.feature_access import RecordFeatureInteractionInput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort
from adtrack.application.ports.usage_ledger_port import FeatureInteractionPort
from adtrack.domain.entities.feature import CLIENT_INTERACTION_TYPES, FeatureInteraction

from .feature_access_common import require_feature_exists, utcnow


class RecordFeatureInteractionUseCase:
    def __init__(
        self,
        *,
        catalog_port: FeatureCatalogPort,
        interaction_port: FeatureInteractionPort,
    ):
        self._catalog_port = catalog_port
        self._interaction_port = interaction_port

    def execute(self, command: RecordFeatureInteractionInput) -> None:
        if command.interaction_type not in CLIENT_INTERACTION_TYPES:
            raise ValueError(f"Unknown interaction type '{command.interaction_type}'.")

        require_feature_exists(catalog_port=self._catalog_port, feature_key=command.feature_key)

        self._interaction_port.record_interaction(
            interaction=FeatureInteraction(
                user_id=command.user_id,
                feature_key=command.feature_key,
                interaction_type=command.interaction_type,
                occurred_at=utcnow(),
            )
        )
