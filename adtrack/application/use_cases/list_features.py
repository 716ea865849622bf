from __future__ import annotations

from adtrack.application.dto.feature_access import FeatureOutput
from adtrack.application.ports.feature_catalog_port import FeatureCatalogPort


class ListFeaturesUseCase:
    def __init__(self, *, catalog_port: FeatureCatalogPort):
        self._catalog_port = catalog_port

    def execute(self) -> list[FeatureOutput]:
        features = sorted(self._catalog_port.list_features(), key=lambda f: (f.category, f.key))
        return [
            FeatureOutput(
                feature_id=feature.key,
                name=feature.name,
                description=feature.description,
                category=feature.category,
            )
            for feature in features
        ]
