from __future__ import annotations

from typing import Protocol

from adtrack.domain.entities.feature import Feature, FeatureAccessRule


class FeatureCatalogPort(Protocol):
    def get_feature_by_key(self, *, feature_key: str) -> Feature | None:
        ...

    def list_features(self) -> list[Feature]:
        ...

    def get_access_rule(self, *, plan_id: str, feature_key: str) -> FeatureAccessRule | None:
        ...

    def list_access_rules(self, *, plan_id: str) -> list[FeatureAccessRule]:
        ...
