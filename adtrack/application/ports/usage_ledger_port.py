from __future__ import annotations

from datetime import datetime
from typing import Protocol

from adtrack.domain.entities.feature import FeatureInteraction
from adtrack.domain.entities.usage import UsageTotals


class UsageLedgerPort(Protocol):
    def increment_usage(
        self,
        *,
        user_id: str,
        feature_key: str,
        subscription_id: str,
        period_start: datetime,
    ) -> int:
        """Insert-or-increment the counter in one atomic statement and return the new count."""
        ...

    def get_usage_count(self, *, user_id: str, feature_key: str, period_start: datetime) -> int:
        ...

    def list_usage_counts(self, *, user_id: str, period_start: datetime) -> dict[str, int]:
        ...

    def list_usage_totals(self) -> list[UsageTotals]:
        ...


class FeatureInteractionPort(Protocol):
    def record_interaction(self, *, interaction: FeatureInteraction) -> None:
        ...

    def count_interactions_by_feature(self) -> dict[str, dict[str, int]]:
        ...
