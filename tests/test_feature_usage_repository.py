from __future__ import annotations

from pathlib import Path
import unittest


ROOT = Path(__file__).resolve().parents[1]


class FeatureUsageRepositoryTests(unittest.TestCase):
    def test_increment_is_a_single_atomic_upsert(self):
        source = (ROOT / "adtrack/infrastructure/db/repositories/feature_usage_repository.py").read_text(
            encoding="utf-8"
        )
        self.assertIn("ON CONFLICT (user_id, feature_key, period_start)", source)
        self.assertIn("DO UPDATE SET usage_count = feature_usage.usage_count + 1", source)
        self.assertIn("RETURNING usage_count", source)
        self.assertIn("with self._engine.begin() as conn:", source)

    def test_usage_table_is_unique_per_user_feature_period(self):
        source = (ROOT / "adtrack/infrastructure/db/models/subscriptions.py").read_text(encoding="utf-8")
        self.assertIn('UniqueConstraint("user_id", "feature_key", "period_start"', source)
        self.assertIn("level IN ('none', 'limited', 'full')", source)

    def test_active_subscription_query_filters_on_is_active(self):
        source = (ROOT / "adtrack/infrastructure/db/repositories/subscription_repository.py").read_text(
            encoding="utf-8"
        )
        self.assertIn("AND is_active = true", source)


if __name__ == "__main__":
    unittest.main()
