"""Tests for settings validation."""

import unittest

from pydantic import ValidationError

from ratatoing.core.config import Settings


class TestSettings(unittest.TestCase):
    def test_sqlite_allowed_outside_prod(self) -> None:
        settings = Settings(APP_ENV="test", DATABASE_URL="sqlite://")
        self.assertEqual(settings.DATABASE_URL, "sqlite://")

    def test_prod_requires_postgres(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(APP_ENV="prod", DATABASE_URL="sqlite://", JWT_SECRET="a-real-secret")

    def test_prod_requires_changed_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(
                APP_ENV="prod",
                DATABASE_URL="postgresql://u:p@db:5432/ratatoing",
                JWT_SECRET="change-me-in-production",
            )

    def test_rejects_other_database_schemes(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://u:p@db/ratatoing")

    def test_recent_decision_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="sqlite://", RECENT_DECISIONS_LIMIT=0)
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="sqlite://", RECENT_DECISIONS_WINDOW_DAYS=-1)
        settings = Settings(DATABASE_URL="sqlite://", RECENT_DECISIONS_WINDOW_DAYS=0)
        self.assertEqual(settings.RECENT_DECISIONS_WINDOW_DAYS, 0)

    def test_blocked_names_normalized(self) -> None:
        settings = Settings(DATABASE_URL="sqlite://", REGISTRATION_BLOCKED_NAMES=[" Skinner ", "", "EGO"])
        self.assertEqual(settings.REGISTRATION_BLOCKED_NAMES, ["skinner", "ego"])
