"""
Constants and helpers shared by the test suite.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict

from backend.auth import create_access_token
from backend.settings import Settings

TEST_JWT_SECRET = "test-jwt-secret-for-unit-tests-only-0123456789"
TEST_WEBHOOK_URL = "https://hooks.example.test/webhook/workout-plan"

TEST_USER_ID = "user-a"
OTHER_USER_ID = "user-b"
TEST_PASSWORD = "correct horse battery staple"


def make_settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "jwt_secret": TEST_JWT_SECRET,
        "n8n_webhook_url": TEST_WEBHOOK_URL,
        **overrides,
    }
    return Settings(_env_file=None, **values)


def auth_headers(settings: Settings, user_id: str = TEST_USER_ID) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id, settings)}"}


def days_ago(days: float, now: datetime = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=days)
