"""
Shared fixtures: test settings, in-memory fakes and a TestClient whose
dependencies are overridden to use them.
"""

import os

# backend.main builds a default app at import time from the environment
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-unit-tests-only-0123456789")

from typing import Dict  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from api import deps  # noqa: E402
from backend.auth import hash_password  # noqa: E402
from backend.main import create_app  # noqa: E402
from backend.settings import Settings  # noqa: E402
from tests.helpers import (  # noqa: E402
    OTHER_USER_ID,
    TEST_PASSWORD,
    TEST_USER_ID,
    auth_headers,
    make_settings,
)
from tests.fakes import (  # noqa: E402
    FakeExerciseTemplateRepository,
    FakePlanWebhook,
    FakeUserRepository,
    FakeWorkoutLogRepository,
    FakeWorkoutPlanRepository,
)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def user_repo() -> FakeUserRepository:
    repo = FakeUserRepository()
    password_hash = hash_password(TEST_PASSWORD)
    repo.seed([
        {"id": TEST_USER_ID, "email": "alex@example.com", "username": "alex",
         "password_hash": password_hash},
        {"id": OTHER_USER_ID, "email": "blake@example.com", "username": "blake",
         "password_hash": password_hash},
    ])
    return repo


@pytest.fixture
def template_repo() -> FakeExerciseTemplateRepository:
    return FakeExerciseTemplateRepository()


@pytest.fixture
def log_repo() -> FakeWorkoutLogRepository:
    return FakeWorkoutLogRepository()


@pytest.fixture
def plan_repo() -> FakeWorkoutPlanRepository:
    return FakeWorkoutPlanRepository()


@pytest.fixture
def webhook() -> FakePlanWebhook:
    return FakePlanWebhook()


@pytest.fixture
def app(settings, user_repo, template_repo, log_repo, plan_repo, webhook):
    """App with every storage and webhook dependency replaced by a fake."""
    app = create_app(settings=settings)
    app.dependency_overrides[deps.get_settings] = lambda: settings
    app.dependency_overrides[deps.get_user_repo] = lambda: user_repo
    app.dependency_overrides[deps.get_template_repo] = lambda: template_repo
    app.dependency_overrides[deps.get_log_repo] = lambda: log_repo
    app.dependency_overrides[deps.get_plan_repo] = lambda: plan_repo
    app.dependency_overrides[deps.get_webhook_client] = lambda: webhook
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def headers(settings) -> Dict[str, str]:
    return auth_headers(settings, TEST_USER_ID)


@pytest.fixture
def other_headers(settings) -> Dict[str, str]:
    return auth_headers(settings, OTHER_USER_ID)
