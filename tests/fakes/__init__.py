"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the repository and
webhook interfaces for fast, isolated testing. No database or network
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation

Usage:
    from tests.fakes import FakeExerciseTemplateRepository

    repo = FakeExerciseTemplateRepository()
    repo.seed([{"id": "t1", "user_id": "user1", "name": "Push-ups"}])
"""

from tests.fakes.user_repository import FakeUserRepository
from tests.fakes.exercise_template_repository import FakeExerciseTemplateRepository
from tests.fakes.workout_log_repository import FakeWorkoutLogRepository
from tests.fakes.workout_plan_repository import FakeWorkoutPlanRepository
from tests.fakes.plan_webhook import FakePlanWebhook

__all__ = [
    "FakeUserRepository",
    "FakeExerciseTemplateRepository",
    "FakeWorkoutLogRepository",
    "FakeWorkoutPlanRepository",
    "FakePlanWebhook",
]
