"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into services
and routers for clean separation of concerns and testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseUserRepository,
        SupabaseExerciseTemplateRepository,
        SupabaseWorkoutLogRepository,
        SupabaseWorkoutPlanRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    template_repo = SupabaseExerciseTemplateRepository(client)
    plan_repo = SupabaseWorkoutPlanRepository(client)
"""

from infrastructure.db.user_repository import SupabaseUserRepository
from infrastructure.db.exercise_template_repository import SupabaseExerciseTemplateRepository
from infrastructure.db.workout_log_repository import SupabaseWorkoutLogRepository
from infrastructure.db.workout_plan_repository import SupabaseWorkoutPlanRepository

__all__ = [
    # Credential store
    "SupabaseUserRepository",

    # Exercise template catalog
    "SupabaseExerciseTemplateRepository",

    # Workout log
    "SupabaseWorkoutLogRepository",

    # Workout plans
    "SupabaseWorkoutPlanRepository",
]
