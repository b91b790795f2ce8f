"""
Infrastructure Layer for the FitTrack API.

This package contains concrete implementations of the application ports:
- db/: Supabase database implementations
- webhook_client: HTTP client for the workout-generation webhook
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseUserRepository,
    SupabaseExerciseTemplateRepository,
    SupabaseWorkoutLogRepository,
    SupabaseWorkoutPlanRepository,
)
from infrastructure.webhook_client import WorkoutWebhookClient

__all__ = [
    "SupabaseUserRepository",
    "SupabaseExerciseTemplateRepository",
    "SupabaseWorkoutLogRepository",
    "SupabaseWorkoutPlanRepository",
    "WorkoutWebhookClient",
]
