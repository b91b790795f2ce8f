"""
Domain layer for the FitTrack API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    DayOfWeek,
    Difficulty,
    ExercisePerformance,
    ExerciseTemplate,
    ExerciseType,
    PlanExercise,
    PlanPreferences,
    TemplateSummary,
    UserPublic,
    WorkoutLog,
    WorkoutPlan,
    WorkoutSession,
)

__all__ = [
    "DayOfWeek",
    "Difficulty",
    "ExercisePerformance",
    "ExerciseTemplate",
    "ExerciseType",
    "PlanExercise",
    "PlanPreferences",
    "TemplateSummary",
    "UserPublic",
    "WorkoutLog",
    "WorkoutPlan",
    "WorkoutSession",
]
