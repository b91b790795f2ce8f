"""
Domain models for the FitTrack API.

These models represent the core business concepts:
- ExerciseTemplate: a user-owned named exercise with a measurement type
- WorkoutLog: one day's journal of performed exercises
- WorkoutPlan: a generated multi-week plan of sessions
- UserPublic: a user record without credentials

Stored shapes (``WorkoutLog``, ``WorkoutPlan``) reference templates by ID;
``Populated*`` shapes carry the resolved template and are what the API returns.
"""

from domain.models.exercise_template import (
    ExerciseTemplate,
    ExerciseType,
    TemplateSummary,
)
from domain.models.user import UserPublic
from domain.models.workout_log import (
    ExercisePerformance,
    PopulatedPerformance,
    PopulatedWorkoutLog,
    WorkoutLog,
)
from domain.models.workout_plan import (
    DayOfWeek,
    Difficulty,
    ExerciseDraft,
    PlanDraft,
    PlanExercise,
    PlanPreferences,
    PopulatedPlanExercise,
    PopulatedWorkoutPlan,
    PopulatedWorkoutSession,
    SessionDraft,
    WorkoutPlan,
    WorkoutSession,
    split_delimited,
)

__all__ = [
    "DayOfWeek",
    "Difficulty",
    "ExerciseDraft",
    "ExercisePerformance",
    "ExerciseTemplate",
    "ExerciseType",
    "PlanDraft",
    "PlanExercise",
    "PlanPreferences",
    "PopulatedPerformance",
    "PopulatedPlanExercise",
    "PopulatedWorkoutLog",
    "PopulatedWorkoutPlan",
    "PopulatedWorkoutSession",
    "SessionDraft",
    "TemplateSummary",
    "UserPublic",
    "WorkoutLog",
    "WorkoutPlan",
    "WorkoutSession",
    "split_delimited",
]
