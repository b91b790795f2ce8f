"""
Workout plan entities.

A plan is a multi-week schedule of sessions. Sessions reference exercise
templates by ID; the user preferences used to generate the plan are embedded
so the plan can be regenerated later.
"""

from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import Field, field_validator

from domain.models.base import CamelModel
from domain.models.exercise_template import ExerciseTemplate


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


class Difficulty(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


def split_delimited(value: Any) -> List[str]:
    """
    Normalize a preference list field.

    Lists pass through; a comma-delimited string is split and trimmed;
    anything else becomes an empty list.

    >>> split_delimited("strength, endurance")
    ['strength', 'endurance']
    >>> split_delimited(None)
    []
    """
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    return []


class PlanPreferences(CamelModel):
    """User preferences a plan was generated from."""

    goals: List[str] = Field(default_factory=list)
    fitness_level: str = ""
    days_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    session_duration: Optional[int] = Field(default=None, ge=1, description="Minutes")
    preferred_exercise_types: List[str] = Field(default_factory=list)
    excluded_exercises: List[str] = Field(default_factory=list)
    injuries: List[str] = Field(default_factory=list)
    equipment: List[str] = Field(default_factory=list)

    @field_validator(
        "goals",
        "preferred_exercise_types",
        "excluded_exercises",
        "injuries",
        "equipment",
        mode="before",
    )
    @classmethod
    def normalize_list(cls, v: Any) -> List[str]:
        return split_delimited(v)

    @field_validator("fitness_level", mode="before")
    @classmethod
    def default_fitness_level(cls, v: Any) -> str:
        return v or ""


# =============================================================================
# Sessions
# =============================================================================


class PlanExerciseBase(CamelModel):
    sets: int = Field(default=1, ge=1)
    target_reps: Optional[int] = Field(default=None, ge=0)
    target_time: Optional[float] = Field(default=None, ge=0, description="Seconds")
    rest_time: Optional[float] = Field(default=None, ge=0, description="Seconds")
    notes: Optional[str] = None

    @field_validator("sets", mode="before")
    @classmethod
    def default_sets(cls, v: Any) -> Any:
        return 1 if v is None else v


class PlanExercise(PlanExerciseBase):
    """An exercise slot in a session, as stored."""

    exercise_template_id: str


class PopulatedPlanExercise(PlanExerciseBase):
    """An exercise slot with its template resolved (None if deleted)."""

    exercise_template: Optional[ExerciseTemplate] = None


class WorkoutSessionBase(CamelModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    day_of_week: Optional[DayOfWeek] = None
    estimated_duration: Optional[int] = Field(default=None, ge=0, description="Minutes")
    difficulty: Difficulty = Difficulty.INTERMEDIATE

    @field_validator("day_of_week", "difficulty", mode="before")
    @classmethod
    def title_case(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().capitalize()
        return v

    @field_validator("difficulty", mode="before")
    @classmethod
    def default_difficulty(cls, v: Any) -> Any:
        return Difficulty.INTERMEDIATE if v is None else v


class WorkoutSession(WorkoutSessionBase):
    """A session as stored."""

    exercises: List[PlanExercise] = Field(default_factory=list)


class PopulatedWorkoutSession(WorkoutSessionBase):
    """A session as returned to the client."""

    exercises: List[PopulatedPlanExercise] = Field(default_factory=list)


# =============================================================================
# Plans
# =============================================================================


class WorkoutPlanBase(CamelModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    duration: int = Field(default=4, ge=1, description="Weeks")
    days_per_week: int = Field(default=3, ge=1, le=7)
    preferences: PlanPreferences = Field(default_factory=PlanPreferences)
    is_active: bool = True
    generated_at: datetime
    updated_at: datetime


class WorkoutPlan(WorkoutPlanBase):
    """A plan as stored."""

    workouts: List[WorkoutSession] = Field(default_factory=list)


class PopulatedWorkoutPlan(WorkoutPlanBase):
    """A plan as returned to the client."""

    workouts: List[PopulatedWorkoutSession] = Field(default_factory=list)


# =============================================================================
# Drafts (plans described by exercise name, before template resolution)
# =============================================================================


class ExerciseDraft(PlanExerciseBase):
    """
    An exercise slot that may name its template instead of referencing it.

    Generation requests use ``exerciseName``; webhook regenerations may send
    ``exerciseTemplate`` (an existing ID) and/or ``templateName``.
    """

    exercise_name: Optional[str] = None
    template_name: Optional[str] = None
    exercise_template: Optional[str] = None

    @field_validator("exercise_template", mode="before")
    @classmethod
    def template_ref_to_id(cls, v: Any) -> Any:
        # Populated references arrive as objects
        if isinstance(v, dict):
            return v.get("id") or v.get("_id")
        return v

    @property
    def resolved_name(self) -> Optional[str]:
        name = (self.exercise_name or self.template_name or "").strip()
        return name or None


class SessionDraft(WorkoutSessionBase):
    exercises: List[ExerciseDraft] = Field(default_factory=list)

    @field_validator("exercises", mode="before")
    @classmethod
    def default_exercises(cls, v: Any) -> Any:
        return [] if v is None else v


class PlanDraft(CamelModel):
    """A plan as submitted for generation."""

    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=1, description="Weeks")
    days_per_week: Optional[int] = Field(default=None, ge=1, le=7)
    workouts: List[SessionDraft] = Field(default_factory=list)
    preferences: PlanPreferences = Field(default_factory=PlanPreferences)

    @field_validator("workouts", mode="before")
    @classmethod
    def default_workouts(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("preferences", mode="before")
    @classmethod
    def default_preferences(cls, v: Any) -> Any:
        return {} if v is None else v

    def exercise_names(self) -> List[str]:
        """Distinct exercise names in first-seen order."""
        seen: List[str] = []
        for session in self.workouts:
            for ex in session.exercises:
                name = ex.resolved_name
                if name and name not in seen:
                    seen.append(name)
        return seen
