"""
Workout log entities.

One WorkoutLog row exists per user per calendar day; each exercise the user
logs that day is appended to its ``exercises`` list.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from domain.models.base import CamelModel
from domain.models.exercise_template import TemplateSummary


class ExercisePerformance(CamelModel):
    """A single logged performance as stored."""

    exercise_template_id: str
    reps: Optional[int] = Field(default=None, ge=0)
    time: Optional[float] = Field(default=None, ge=0, description="Seconds")
    performed_at: datetime


class WorkoutLog(CamelModel):
    """A day's log as stored."""

    id: str
    user_id: str
    date: datetime
    exercises: List[ExercisePerformance] = Field(default_factory=list)


class PopulatedPerformance(CamelModel):
    """A logged performance with its template resolved (None if deleted)."""

    exercise_template: Optional[TemplateSummary] = None
    reps: Optional[int] = None
    time: Optional[float] = None
    performed_at: datetime


class PopulatedWorkoutLog(CamelModel):
    """A day's log as returned to the client."""

    id: str
    user_id: str
    date: datetime
    exercises: List[PopulatedPerformance] = Field(default_factory=list)
