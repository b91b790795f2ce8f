"""
Exercise template entity.

A template is a user-owned, named exercise definition with a measurement
type. Names are unique per owner.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from domain.models.base import CamelModel


class ExerciseType(str, Enum):
    """How an exercise is measured."""

    REPS = "reps"
    TIME = "time"
    DISTANCE = "distance"
    WEIGHT = "weight"
    CALORIES = "calories"
    CUSTOM = "custom"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Optional[str], default: "ExerciseType") -> "ExerciseType":
        """
        Map a free-form type string onto the enum.

        Missing values fall back to ``default``; unknown values to OTHER.
        """
        if not value:
            return default
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class ExerciseTemplate(CamelModel):
    """A stored exercise template."""

    id: str
    name: str
    type: ExerciseType
    user_id: str = Field(..., description="Owner of the template")
    created_at: Optional[datetime] = None


class TemplateSummary(CamelModel):
    """Template fields resolved inline into logs."""

    id: str
    name: str
    type: ExerciseType
