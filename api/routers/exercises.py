"""
Exercises router for the template catalog and the workout log.

This router contains endpoints for:
- POST /api/exercises/createTemplate - Create an exercise template
- GET /api/exercises/getTemplates - List the caller's templates
- DELETE /api/exercises/deleteTemplate/{id} - Delete one of the caller's templates
- POST /api/exercises/logExercise/{id} - Log a performance of a template
- GET /api/exercises/logs - List the caller's daily logs
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from api.deps import (
    get_current_user,
    get_log_exercise_use_case,
    get_log_repo,
    get_template_repo,
)
from application.exceptions import ConflictError, NotFoundError, ValidationError
from application.ports import ExerciseTemplateRepository, WorkoutLogRepository
from application.use_cases import LogExerciseUseCase, populate_logs
from domain.models import ExerciseTemplate, ExerciseType, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/exercises",
    tags=["Exercises"],
)


# =============================================================================
# Request Models
# =============================================================================


class CreateTemplateRequest(BaseModel):
    """Request model for creating an exercise template."""
    name: Optional[str] = None
    type: Optional[str] = None


class LogExerciseRequest(BaseModel):
    """Request model for logging an exercise performance."""
    reps: Optional[int] = Field(default=None, ge=0)
    time: Optional[float] = Field(default=None, ge=0, description="Seconds")


# =============================================================================
# Template Endpoints
# =============================================================================


@router.post("/createTemplate", status_code=status.HTTP_201_CREATED)
def create_template(
    request: CreateTemplateRequest,
    user: UserPublic = Depends(get_current_user),
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
):
    """
    Create an exercise template.

    Names are trimmed and must be unique for the caller.

    Raises:
        ValidationError: 400 if name or type is missing, or type is unknown
        ConflictError: 409 if the caller already has a template with this name
    """
    name = (request.name or "").strip()
    if not name or not request.type:
        raise ValidationError("Name and type are required fields")
    try:
        exercise_type = ExerciseType(request.type)
    except ValueError:
        allowed = ", ".join(t.value for t in ExerciseType)
        raise ValidationError(f"Invalid exercise type '{request.type}'. Allowed: {allowed}")

    if template_repo.find_by_name(user.id, name) is not None:
        raise ConflictError("Exercise template with this name already exists")

    row = template_repo.create(user.id, name, exercise_type.value)
    logger.info(f"Created exercise template {row['id']} for user {user.id}")

    return {
        "success": True,
        "message": "Exercise template created successfully",
        "data": ExerciseTemplate.model_validate(row).model_dump(by_alias=True, mode="json"),
    }


@router.get("/getTemplates")
def get_templates(
    user: UserPublic = Depends(get_current_user),
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
):
    """List the caller's templates, newest first."""
    rows = template_repo.list_by_user(user.id)
    return {
        "success": True,
        "message": "Templates retrieved successfully",
        "data": [
            ExerciseTemplate.model_validate(row).model_dump(by_alias=True, mode="json")
            for row in rows
        ],
    }


@router.delete("/deleteTemplate/{template_id}")
def delete_template(
    template_id: str,
    user: UserPublic = Depends(get_current_user),
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
):
    """
    Delete one of the caller's templates.

    Logs and plans referencing it keep the dangling ID.
    """
    if not template_repo.delete(template_id, user.id):
        raise NotFoundError("the exercise could not be deleted")
    return {"success": True, "message": "the exercise was deleted successfully"}


# =============================================================================
# Workout Log Endpoints
# =============================================================================


@router.post("/logExercise/{template_id}", status_code=status.HTTP_201_CREATED)
def log_exercise(
    template_id: str,
    request: LogExerciseRequest,
    user: UserPublic = Depends(get_current_user),
    use_case: LogExerciseUseCase = Depends(get_log_exercise_use_case),
):
    """
    Append a performance to the caller's log for today.

    Not idempotent: each call adds another entry.
    """
    log = use_case.execute(user.id, template_id, reps=request.reps, time=request.time)
    return {
        "success": True,
        "message": "Exercise logged successfully",
        "workoutLog": log.model_dump(by_alias=True, mode="json"),
    }


@router.get("/logs")
def get_logs(
    user: UserPublic = Depends(get_current_user),
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
    log_repo: WorkoutLogRepository = Depends(get_log_repo),
):
    """List the caller's daily logs, newest first, with templates resolved."""
    logs = populate_logs(template_repo, user.id, log_repo.list_by_user(user.id))
    return {
        "success": True,
        "data": [log.model_dump(by_alias=True, mode="json") for log in logs],
    }
