"""
Plans router for AI-generated workout plans.

This router contains endpoints for:
- POST /api/plan/generate - Persist a plan described by exercise names
- POST /api/plan/send - Relay preferences to the generation webhook
- GET /api/plan/list - List the caller's plans (paginated)
- GET /api/plan/get/{planId} - Get one plan
- DELETE /api/plan/delete/{planId} - Delete one plan
- POST /api/plan/regenerate/{planId} - Regenerate a plan's sessions via the webhook
"""

import logging
import math
from typing import Any

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from api.deps import (
    get_current_user,
    get_plan_owner,
    get_plan_repo,
    get_plan_service,
    get_template_repo,
)
from application.exceptions import NotFoundError
from application.ports import ExerciseTemplateRepository, WorkoutPlanRepository
from application.use_cases import PlanGenerationService, populate_plans
from domain.models import PlanDraft, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/plan",
    tags=["Plans"],
)


# =============================================================================
# Request Models
# =============================================================================


class SendPreferencesRequest(BaseModel):
    """Preferences relayed verbatim to the generation webhook."""
    model_config = ConfigDict(populate_by_name=True)

    fitness_level: Any = Field(default=None, alias="fitnessLevel")
    goals: Any = None
    equipment: Any = None
    days_per_week: Any = None
    session_duration: Any = None
    preferred_exercise_types: Any = None
    excluded_exercises: Any = None
    injuries: Any = None


# =============================================================================
# Generation Endpoints
# =============================================================================


@router.post("/generate", status_code=status.HTTP_201_CREATED)
def generate_plan(
    draft: PlanDraft,
    user: UserPublic = Depends(get_plan_owner),
    service: PlanGenerationService = Depends(get_plan_service),
):
    """
    Persist a generated plan.

    Called by the user, or by the webhook with a service token and an
    ``id`` header. Unknown exercise names become new ``reps`` templates.
    """
    plan = service.generate(user.id, draft)
    return {
        "success": True,
        "message": "Workout plan generated successfully",
        "workoutPlan": plan.model_dump(by_alias=True, mode="json"),
    }


@router.post("/send")
async def send_preferences(
    request: SendPreferencesRequest,
    user: UserPublic = Depends(get_current_user),
    service: PlanGenerationService = Depends(get_plan_service),
):
    """Relay preferences to the webhook and return its response verbatim."""
    response = await service.send(user.id, request.model_dump(by_alias=True))
    return {
        "success": True,
        "message": "Data sent to N8N webhook successfully",
        "response": response,
    }


@router.post("/regenerate/{plan_id}")
async def regenerate_plan(
    plan_id: str,
    user: UserPublic = Depends(get_current_user),
    service: PlanGenerationService = Depends(get_plan_service),
):
    """
    Replace a plan's sessions with a fresh set from the webhook.

    The plan keeps its ID; new templates suggested by the webhook are saved
    to the caller's catalog.
    """
    result = await service.regenerate(user.id, plan_id)
    return {
        "message": "Exercise plan regenerated successfully",
        "workoutPlan": result.plan.model_dump(by_alias=True, mode="json"),
        "newExerciseTemplatesCreated": result.new_templates_created,
    }


# =============================================================================
# Plan Store Endpoints
# =============================================================================


@router.get("/list")
def list_plans(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: UserPublic = Depends(get_current_user),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
):
    """List the caller's plans, most recently generated first."""
    rows = plan_repo.list_by_user(user.id, offset=(page - 1) * limit, limit=limit)
    total = plan_repo.count_by_user(user.id)
    plans = populate_plans(template_repo, user.id, rows)
    return {
        "workoutPlans": [p.model_dump(by_alias=True, mode="json") for p in plans],
        "pagination": {
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": math.ceil(total / limit),
        },
    }


@router.get("/get/{plan_id}")
def get_plan(
    plan_id: str,
    user: UserPublic = Depends(get_current_user),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
):
    row = plan_repo.get(plan_id, user.id)
    if row is None:
        raise NotFoundError("Workout plan not found")
    plan = populate_plans(template_repo, user.id, [row])[0]
    return {"workoutPlan": plan.model_dump(by_alias=True, mode="json")}


@router.delete("/delete/{plan_id}")
def delete_plan(
    plan_id: str,
    user: UserPublic = Depends(get_current_user),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
):
    if not plan_repo.delete(plan_id, user.id):
        raise NotFoundError("Workout plan not found")
    logger.info(f"Deleted workout plan {plan_id} for user {user.id}")
    return {"message": "Workout plan deleted successfully"}
