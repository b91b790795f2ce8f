"""
Plan Generation Use Cases.

Bridges the workout-generation webhook and the plan store:

- generate: persist a plan described by exercise names, creating any missing
  templates for the caller
- regenerate: ask the webhook for a fresh set of sessions for an existing plan
  and swap them in place
- send: relay raw preferences to the webhook without persisting anything

Template creation and plan writes are not wrapped in a transaction; a failure
after templates were created leaves them in the catalog.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from application.exceptions import (
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from application.ports import (
    ExerciseTemplateRepository,
    PlanWebhook,
    WorkoutPlanRepository,
)
from application.use_cases.population import load_templates, populate_plan
from domain.models import (
    ExerciseDraft,
    ExerciseType,
    PlanDraft,
    PlanExercise,
    PopulatedWorkoutPlan,
    SessionDraft,
    WorkoutPlan,
    WorkoutSession,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RegenerateResult:
    """Result of regenerating a plan."""

    plan: PopulatedWorkoutPlan
    new_templates_created: int = 0


def _to_session(draft: SessionDraft, exercises: List[PlanExercise]) -> WorkoutSession:
    return WorkoutSession(
        exercises=exercises,
        **draft.model_dump(exclude={"exercises"}),
    )


def _to_plan_exercise(draft: ExerciseDraft, template_id: str) -> PlanExercise:
    return PlanExercise(
        exercise_template_id=template_id,
        sets=draft.sets,
        target_reps=draft.target_reps,
        target_time=draft.target_time,
        rest_time=draft.rest_time,
        notes=draft.notes,
    )


class PlanGenerationService:
    """
    Generate, regenerate and relay workout plans.

    Usage:
        >>> service = PlanGenerationService(template_repo, plan_repo, webhook)
        >>> plan = service.generate("user-1", PlanDraft(name="Strength"))
        >>> result = await service.regenerate("user-1", plan.id)
    """

    def __init__(
        self,
        template_repo: ExerciseTemplateRepository,
        plan_repo: WorkoutPlanRepository,
        webhook: PlanWebhook,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._template_repo = template_repo
        self._plan_repo = plan_repo
        self._webhook = webhook
        self._clock = clock

    # =========================================================================
    # Generate
    # =========================================================================

    def generate(self, user_id: str, draft: PlanDraft) -> PopulatedWorkoutPlan:
        """
        Persist a plan, creating ``reps`` templates for unknown exercise names.

        Raises:
            ValidationError: If an exercise has no name
        """
        for session in draft.workouts:
            for ex in session.exercises:
                if not ex.resolved_name:
                    raise ValidationError(
                        f"Exercise in workout '{session.name}' has no exerciseName"
                    )

        ids_by_name = {
            name: self._resolve_template(user_id, name)["id"]
            for name in draft.exercise_names()
        }

        sessions = [
            _to_session(
                session,
                [
                    _to_plan_exercise(ex, ids_by_name[ex.resolved_name])
                    for ex in session.exercises
                ],
            )
            for session in draft.workouts
        ]

        now = self._clock().isoformat()
        row = self._plan_repo.create({
            "user_id": user_id,
            "name": draft.name,
            "description": draft.description,
            "duration": draft.duration or 4,
            "days_per_week": draft.days_per_week or 3,
            "workouts": [s.model_dump(mode="json") for s in sessions],
            "preferences": draft.preferences.model_dump(mode="json"),
            "is_active": True,
            "generated_at": now,
            "updated_at": now,
        })
        logger.info(
            f"Generated plan {row['id']} for user {user_id} "
            f"({len(sessions)} workouts, {len(ids_by_name)} exercises)"
        )
        return self._populate(user_id, row)

    def _resolve_template(self, user_id: str, name: str) -> Dict[str, Any]:
        existing = self._template_repo.find_by_name(user_id, name)
        if existing:
            return existing
        try:
            return self._template_repo.create(user_id, name, ExerciseType.REPS.value)
        except ConflictError:
            # Lost a race with a concurrent request creating the same name
            existing = self._template_repo.find_by_name(user_id, name)
            if existing is None:
                raise
            return existing

    # =========================================================================
    # Regenerate
    # =========================================================================

    async def regenerate(self, user_id: str, plan_id: str) -> RegenerateResult:
        """
        Replace a plan's sessions with a fresh set from the webhook.

        The plan keeps its ID, owner, name and preferences.

        Raises:
            NotFoundError: If the plan is missing or owned by someone else
            ConfigurationError: If no webhook URL is configured
            UpstreamError: If the webhook fails or returns an unusable plan
        """
        row = self._plan_repo.get(plan_id, user_id)
        if row is None:
            raise NotFoundError("Workout plan not found")
        plan = WorkoutPlan.model_validate(row)

        catalog = self._template_repo.list_by_user(user_id)
        payload = {
            "userId": user_id,
            "preferences": plan.preferences.model_dump(by_alias=True, mode="json"),
            "existingExercises": [
                {"id": t["id"], "name": t["name"], "type": t["type"]}
                for t in catalog
            ],
            "shouldCreateNewExercises": True,
        }
        data = await self._webhook.regenerate_plan(payload)

        try:
            drafts = [
                SessionDraft.model_validate(w) for w in (data.get("workouts") or [])
            ]
        except PydanticValidationError as e:
            logger.error(f"Webhook returned an invalid plan for {plan_id}: {e}")
            raise UpstreamError("Webhook returned an invalid workout plan") from e

        created = self._create_suggested_templates(
            user_id, data.get("newExerciseTemplates") or []
        )

        owned_ids = {t["id"] for t in catalog} | {t["id"] for t in created}
        new_by_name = {t["name"]: t["id"] for t in created}
        existing_by_name = {t["name"]: t["id"] for t in catalog}

        sessions = []
        for draft in drafts:
            exercises = []
            for ex in draft.exercises:
                template_id = self._link(ex, owned_ids, new_by_name, existing_by_name)
                if template_id is None:
                    logger.warning(
                        f"Dropping unlinked exercise {ex.resolved_name!r} "
                        f"from regenerated plan {plan_id}"
                    )
                    continue
                exercises.append(_to_plan_exercise(ex, template_id))
            sessions.append(_to_session(draft, exercises))

        update: Dict[str, Any] = {
            "workouts": [s.model_dump(mode="json") for s in sessions],
            "generated_at": self._clock().isoformat(),
        }
        if data.get("description"):
            update["description"] = data["description"]

        updated = self._plan_repo.update(plan_id, user_id, update)
        if updated is None:
            raise NotFoundError("Workout plan not found")

        logger.info(
            f"Regenerated plan {plan_id} for user {user_id} "
            f"({len(sessions)} workouts, {len(created)} new templates)"
        )
        return RegenerateResult(
            plan=self._populate(user_id, updated),
            new_templates_created=len(created),
        )

    def _create_suggested_templates(
        self, user_id: str, suggestions: List[Any]
    ) -> List[Dict[str, Any]]:
        """Save webhook-suggested templates, skipping any that fail."""
        created = []
        for suggestion in suggestions:
            if not isinstance(suggestion, dict):
                continue
            name = str(suggestion.get("name") or "").strip()
            if not name:
                continue
            type_ = ExerciseType.coerce(suggestion.get("type"), ExerciseType.REPS)
            try:
                created.append(self._template_repo.create(user_id, name, type_.value))
            except ConflictError:
                logger.info(f"Suggested template {name!r} already exists for {user_id}")
            except Exception:
                logger.exception(f"Failed to save suggested template {name!r}")
        return created

    @staticmethod
    def _link(
        ex: ExerciseDraft,
        owned_ids: set,
        new_by_name: Dict[str, str],
        existing_by_name: Dict[str, str],
    ) -> Optional[str]:
        if ex.exercise_template and ex.exercise_template in owned_ids:
            return ex.exercise_template
        name = ex.resolved_name
        if name is None:
            return None
        return new_by_name.get(name) or existing_by_name.get(name)

    # =========================================================================
    # Send
    # =========================================================================

    async def send(self, user_id: str, preferences: Dict[str, Any]) -> Any:
        """
        Relay preferences to the webhook and return its body verbatim.

        Raises:
            ConfigurationError: If no webhook URL is configured
            UpstreamError: If the webhook fails
        """
        payload = {**preferences, "userId": user_id}
        response = await self._webhook.send_preferences(payload)
        logger.info(f"Sent workout preferences for user {user_id}")
        return response

    def _populate(self, user_id: str, row: Dict[str, Any]) -> PopulatedWorkoutPlan:
        plan = WorkoutPlan.model_validate(row)
        templates = load_templates(
            self._template_repo,
            user_id,
            {ex.exercise_template_id for s in plan.workouts for ex in s.exercises},
        )
        return populate_plan(plan, templates)
