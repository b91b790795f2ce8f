"""
Resolve exercise template references inline.

Logs and plans store template IDs only. Before returning them to the client
the referenced templates are fetched in one query per call and substituted in;
references to deleted templates resolve to None.
"""

from typing import Any, Dict, Iterable, List

from application.ports import ExerciseTemplateRepository
from domain.models import (
    ExerciseTemplate,
    PopulatedPerformance,
    PopulatedPlanExercise,
    PopulatedWorkoutLog,
    PopulatedWorkoutPlan,
    PopulatedWorkoutSession,
    TemplateSummary,
    WorkoutLog,
    WorkoutPlan,
)


def load_templates(
    template_repo: ExerciseTemplateRepository,
    user_id: str,
    template_ids: Iterable[str],
) -> Dict[str, ExerciseTemplate]:
    """Fetch the user's templates among ``template_ids`` keyed by ID."""
    rows = template_repo.get_many(user_id, list(template_ids))
    return {row["id"]: ExerciseTemplate.model_validate(row) for row in rows}


def populate_logs(
    template_repo: ExerciseTemplateRepository,
    user_id: str,
    rows: List[Dict[str, Any]],
) -> List[PopulatedWorkoutLog]:
    logs = [WorkoutLog.model_validate(row) for row in rows]
    templates = load_templates(
        template_repo,
        user_id,
        {ex.exercise_template_id for log in logs for ex in log.exercises},
    )
    return [populate_log(log, templates) for log in logs]


def populate_log(
    log: WorkoutLog, templates: Dict[str, ExerciseTemplate]
) -> PopulatedWorkoutLog:
    exercises = []
    for ex in log.exercises:
        template = templates.get(ex.exercise_template_id)
        exercises.append(PopulatedPerformance(
            exercise_template=(
                TemplateSummary(id=template.id, name=template.name, type=template.type)
                if template else None
            ),
            reps=ex.reps,
            time=ex.time,
            performed_at=ex.performed_at,
        ))
    return PopulatedWorkoutLog(
        id=log.id,
        user_id=log.user_id,
        date=log.date,
        exercises=exercises,
    )


def populate_plans(
    template_repo: ExerciseTemplateRepository,
    user_id: str,
    rows: List[Dict[str, Any]],
) -> List[PopulatedWorkoutPlan]:
    plans = [WorkoutPlan.model_validate(row) for row in rows]
    templates = load_templates(
        template_repo,
        user_id,
        {
            ex.exercise_template_id
            for plan in plans
            for session in plan.workouts
            for ex in session.exercises
        },
    )
    return [populate_plan(plan, templates) for plan in plans]


def populate_plan(
    plan: WorkoutPlan, templates: Dict[str, ExerciseTemplate]
) -> PopulatedWorkoutPlan:
    sessions = []
    for session in plan.workouts:
        exercises = [
            PopulatedPlanExercise(
                exercise_template=templates.get(ex.exercise_template_id),
                **ex.model_dump(exclude={"exercise_template_id"}),
            )
            for ex in session.exercises
        ]
        sessions.append(PopulatedWorkoutSession(
            exercises=exercises,
            **session.model_dump(exclude={"exercises"}),
        ))
    return PopulatedWorkoutPlan(
        workouts=sessions,
        **plan.model_dump(exclude={"workouts"}),
    )
