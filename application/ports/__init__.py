"""
Repository Interfaces (Ports) for the FitTrack API.

This package defines abstract interfaces that decouple domain logic from
infrastructure (database, external services). Implementations are provided
in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the domain needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ExerciseTemplateRepository

    class TemplateService:
        def __init__(self, template_repo: ExerciseTemplateRepository):
            self.template_repo = template_repo
"""

# Credential store
from application.ports.user_repository import UserRepository

# Exercise template catalog
from application.ports.exercise_template_repository import ExerciseTemplateRepository

# Workout log
from application.ports.workout_log_repository import WorkoutLogRepository

# Workout plan store
from application.ports.workout_plan_repository import WorkoutPlanRepository

# Plan generation webhook
from application.ports.plan_webhook import PlanWebhook

__all__ = [
    "UserRepository",
    "ExerciseTemplateRepository",
    "WorkoutLogRepository",
    "WorkoutPlanRepository",
    "PlanWebhook",
]
