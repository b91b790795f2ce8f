"""
Application Use Cases for the FitTrack API.

This package contains application-level use cases that orchestrate domain
logic and coordinate between ports/adapters. Use cases are the entry points
for business operations.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return domain models, not API responses

Usage:
    from application.use_cases import LogExerciseUseCase, PlanGenerationService

    log = LogExerciseUseCase(template_repo, log_repo).execute(
        "user-123", "template-456", reps=20,
    )

    service = PlanGenerationService(template_repo, plan_repo, webhook)
    result = await service.regenerate("user-123", "plan-789")
"""

from application.use_cases.dashboard_stats import (
    DashboardStats,
    DashboardStatsUseCase,
)
from application.use_cases.log_exercise import LogExerciseUseCase
from application.use_cases.plan_generation import (
    PlanGenerationService,
    RegenerateResult,
)
from application.use_cases.population import populate_logs, populate_plans
from application.use_cases.user_accounts import (
    AuthResult,
    RegisterUserUseCase,
    SignInUseCase,
)

__all__ = [
    # Accounts
    "AuthResult",
    "RegisterUserUseCase",
    "SignInUseCase",
    # Workout log
    "LogExerciseUseCase",
    # Plans
    "PlanGenerationService",
    "RegenerateResult",
    # Dashboard
    "DashboardStats",
    "DashboardStatsUseCase",
    # Population
    "populate_logs",
    "populate_plans",
]
