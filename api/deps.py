"""
FastAPI Dependency Providers for the FitTrack API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations, so tests
can swap in in-memory fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository, webhook and use case providers create new instances per-request
- Auth providers verify the bearer token and resolve the user

Usage in routers:
    from api.deps import get_current_user, get_template_repo
    from application.ports import ExerciseTemplateRepository

    @router.get("/getTemplates")
    def list_templates(
        user: UserPublic = Depends(get_current_user),
        template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
    ):
        return template_repo.list_by_user(user.id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_template_repo] = lambda: FakeExerciseTemplateRepository()
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    ExerciseTemplateRepository,
    PlanWebhook,
    UserRepository,
    WorkoutLogRepository,
    WorkoutPlanRepository,
)
from application.exceptions import AuthenticationError, NotFoundError
from application.use_cases import (
    DashboardStatsUseCase,
    LogExerciseUseCase,
    PlanGenerationService,
    RegisterUserUseCase,
    SignInUseCase,
)
from domain.models import UserPublic

# Concrete implementations
from infrastructure import (
    SupabaseExerciseTemplateRepository,
    SupabaseUserRepository,
    SupabaseWorkoutLogRepository,
    SupabaseWorkoutPlanRepository,
    WorkoutWebhookClient,
)

from backend.auth import decode_token, extract_bearer_token, is_service_token
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_user_repo(
    client: Client = Depends(get_supabase_client_required),
) -> UserRepository:
    return SupabaseUserRepository(client)


def get_template_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseTemplateRepository:
    return SupabaseExerciseTemplateRepository(client)


def get_log_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutLogRepository:
    return SupabaseWorkoutLogRepository(client)


def get_plan_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutPlanRepository:
    return SupabaseWorkoutPlanRepository(client)


def get_webhook_client(
    settings: Settings = Depends(get_settings),
) -> PlanWebhook:
    """
    Get the workout-generation webhook client.

    Built even when no URL is configured; calls then fail with
    ConfigurationError so only the plan endpoints are affected.
    """
    return WorkoutWebhookClient(settings)


# =============================================================================
# Use Case Providers
# =============================================================================


def get_register_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
) -> RegisterUserUseCase:
    return RegisterUserUseCase(user_repo, settings)


def get_signin_use_case(
    user_repo: UserRepository = Depends(get_user_repo),
    settings: Settings = Depends(get_settings),
) -> SignInUseCase:
    return SignInUseCase(user_repo, settings)


def get_log_exercise_use_case(
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
    log_repo: WorkoutLogRepository = Depends(get_log_repo),
) -> LogExerciseUseCase:
    return LogExerciseUseCase(template_repo, log_repo)


def get_plan_service(
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
    webhook: PlanWebhook = Depends(get_webhook_client),
) -> PlanGenerationService:
    return PlanGenerationService(template_repo, plan_repo, webhook)


def get_dashboard_use_case(
    template_repo: ExerciseTemplateRepository = Depends(get_template_repo),
    log_repo: WorkoutLogRepository = Depends(get_log_repo),
    plan_repo: WorkoutPlanRepository = Depends(get_plan_repo),
) -> DashboardStatsUseCase:
    return DashboardStatsUseCase(template_repo, log_repo, plan_repo)


# =============================================================================
# Authentication Providers
# =============================================================================


def _load_user(user_repo: UserRepository, user_id: Optional[str]) -> UserPublic:
    row = user_repo.get_by_id(user_id) if user_id else None
    if row is None:
        raise NotFoundError("User not found")
    return UserPublic.model_validate(row)


def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserPublic:
    """
    Get the authenticated user from a bearer session token.

    Raises:
        AuthenticationError: 401 if the token is missing, invalid, expired,
                             or a service token
        NotFoundError: 404 if the token's user no longer exists
    """
    claims = decode_token(extract_bearer_token(authorization), settings)
    if is_service_token(claims):
        raise AuthenticationError("Not authorized, token failed")
    return _load_user(user_repo, claims.get("sub"))


def get_plan_owner(
    authorization: Optional[str] = Header(None),
    user_id_header: Optional[str] = Header(None, alias="id"),
    settings: Settings = Depends(get_settings),
    user_repo: UserRepository = Depends(get_user_repo),
) -> UserPublic:
    """
    Get the user a generated plan belongs to.

    Accepts either a user session token, or a service token (the webhook
    calling back) together with an ``id`` header naming the user.
    """
    claims = decode_token(extract_bearer_token(authorization), settings)
    if is_service_token(claims):
        if not user_id_header:
            raise AuthenticationError("Not authorized, no user id")
        return _load_user(user_repo, user_id_header)
    return _load_user(user_repo, claims.get("sub"))


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_user_repo",
    "get_template_repo",
    "get_log_repo",
    "get_plan_repo",
    "get_webhook_client",
    # Use cases
    "get_register_use_case",
    "get_signin_use_case",
    "get_log_exercise_use_case",
    "get_plan_service",
    "get_dashboard_use_case",
    # Authentication
    "get_current_user",
    "get_plan_owner",
]
