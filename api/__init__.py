"""
API package for the FitTrack API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- exception_handlers.py: Application exception to HTTP response mapping
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_user_repo,
    get_template_repo,
    get_log_repo,
    get_plan_repo,
    get_webhook_client,
    get_current_user,
    get_plan_owner,
)

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
    # Authentication
    "get_current_user",
    "get_plan_owner",
]
