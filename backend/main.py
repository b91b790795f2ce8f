"""
Application factory for FastAPI.

This module provides a factory function for creating FastAPI application instances.
The factory pattern allows for:
- Easy testing with custom settings
- Multiple app instances with different configurations
- Clear separation of app creation from route definitions

Usage:
    from backend.main import create_app
    from backend.settings import Settings

    # Default app (uses get_settings())
    app = create_app()

    # Test app with custom settings
    test_settings = Settings(environment="test", jwt_secret="...", _env_file=None)
    test_app = create_app(settings=test_settings)
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.exception_handlers import register_exception_handlers
from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure a FastAPI application instance.

    Args:
        settings: Optional Settings instance. If not provided, uses get_settings()
                  which loads from environment variables.

    Returns:
        Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings)

    # Initialize Sentry for error tracking
    _init_sentry(settings)

    # Create FastAPI app
    app = FastAPI(
        title="FitTrack API",
        description="Workout logging, exercise templates and AI-generated workout plans",
        version="1.0.0",
    )

    # Configure CORS middleware
    _configure_cors(app, settings)

    register_exception_handlers(app)

    # Include API routers
    _include_routers(app)

    _log_feature_flags(settings)

    return app


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for fittrack-api")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    """Configure CORS middleware for the application."""
    trusted_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    trusted_origins.extend(
        o for o in settings.cors_origins_list if o not in trusted_origins
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=trusted_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    """Include all API routers in the application."""
    from api.routers import (
        dashboard_router,
        exercises_router,
        health_router,
        plans_router,
        users_router,
    )

    # Health router (no prefix - /health at root)
    app.include_router(health_router)

    # Domain routers (with prefixes defined in each router)
    app.include_router(users_router)
    app.include_router(exercises_router)
    app.include_router(plans_router)
    app.include_router(dashboard_router)


def _log_feature_flags(settings: Settings) -> None:
    """Log the status of optional integrations at startup."""
    if settings.webhook_configured:
        logger.info("Workout generation webhook configured")
    else:
        logger.warning("N8N_WEBHOOK_URL not set; plan send/regenerate will fail")

    if not settings.supabase_url:
        logger.warning("SUPABASE_URL not set; database endpoints will return 503")


# Default app instance for uvicorn
# This allows: uvicorn backend.main:app --reload
app = create_app()
