"""
Health check router.

This router provides a liveness endpoint for monitoring and load balancers.
"""

from fastapi import APIRouter, Depends

from api.deps import get_settings
from backend.settings import Settings

router = APIRouter(
    tags=["Health"],
)


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    """
    Simple liveness endpoint for fittrack-api.

    Returns:
        dict: Status indicator and which optional integrations are configured
    """
    return {
        "status": "ok",
        "environment": settings.environment,
        "webhookConfigured": settings.webhook_configured,
    }
