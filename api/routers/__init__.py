"""
Router package for the FitTrack API.

This package contains all API routers organized by domain:
- health: Liveness endpoint
- users: Registration and sign-in
- exercises: Exercise template catalog and workout log
- plans: Workout plan generation and storage
- dashboard: Workout statistics
"""

from api.routers.dashboard import router as dashboard_router
from api.routers.exercises import router as exercises_router
from api.routers.health import router as health_router
from api.routers.plans import router as plans_router
from api.routers.users import router as users_router

__all__ = [
    "dashboard_router",
    "exercises_router",
    "health_router",
    "plans_router",
    "users_router",
]
