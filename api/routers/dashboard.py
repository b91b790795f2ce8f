"""
Dashboard router.

This router contains endpoints for:
- GET /api/dashboard/stats - Workout statistics for the caller
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_current_user, get_dashboard_use_case
from application.use_cases import DashboardStatsUseCase
from domain.models import UserPublic

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
)


@router.get("/stats")
def get_dashboard_stats(
    period: Optional[str] = Query("7d", description="7d, 30d or 90d"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    user: UserPublic = Depends(get_current_user),
    use_case: DashboardStatsUseCase = Depends(get_dashboard_use_case),
):
    """
    Aggregate the caller's workout history.

    ``startDate`` and ``endDate`` (ISO dates, end inclusive) take precedence
    over ``period`` when both are given.
    """
    result = use_case.execute(
        user.id, period=period, start_date=start_date, end_date=end_date
    )
    return {
        "success": True,
        "data": {
            "stats": result.stats,
            "weeklyTrend": result.weekly_trend,
            "goalProgress": result.goal_progress,
            "recentActivity": [
                log.model_dump(by_alias=True, mode="json")
                for log in result.recent_activity
            ],
            "topExercises": result.top_exercises,
            "period": result.period,
        },
    }
