"""
DashboardStats Use Case.

Read-only rollups over a user's workout history, recomputed on every request.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from application.exceptions import ValidationError
from application.ports import (
    ExerciseTemplateRepository,
    WorkoutLogRepository,
    WorkoutPlanRepository,
)
from application.use_cases.population import load_templates, populate_logs
from domain.models import ExerciseTemplate, PopulatedWorkoutLog, WorkoutLog

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_PERIOD = "7d"
TREND_DAYS = 28
GOAL_WINDOW_DAYS = 7
DEFAULT_WEEKLY_GOAL = 3
RECENT_LIMIT = 5
TOP_EXERCISE_LIMIT = 5


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Pure helpers
# =============================================================================


def parse_date_param(value: str, *, end_of_day: bool = False) -> datetime:
    """
    Parse a ``startDate``/``endDate`` query value.

    Accepts ISO dates or datetimes. A bare date used as an end bound covers
    the whole day. Naive values are treated as UTC.

    Raises:
        ValidationError: If the value is not an ISO date
    """
    raw = value.strip()
    try:
        if len(raw) == 10:
            day = date.fromisoformat(raw)
            moment = datetime.combine(day, time.max if end_of_day else time.min)
        else:
            moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"Invalid date: {value}") from e
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def resolve_window(
    now: datetime,
    period: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> Tuple[datetime, Optional[datetime]]:
    """
    Work out the (start, end) of the reporting window.

    An explicit range needs both bounds; otherwise the period applies, counted
    back from ``now``, and unknown periods fall back to seven days.

    >>> now = datetime(2024, 3, 10, tzinfo=timezone.utc)
    >>> resolve_window(now, "30d")[0].date()
    datetime.date(2024, 2, 9)
    """
    if start_date and end_date:
        return (
            parse_date_param(start_date),
            parse_date_param(end_date, end_of_day=True),
        )
    days = PERIOD_DAYS.get(period or DEFAULT_PERIOD, PERIOD_DAYS[DEFAULT_PERIOD])
    return now - timedelta(days=days), None


def weekly_trend(logs: List[WorkoutLog]) -> List[Dict[str, int]]:
    """Group logs by ISO (year, week), ascending."""
    buckets: Dict[Tuple[int, int], Dict[str, int]] = {}
    for log in logs:
        year, week, _ = log.date.isocalendar()
        bucket = buckets.setdefault(
            (year, week),
            {"year": year, "week": week, "workouts": 0, "totalExercises": 0},
        )
        bucket["workouts"] += 1
        bucket["totalExercises"] += len(log.exercises)
    return [buckets[key] for key in sorted(buckets)]


def goal_progress(
    plan: Optional[Dict[str, Any]], completed: int
) -> Optional[Dict[str, Any]]:
    """Progress towards the active plan's weekly goal. Not capped at 100."""
    if plan is None:
        return None
    weekly_goal = plan.get("days_per_week") or DEFAULT_WEEKLY_GOAL
    return {
        "weeklyGoal": weekly_goal,
        "completed": completed,
        # Halves round up
        "percentage": math.floor(completed * 100 / weekly_goal + 0.5),
        "planName": plan.get("name"),
    }


def top_template_counts(
    logs: List[WorkoutLog], limit: int = TOP_EXERCISE_LIMIT
) -> List[Tuple[str, int]]:
    """Most frequently logged template IDs, highest count first."""
    counts = Counter(ex.exercise_template_id for log in logs for ex in log.exercises)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


# =============================================================================
# Use case
# =============================================================================


@dataclass
class DashboardStats:
    """Everything the dashboard renders."""

    stats: Dict[str, int]
    weekly_trend: List[Dict[str, int]]
    goal_progress: Optional[Dict[str, Any]]
    recent_activity: List[PopulatedWorkoutLog] = field(default_factory=list)
    top_exercises: List[Dict[str, Any]] = field(default_factory=list)
    period: str = DEFAULT_PERIOD


class DashboardStatsUseCase:
    """
    Use case for the dashboard statistics endpoint.

    Usage:
        >>> use_case = DashboardStatsUseCase(template_repo, log_repo, plan_repo)
        >>> result = use_case.execute("user-1", period="30d")
        >>> result.stats["periodWorkouts"]
        4
    """

    def __init__(
        self,
        template_repo: ExerciseTemplateRepository,
        log_repo: WorkoutLogRepository,
        plan_repo: WorkoutPlanRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._template_repo = template_repo
        self._log_repo = log_repo
        self._plan_repo = plan_repo
        self._clock = clock

    def execute(
        self,
        user_id: str,
        *,
        period: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> DashboardStats:
        now = self._clock()
        start, end = resolve_window(now, period, start_date, end_date)

        stats = {
            "totalWorkouts": self._log_repo.count_by_user(user_id),
            "periodWorkouts": self._log_repo.count_by_user(user_id, start=start, end=end),
            "totalExercises": self._template_repo.count_by_user(user_id),
            "totalPlans": self._plan_repo.count_by_user(user_id),
        }

        trend_rows = self._log_repo.list_by_user(
            user_id, start=now - timedelta(days=TREND_DAYS)
        )
        trend = weekly_trend([WorkoutLog.model_validate(r) for r in trend_rows])

        active_plan = self._plan_repo.get_active(user_id)
        completed = 0
        if active_plan is not None:
            completed = self._log_repo.count_by_user(
                user_id, start=now - timedelta(days=GOAL_WINDOW_DAYS)
            )
        progress = goal_progress(active_plan, completed)

        recent_rows = self._log_repo.list_by_user(
            user_id, start=start, end=end, limit=RECENT_LIMIT
        )
        recent = populate_logs(self._template_repo, user_id, recent_rows)

        window_rows = self._log_repo.list_by_user(user_id, start=start, end=end)
        top = self._top_exercises(
            user_id, [WorkoutLog.model_validate(r) for r in window_rows]
        )

        logger.debug(
            f"Dashboard for {user_id}: {stats['periodWorkouts']} workouts since {start}"
        )
        return DashboardStats(
            stats=stats,
            weekly_trend=trend,
            goal_progress=progress,
            recent_activity=recent,
            top_exercises=top,
            period=period or DEFAULT_PERIOD,
        )

    def _top_exercises(
        self, user_id: str, logs: List[WorkoutLog]
    ) -> List[Dict[str, Any]]:
        ranked = top_template_counts(logs)
        templates: Dict[str, ExerciseTemplate] = load_templates(
            self._template_repo, user_id, [template_id for template_id, _ in ranked]
        )
        return [
            {
                "templateId": template_id,
                "count": count,
                "template": templates[template_id].model_dump(by_alias=True, mode="json"),
            }
            for template_id, count in ranked
            if template_id in templates
        ]
