"""
LogExercise Use Case.

Records a performance of one of the caller's exercise templates in the
caller's log for today. The first log of a calendar day creates the day's
entry; later logs that day are appended to it.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from application.exceptions import ValidationError
from application.ports import ExerciseTemplateRepository, WorkoutLogRepository
from domain.models import PopulatedWorkoutLog, WorkoutLog
from application.use_cases.population import load_templates, populate_log

logger = logging.getLogger(__name__)


def local_now() -> datetime:
    """Current time as an aware datetime in the server's local timezone."""
    return datetime.now().astimezone()


def start_of_day(moment: datetime) -> datetime:
    """Midnight at the start of ``moment``'s calendar day, same timezone."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


class LogExerciseUseCase:
    """
    Use case for logging an exercise performance.

    Usage:
        >>> use_case = LogExerciseUseCase(template_repo, log_repo)
        >>> log = use_case.execute("user-1", "template-1", reps=20)
        >>> len(log.exercises)
        1
    """

    def __init__(
        self,
        template_repo: ExerciseTemplateRepository,
        log_repo: WorkoutLogRepository,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        """
        Args:
            template_repo: Repository used to check template ownership
            log_repo: Repository holding the daily logs
            clock: Returns the current aware datetime
        """
        self._template_repo = template_repo
        self._log_repo = log_repo
        self._clock = clock

    def execute(
        self,
        user_id: str,
        template_id: str,
        *,
        reps: Optional[int] = None,
        time: Optional[float] = None,
    ) -> PopulatedWorkoutLog:
        """
        Append a performance to today's log.

        Raises:
            ValidationError: If the template is missing or not owned by the caller
        """
        if not template_id:
            raise ValidationError("no template id")

        template = self._template_repo.get(template_id, user_id)
        if template is None:
            raise ValidationError("no exercise")

        now = self._clock()
        exercise = {
            "exercise_template_id": template["id"],
            "reps": reps,
            "time": time,
            "performed_at": now.isoformat(),
        }
        row = self._log_repo.append_exercise(user_id, start_of_day(now), exercise)
        logger.info(f"Logged exercise {template_id} for user {user_id}")

        log = WorkoutLog.model_validate(row)
        templates = load_templates(
            self._template_repo,
            user_id,
            {ex.exercise_template_id for ex in log.exercises},
        )
        return populate_log(log, templates)
