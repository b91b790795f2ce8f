"""
Workout Log Repository Interface (Port).

This module defines the abstract interface for the per-day workout journal.
"""
from datetime import datetime
from typing import Protocol, Optional, List, Dict, Any


class WorkoutLogRepository(Protocol):
    """
    Abstract interface for workout log persistence.

    A user has at most one log per calendar day. Timestamps are timezone-aware.
    """

    def append_exercise(
        self,
        user_id: str,
        day_start: datetime,
        exercise: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Append a performance to the user's log for the day starting at day_start.

        The log is found (``date >= day_start``) or created, and the exercise
        appended, as a single atomic operation.

        Args:
            user_id: Owner ID
            day_start: Start of the current calendar day
            exercise: Performance dict (exercise_template_id, reps, time, performed_at)

        Returns:
            The updated log dictionary
        """
        ...

    def list_by_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List the user's logs, newest first.

        Args:
            user_id: Owner ID
            start: Only logs with ``date >= start``
            end: Only logs with ``date <= end``
            limit: Maximum logs to return

        Returns:
            List of log dictionaries
        """
        ...

    def count_by_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        """Count the user's logs, optionally within a date window."""
        ...
