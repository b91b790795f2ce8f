"""
Supabase implementation of WorkoutLogRepository.

Queries the ``workout_logs`` table. Logged exercises live in the ``exercises``
jsonb column; appending goes through the ``append_workout_log_exercise``
stored procedure so find-or-create and append happen in one transaction.
"""
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any

from supabase import Client

logger = logging.getLogger(__name__)

TABLE = "workout_logs"


class SupabaseWorkoutLogRepository:
    """Supabase implementation of WorkoutLogRepository protocol."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def append_exercise(
        self,
        user_id: str,
        day_start: datetime,
        exercise: Dict[str, Any],
    ) -> Dict[str, Any]:
        result = self._client.rpc(
            "append_workout_log_exercise",
            {
                "p_user_id": user_id,
                "p_day_start": day_start.isoformat(),
                "p_exercise": exercise,
            },
        ).execute()
        data = result.data
        # Set-returning functions come back as a one-element list
        if isinstance(data, list):
            data = data[0]
        return data

    def _query(
        self,
        columns: str,
        user_id: str,
        start: Optional[datetime],
        end: Optional[datetime],
        count: Optional[str] = None,
    ):
        query = self._client.table(TABLE).select(columns, count=count).eq("user_id", user_id)
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        return query

    def list_by_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = self._query("*", user_id, start, end).order("date", desc=True)
        if limit is not None:
            query = query.limit(limit)
        result = query.execute()
        return result.data or []

    def count_by_user(
        self,
        user_id: str,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> int:
        result = self._query("id", user_id, start, end, count="exact").execute()
        return result.count or 0
