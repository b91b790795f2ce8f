"""
Supabase implementation of WorkoutPlanRepository.

Queries the ``workout_plans`` table. Sessions and preferences are stored as
jsonb columns so each plan is a single row updated atomically.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from postgrest.exceptions import APIError
from supabase import Client

from infrastructure.db._errors import is_malformed_id

logger = logging.getLogger(__name__)

TABLE = "workout_plans"


class SupabaseWorkoutPlanRepository:
    """Supabase implementation of WorkoutPlanRepository protocol."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        result = self._client.table(TABLE).insert(data).execute()
        plan = result.data[0]
        logger.info(f"Created workout plan {plan.get('id')} for user {plan.get('user_id')}")
        return plan

    def get(self, plan_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("id", plan_id) \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
        except APIError as e:
            if is_malformed_id(e):
                return None
            raise
        return result.data[0] if result.data else None

    def list_by_user(
        self,
        user_id: str,
        *,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .select("*") \
            .eq("user_id", user_id) \
            .order("generated_at", desc=True) \
            .range(offset, offset + limit - 1) \
            .execute()
        return result.data or []

    def count_by_user(self, user_id: str) -> int:
        result = self._client.table(TABLE) \
            .select("id", count="exact") \
            .eq("user_id", user_id) \
            .execute()
        return result.count or 0

    def get_active(self, user_id: str) -> Optional[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .select("*") \
            .eq("user_id", user_id) \
            .eq("is_active", True) \
            .order("generated_at", desc=True) \
            .limit(1) \
            .execute()
        return result.data[0] if result.data else None

    def update(
        self, plan_id: str, user_id: str, data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        try:
            result = self._client.table(TABLE) \
                .update(payload) \
                .eq("id", plan_id) \
                .eq("user_id", user_id) \
                .execute()
        except APIError as e:
            if is_malformed_id(e):
                return None
            raise
        return result.data[0] if result.data else None

    def delete(self, plan_id: str, user_id: str) -> bool:
        try:
            result = self._client.table(TABLE) \
                .delete() \
                .eq("id", plan_id) \
                .eq("user_id", user_id) \
                .execute()
        except APIError as e:
            if is_malformed_id(e):
                return False
            raise
        return len(result.data or []) > 0
