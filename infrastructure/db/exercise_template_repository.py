"""
Supabase implementation of ExerciseTemplateRepository.

Queries the ``exercise_templates`` table. A compound unique index on
``(user_id, name)`` guards against duplicate names, including the race
between two concurrent plan generations creating the same template.
"""
import logging
from typing import Optional, List, Dict, Any

from postgrest.exceptions import APIError
from supabase import Client

from application.exceptions import ConflictError
from infrastructure.db._errors import is_malformed_id, is_unique_violation

logger = logging.getLogger(__name__)

TABLE = "exercise_templates"


class SupabaseExerciseTemplateRepository:
    """
    Supabase implementation of ExerciseTemplateRepository protocol.

    All reads and deletes filter on ``user_id`` so one user can never see or
    remove another user's templates.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def create(self, user_id: str, name: str, type: str) -> Dict[str, Any]:
        try:
            result = self._client.table(TABLE).insert({
                "user_id": user_id,
                "name": name,
                "type": type,
            }).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise ConflictError("Exercise template with this name already exists") from e
            raise
        return result.data[0]

    def get(self, template_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(TABLE) \
                .select("*") \
                .eq("id", template_id) \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
        except APIError as e:
            if is_malformed_id(e):
                return None
            raise
        return result.data[0] if result.data else None

    def find_by_name(self, user_id: str, name: str) -> Optional[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .select("*") \
            .eq("user_id", user_id) \
            .eq("name", name) \
            .limit(1) \
            .execute()
        return result.data[0] if result.data else None

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .select("*") \
            .eq("user_id", user_id) \
            .order("created_at", desc=True) \
            .execute()
        return result.data or []

    def get_many(self, user_id: str, template_ids: List[str]) -> List[Dict[str, Any]]:
        ids = sorted(set(template_ids))
        if not ids:
            return []
        result = self._client.table(TABLE) \
            .select("*") \
            .eq("user_id", user_id) \
            .in_("id", ids) \
            .execute()
        return result.data or []

    def delete(self, template_id: str, user_id: str) -> bool:
        try:
            result = self._client.table(TABLE) \
                .delete() \
                .eq("id", template_id) \
                .eq("user_id", user_id) \
                .execute()
        except APIError as e:
            if is_malformed_id(e):
                return False
            raise
        deleted = len(result.data or []) > 0
        if deleted:
            logger.info(f"Deleted exercise template {template_id} for user {user_id}")
        return deleted

    def count_by_user(self, user_id: str) -> int:
        result = self._client.table(TABLE) \
            .select("id", count="exact") \
            .eq("user_id", user_id) \
            .execute()
        return result.count or 0
