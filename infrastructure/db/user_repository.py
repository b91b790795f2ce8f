"""
Supabase implementation of UserRepository.

Queries the ``users`` table. Emails are unique (enforced by index).
"""
import logging
from typing import Optional, Dict, Any

from postgrest.exceptions import APIError
from supabase import Client

from application.exceptions import ConflictError
from infrastructure.db._errors import is_malformed_id, is_unique_violation

logger = logging.getLogger(__name__)

TABLE = "users"

# Every column except password_hash
PUBLIC_COLUMNS = "id, email, username, first_name, last_name, status, created_at, updated_at"


class SupabaseUserRepository:
    """Supabase implementation of UserRepository protocol."""

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self._client.table(TABLE) \
                .select(PUBLIC_COLUMNS) \
                .eq("id", user_id) \
                .limit(1) \
                .execute()
        except APIError as e:
            if is_malformed_id(e):
                return None
            raise
        return result.data[0] if result.data else None

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        result = self._client.table(TABLE) \
            .select("*") \
            .eq("email", email) \
            .limit(1) \
            .execute()
        return result.data[0] if result.data else None

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        username: Optional[str] = None,
    ) -> Dict[str, Any]:
        try:
            result = self._client.table(TABLE).insert({
                "email": email,
                "password_hash": password_hash,
                "username": username,
            }).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise ConflictError("User already exists") from e
            raise
        user = dict(result.data[0])
        user.pop("password_hash", None)
        logger.info(f"Created user {user.get('id')}")
        return user
