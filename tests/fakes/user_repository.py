"""
Fake User Repository for testing.

This module provides an in-memory implementation of UserRepository
for fast, isolated testing without database dependencies.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import uuid

from application.exceptions import ConflictError


class FakeUserRepository:
    """
    In-memory fake implementation of UserRepository for testing.

    Usage:
        repo = FakeUserRepository()
        repo.seed([{"id": "u1", "email": "a@example.com", "password_hash": "..."}])
    """

    def __init__(self):
        """Initialize with empty storage."""
        self._users: Dict[str, Dict[str, Any]] = {}

    def reset(self) -> None:
        self._users.clear()

    def seed(self, users: List[Dict[str, Any]]) -> None:
        for user in users:
            user_id = user.get("id") or str(uuid.uuid4())
            self._users[user_id] = {"username": None, **user, "id": user_id}

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all stored users, hashes included (test helper)."""
        return list(self._users.values())

    # =========================================================================
    # UserRepository Protocol Methods
    # =========================================================================

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        user = self._users.get(user_id)
        if user is None:
            return None
        return {k: v for k, v in user.items() if k != "password_hash"}

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        for user in self._users.values():
            if user.get("email") == email:
                return dict(user)
        return None

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        username: Optional[str] = None,
    ) -> Dict[str, Any]:
        if self.get_by_email(email) is not None:
            raise ConflictError("User already exists")
        now = datetime.now(timezone.utc).isoformat()
        user_id = str(uuid.uuid4())
        self._users[user_id] = {
            "id": user_id,
            "email": email,
            "password_hash": password_hash,
            "username": username,
            "status": "active",
            "created_at": now,
            "updated_at": now,
        }
        return self.get_by_id(user_id)
