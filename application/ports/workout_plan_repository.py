"""
Workout Plan Repository Interface (Port).

This module defines the abstract interface for generated workout plans.
All reads and writes are owner-scoped.
"""
from typing import Protocol, Optional, List, Dict, Any


class WorkoutPlanRepository(Protocol):
    """Abstract interface for workout plan persistence."""

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a plan.

        Args:
            data: Plan dictionary including ``user_id``; ``workouts`` and
                  ``preferences`` are JSON-serializable

        Returns:
            Created plan dictionary with generated ID
        """
        ...

    def get(self, plan_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a plan owned by the user.

        Returns:
            Plan dictionary or None if missing or owned by someone else
        """
        ...

    def list_by_user(
        self,
        user_id: str,
        *,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Dict[str, Any]]:
        """
        List the user's plans, most recently generated first.
        """
        ...

    def count_by_user(self, user_id: str) -> int:
        """Count the user's plans."""
        ...

    def get_active(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the user's active plan.

        Returns the most recently generated plan with ``is_active`` set, or None.
        """
        ...

    def update(
        self, plan_id: str, user_id: str, data: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Update fields of a plan owned by the user in place.

        Returns:
            Updated plan dictionary, or None if missing or foreign
        """
        ...

    def delete(self, plan_id: str, user_id: str) -> bool:
        """
        Delete a plan owned by the user.

        Returns:
            True if deleted, False if missing or owned by someone else
        """
        ...
