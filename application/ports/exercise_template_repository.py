"""
Exercise Template Repository Interface (Port).

This module defines the abstract interface for the per-user exercise template
catalog. All reads and deletes are owner-scoped.
"""
from typing import Protocol, Optional, List, Dict, Any


class ExerciseTemplateRepository(Protocol):
    """
    Abstract interface for exercise template persistence.

    Implementations must enforce uniqueness of (user_id, name) at the storage
    layer and surface violations as ConflictError.
    """

    def create(self, user_id: str, name: str, type: str) -> Dict[str, Any]:
        """
        Create a template.

        Args:
            user_id: Owner ID
            name: Template name (already trimmed)
            type: Measurement type value

        Returns:
            Created template dictionary

        Raises:
            ConflictError: If the owner already has a template with this name
        """
        ...

    def get(self, template_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a template owned by the user.

        Returns:
            Template dictionary or None if missing or owned by someone else
        """
        ...

    def find_by_name(self, user_id: str, name: str) -> Optional[Dict[str, Any]]:
        """Find the owner's template with exactly this name."""
        ...

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """
        List the owner's templates, newest first.
        """
        ...

    def get_many(self, user_id: str, template_ids: List[str]) -> List[Dict[str, Any]]:
        """
        Get the owner's templates among the given IDs.

        Unknown or foreign IDs are silently omitted.
        """
        ...

    def delete(self, template_id: str, user_id: str) -> bool:
        """
        Delete a template owned by the user.

        Returns:
            True if deleted, False if missing or owned by someone else
        """
        ...

    def count_by_user(self, user_id: str) -> int:
        """Count the owner's templates."""
        ...
