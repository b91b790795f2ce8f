"""
User Repository Interface (Port).

This module defines the abstract interface for the credential store.
"""
from typing import Protocol, Optional, Dict, Any


class UserRepository(Protocol):
    """
    Abstract interface for user persistence.

    Rows returned by get_by_id never include ``password_hash``; rows returned
    by get_by_email do, so sign-in can verify credentials.
    """

    def get_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a user by ID, without the password hash.

        Args:
            user_id: The user's ID

        Returns:
            User dictionary or None if not found
        """
        ...

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Get a user by email, including the password hash.

        Args:
            email: Email address (exact match)

        Returns:
            User dictionary or None if not found
        """
        ...

    def create(
        self,
        *,
        email: str,
        password_hash: str,
        username: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a user.

        Returns:
            Created user dictionary, without the password hash

        Raises:
            ConflictError: If the email is already registered
        """
        ...
