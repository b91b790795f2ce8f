"""
User entity.

The stored row also holds ``password_hash``; it never leaves the
infrastructure layer except for sign-in verification.
"""

from datetime import datetime
from typing import Optional

from domain.models.base import CamelModel


class UserPublic(CamelModel):
    """A user record without credentials."""

    id: str
    email: str
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
