"""
Registration and sign-in.

Both flows return a fresh session token alongside the public user fields.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from application.exceptions import ConflictError, NotFoundError, ValidationError
from application.ports import UserRepository
from backend.auth import create_access_token, hash_password, verify_password
from backend.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    token: str
    user: Dict[str, Any]


def _public_user(row: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": row["id"], "username": row.get("username"), "email": row["email"]}


def _normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class RegisterUserUseCase:
    """Create an account and sign it in."""

    def __init__(self, user_repo: UserRepository, settings: Settings) -> None:
        self._user_repo = user_repo
        self._settings = settings

    def execute(
        self,
        *,
        email: Optional[str],
        password: Optional[str],
        username: Optional[str] = None,
    ) -> AuthResult:
        """
        Raises:
            ValidationError: If email or password is missing, or the email
                             is already registered
        """
        email = _normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        if self._user_repo.get_by_email(email) is not None:
            raise ValidationError("User already exists")

        try:
            row = self._user_repo.create(
                email=email,
                password_hash=hash_password(password),
                username=username,
            )
        except ConflictError as e:
            raise ValidationError("User already exists") from e

        logger.info(f"Registered user {row['id']}")
        return AuthResult(
            token=create_access_token(row["id"], self._settings),
            user=_public_user(row),
        )


class SignInUseCase:
    """Verify credentials and issue a session token."""

    def __init__(self, user_repo: UserRepository, settings: Settings) -> None:
        self._user_repo = user_repo
        self._settings = settings

    def execute(self, *, email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Raises:
            ValidationError: If fields are missing or the password is wrong
            NotFoundError: If no account has this email
        """
        email = _normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        row = self._user_repo.get_by_email(email)
        if row is None:
            raise NotFoundError("User not found")
        if not verify_password(password, row.get("password_hash")):
            logger.info(f"Failed sign-in for user {row['id']}")
            raise ValidationError("Invalid credentials")

        return AuthResult(
            token=create_access_token(row["id"], self._settings),
            user=_public_user(row),
        )
