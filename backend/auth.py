"""
Token and password helpers for the auth gate.

- User session tokens: HS256, ``sub`` = user id, 1 day lifetime by default.
- Service tokens: HS256, ``typ`` = "service", short-lived, used to sign
  requests to the workout-generation webhook and accepted back from it.
- Passwords are hashed with bcrypt.

All functions take the Settings instance explicitly; nothing here reads the
environment.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from application.exceptions import AuthenticationError
from backend.settings import Settings

logger = logging.getLogger(__name__)

SERVICE_TOKEN_TYPE = "service"


# ============================================================================
# Passwords
# ============================================================================

def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against a bcrypt hash.

    Returns False for a missing or malformed hash instead of raising.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ============================================================================
# Tokens
# ============================================================================

def create_access_token(user_id: str, settings: Settings) -> str:
    """
    Create a session token for a user.

    Args:
        user_id: The user's ID
        settings: Application settings (secret, algorithm, lifetime)

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "iat": now,
        "exp": now + timedelta(days=settings.access_token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_service_token(settings: Settings) -> str:
    """Create a short-lived token for signing webhook requests."""
    now = datetime.now(timezone.utc)
    payload = {
        "typ": SERVICE_TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(minutes=settings.service_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        AuthenticationError: If the token is expired or invalid
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Not authorized, token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise AuthenticationError("Not authorized, token failed")


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Raises:
        AuthenticationError: If the header is missing or malformed
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthenticationError("Not authorized, no token")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise AuthenticationError("Not authorized, no token")
    return token


def is_service_token(claims: Dict[str, Any]) -> bool:
    return claims.get("typ") == SERVICE_TOKEN_TYPE
