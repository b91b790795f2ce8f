"""
Users router for registration and sign-in.

This router contains endpoints for:
- POST /api/user/create - Register and receive a session token
- POST /api/user/signin - Sign in and receive a session token
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from api.deps import get_register_use_case, get_signin_use_case
from application.use_cases import RegisterUserUseCase, SignInUseCase

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/user",
    tags=["Users"],
)


# =============================================================================
# Request Models
# =============================================================================


class CreateUserRequest(BaseModel):
    """Request model for registration."""
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SignInRequest(BaseModel):
    """Request model for sign-in."""
    email: Optional[str] = None
    password: Optional[str] = None


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/create", status_code=status.HTTP_201_CREATED)
def create_user(
    request: CreateUserRequest,
    use_case: RegisterUserUseCase = Depends(get_register_use_case),
):
    """
    Register a new account.

    Returns:
        Session token and the public user fields
    """
    result = use_case.execute(
        email=request.email,
        password=request.password,
        username=request.username,
    )
    return {"token": result.token, "user": result.user}


@router.post("/signin")
def sign_in(
    request: SignInRequest,
    use_case: SignInUseCase = Depends(get_signin_use_case),
):
    """Sign in with email and password."""
    result = use_case.execute(email=request.email, password=request.password)
    return {"token": result.token, "user": result.user}
