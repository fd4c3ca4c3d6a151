# src/stackit/api/v1/endpoints/auth.py
"""Authentication endpoints for the StackIt API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from stackit.core.security import create_access_token
from stackit.models import User
from stackit.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from stackit.services import users as user_service

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
)
def register_user(payload: RegisterRequest, db: SessionDep) -> User:
    """Create an account; username and email must be unused."""
    user = user_service.create_user(db, payload)
    logger.info("Registered user %s", user.id)
    return user


@router.post(
    "/login",
    summary="Exchange credentials for an access token",
    response_model=LoginResponse,
)
def login_user(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Authenticate with email and password."""
    user = user_service.authenticate(db, payload.email, payload.password)
    access_token = create_access_token(user.id, {"role": user.role})
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: CurrentUserDep) -> User:
    """Return the authenticated account."""
    return current_user
