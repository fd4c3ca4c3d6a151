# src/stackit/api/v1/endpoints/users.py
"""User listing and administration endpoints."""

from collections.abc import Sequence

from fastapi import APIRouter, Query

from stackit.models import User
from stackit.schemas.user import UserAdminUpdate, UserResponse
from stackit.services import users as user_service

from ..dependencies import AdminUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserResponse])
def list_users(
    db: SessionDep,
    search: str | None = Query(None, description="Substring filter on username or email"),
    skip: int = Query(0, ge=0),
    limit: int = Query(10, ge=1, le=100),
) -> Sequence[User]:
    """List accounts, newest first."""
    return user_service.get_users(db, search=search, skip=skip, limit=limit)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: UserAdminUpdate,
    admin: AdminUserDep,
    db: SessionDep,
) -> User:
    """Ban/unban an account or change its role (administrators only)."""
    return user_service.update_user_admin(db, user_id, payload)
