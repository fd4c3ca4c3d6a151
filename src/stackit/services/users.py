"""CRUD-style helpers for managing users."""
from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stackit.core import security
from stackit.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from stackit.models import User
from stackit.models.user import ROLE_USER
from stackit.schemas.user import RegisterRequest, UserAdminUpdate

__all__ = [
    "get_user",
    "get_users",
    "create_user",
    "authenticate",
    "update_user_admin",
]


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_users(
    db: Session,
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[User]:
    """Return users, newest first, with simple offset-based pagination."""
    stmt = select(User)
    if search:
        pattern = f"%{search.strip()}%"
        stmt = stmt.where(or_(User.username.ilike(pattern), User.email.ilike(pattern)))
    stmt = stmt.order_by(User.created_at.desc(), User.id.desc()).offset(skip).limit(limit)
    return db.scalars(stmt).all()


def create_user(db: Session, payload: RegisterRequest) -> User:
    """Persist a new account with a hashed password.

    Raises:
        ConflictError: If the username or email is already registered.
    """
    existing = db.scalar(
        select(User).where(or_(User.email == payload.email, User.username == payload.username))
    )
    if existing is not None:
        raise ConflictError("User with this email or username already exists")

    db_user = User(
        username=payload.username,
        email=payload.email,
        password_hash=security.hash_password(payload.password),
        role=ROLE_USER,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("User with this email or username already exists") from err
    db.refresh(db_user)
    return db_user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the account matching the credentials.

    Raises:
        UnauthorizedError: If the email is unknown or the password is wrong.
        ForbiddenError: If the account is banned.
    """
    user = db.scalar(select(User).where(User.email == email.strip().lower()))
    if user is None or not security.verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")
    if user.is_banned:
        raise ForbiddenError("Your account has been banned")
    return user


def update_user_admin(db: Session, user_id: int, update_data: UserAdminUpdate) -> User:
    """Apply an admin's ban/role change to an account."""
    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User not found")

    for key, value in update_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    return db_user
