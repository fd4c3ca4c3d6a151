# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from stackit.core.security import hash_password
from stackit.db.session import Base, enable_sqlite_savepoints
from stackit.db.session import get_db as app_get_session
from stackit.main import app as fastapi_app
from stackit.models import Answer, Question, Tag, User
from stackit.models.user import ROLE_ADMIN, ROLE_USER
from tests.utils import TEST_PASSWORD, bearer

TEST_DB_URL = "sqlite://"
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    # Every session-level transaction becomes a SAVEPOINT on the outer
    # connection transaction, so service commits and rollbacks stay inside it.
    SessionLocal = sessionmaker(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db: Session, username: str, role: str = ROLE_USER) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash=_TEST_PASSWORD_HASH,
        role=role,
    )
    db.add(user)
    db.flush()
    db.refresh(user)
    return user


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Primary account; authors the default question."""
    return _make_user(db_session, "asker")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Secondary account; authors the default answer."""
    return _make_user(db_session, "helper")


@pytest.fixture()
def third_user(db_session: Session) -> User:
    return _make_user(db_session, "bystander")


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    return _make_user(db_session, "moderator", role=ROLE_ADMIN)


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return bearer(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    return bearer(other_user)


@pytest.fixture()
def third_auth_token(third_user: User) -> dict[str, str]:
    return bearer(third_user)


@pytest.fixture()
def admin_auth_token(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def question(db_session: Session, test_user: User) -> Question:
    """A question by ``test_user`` tagged 'python'."""
    question = Question(
        title="How do I reverse a list?",
        description="I need the items of a list in the opposite order.",
        author_id=test_user.id,
        tags=[Tag(name="python", description="Tag for python")],
    )
    db_session.add(question)
    db_session.flush()
    db_session.refresh(question)
    return question


@pytest.fixture()
def other_question(db_session: Session, other_user: User) -> Question:
    question = Question(
        title="Why is my loop slow?",
        description="A simple for loop takes minutes to finish.",
        author_id=other_user.id,
    )
    db_session.add(question)
    db_session.flush()
    db_session.refresh(question)
    return question


def _make_answer(db: Session, question: Question, author: User, content: str) -> Answer:
    answer = Answer(content=content, author_id=author.id, question_id=question.id)
    db.add(answer)
    db.flush()
    db.refresh(answer)
    return answer


@pytest.fixture()
def answer(db_session: Session, question: Question, other_user: User) -> Answer:
    return _make_answer(db_session, question, other_user, "Use reversed() or slicing [::-1].")


@pytest.fixture()
def second_answer(db_session: Session, question: Question, third_user: User) -> Answer:
    return _make_answer(db_session, question, third_user, "Call list.reverse() to sort it in place.")
