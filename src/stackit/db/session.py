"""Database session configuration.

The engine and session factory are built once per process from settings and
shared by every request through :func:`get_db`.
"""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from stackit.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import stackit.models  # noqa: E402,F401


def enable_sqlite_savepoints(sqlite_engine: Engine) -> None:
    """Let pysqlite honour SAVEPOINTs and serialize writers.

    The driver otherwise emits its own BEGIN lazily, which breaks
    ``Session.begin_nested()``; the vote ledger and tag creation rely on it.
    Transactions start with ``BEGIN IMMEDIATE`` so concurrent read-then-write
    transactions queue on the busy timeout rather than failing the SHARED to
    RESERVED lock upgrade with "database is locked".
    """

    @event.listens_for(sqlite_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


_is_sqlite = settings.effective_database_url.startswith("sqlite")

engine = create_engine(
    settings.effective_database_url,
    pool_pre_ping=True,
    echo=settings.sql_debug,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)
if _is_sqlite:
    enable_sqlite_savepoints(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
