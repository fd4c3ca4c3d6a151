# tests/test_migrations.py
"""Tests for the Alembic migration helpers."""

from sqlalchemy import create_engine, inspect

from stackit.core.settings import settings
from stackit.scripts.migrate import PROJECT_ROOT, build_config, run_upgrade_head


def test_build_config_points_at_migrations() -> None:
    cfg = build_config("sqlite:///example.db")

    assert cfg.get_main_option("script_location") == str(PROJECT_ROOT / "migrations")
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///example.db"


def test_upgrade_head_creates_schema(tmp_path) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"

    run_upgrade_head(url)

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        vote_pk = inspector.get_pk_constraint("votes")["constrained_columns"]
        question_fks = inspector.get_foreign_keys("questions")
    finally:
        engine.dispose()

    assert {"users", "tags", "questions", "answers", "question_tags", "votes"} <= tables
    assert vote_pk == ["user_id", "target_type", "target_id"]
    assert any(fk["referred_table"] == "answers" for fk in question_fks)


def test_build_config_defaults_to_configured_database() -> None:
    cfg = build_config()

    assert cfg.get_main_option("sqlalchemy.url") == settings.effective_database_url
