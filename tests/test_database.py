"""Database bootstrap tests: engine construction, startup wait, table creation, migrations."""
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from articles_api.config import Settings, get_settings
from articles_api.database import build_engine, init_models, wait_for_database
from articles_api.errors import StorageError


@pytest.mark.asyncio
async def test_build_engine_uses_configured_url():
    engine = build_engine(Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:"))
    try:
        assert engine.url.drivername == "sqlite+aiosqlite"
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_wait_for_database_succeeds(engine_test):
    await wait_for_database(engine_test, retries=1, delay=0)


@pytest.mark.asyncio
async def test_wait_for_database_gives_up(tmp_path):
    unreachable = tmp_path / "missing" / "dir" / "articles.db"
    engine = create_async_engine(f"sqlite+aiosqlite:///{unreachable}")
    try:
        with pytest.raises(StorageError, match="after 3 attempts") as exc_info:
            await wait_for_database(engine, retries=3, delay=0)
        assert exc_info.value.operation == "connect"
        assert exc_info.value.__cause__ is not None
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_init_models_creates_articles_table():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        await init_models(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
            columns = await conn.run_sync(
                lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("articles")}
            )
        assert "articles" in tables
        assert columns == {"id", "title", "created_at"}
    finally:
        await engine.dispose()


def test_migrations_build_articles_table(tmp_path, monkeypatch):
    db_file = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
    get_settings.cache_clear()
    config = Config()
    config.set_main_option("script_location", str(Path(__file__).resolve().parents[1] / "alembic"))
    try:
        command.upgrade(config, "head")
    finally:
        get_settings.cache_clear()

    engine = create_engine(f"sqlite:///{db_file}")
    try:
        inspector = inspect(engine)
        assert {"articles", "alembic_version"} <= set(inspector.get_table_names())
        assert {c["name"] for c in inspector.get_columns("articles")} == {"id", "title", "created_at"}
    finally:
        engine.dispose()
