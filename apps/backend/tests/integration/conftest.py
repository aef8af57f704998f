"""
Name: Integration Test DB Setup

Responsibilities:
  - Ensure database schema exists before integration tests run
  - Run Alembic migrations once per test session
  - Open the process pool and wipe scheduler tables between tests

Notes:
  - Only runs when RUN_INTEGRATION=1
  - Uses DATABASE_URL from environment (see alembic/env.py)
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from psycopg import connect

from scheduler.crosscutting.config import get_settings
from scheduler.infrastructure.db.pool import close_pool, get_pool, init_pool

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")
DB_PORT = os.getenv("POSTGRES_HOST_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "scheduler")
DEFAULT_DATABASE_URL = (
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)


def _check_reachable(url: str) -> None:
    try:
        with connect(url, autocommit=True, connect_timeout=2) as conn:
            conn.execute("SELECT 1")
    except Exception as exc:
        raise RuntimeError(
            "Integration tests need a reachable PostgreSQL. "
            "Set DATABASE_URL or start the local database."
        ) from exc


if os.getenv("RUN_INTEGRATION") == "1":
    os.environ.setdefault("DATABASE_URL", DEFAULT_DATABASE_URL)
    get_settings.cache_clear()


@pytest.fixture(scope="session", autouse=True)
def apply_migrations() -> None:
    """Run Alembic migrations for integration tests."""
    if os.getenv("RUN_INTEGRATION") != "1":
        return

    _check_reachable(os.environ["DATABASE_URL"])

    backend_dir = Path(__file__).resolve().parents[2]
    config = Config(str(backend_dir / "alembic.ini"))
    config.set_main_option("script_location", str(backend_dir / "alembic"))

    command.upgrade(config, "head")


@pytest.fixture(scope="session", autouse=True)
def init_db_pool(apply_migrations) -> None:
    if os.getenv("RUN_INTEGRATION") != "1":
        yield
        return

    settings = get_settings()
    init_pool(
        database_url=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    yield
    close_pool()


@pytest.fixture(autouse=True)
def clean_tables(init_db_pool) -> None:
    if os.getenv("RUN_INTEGRATION") != "1":
        yield
        return

    with get_pool().connection() as conn:
        conn.execute(
            "TRUNCATE duty_assignments, reservations, duties, users "
            "RESTART IDENTITY CASCADE"
        )
    yield
