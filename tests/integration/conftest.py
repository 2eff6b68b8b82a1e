import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from flowboard.config.settings import Settings
from flowboard.database.connection import close_pool, get_connection, init_pool
from flowboard.database.exceptions import RecordStoreError
from flowboard.database.schema import apply_schema


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "flowboard_test")
    os.environ.setdefault("DB_POOL_TIMEOUT_SECONDS", "3")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except (psycopg.Error, RecordStoreError) as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[tuple[str, Any]], None, None]:
    cleanup: list[tuple[str, Any]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "uploaded_files":
                    cur.execute("DELETE FROM uploaded_files WHERE id = %s", (row_id,))
                elif table == "workflow_logs":
                    cur.execute("DELETE FROM workflow_logs WHERE id = %s", (row_id,))
        conn.commit()
