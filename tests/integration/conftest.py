import os
from collections.abc import Callable, Generator
from typing import Any

import psycopg
import pytest

from pinsweep.config.settings import Settings
from pinsweep.database.connection import close_pool, get_connection, init_pool
from pinsweep.database.schema import ensure_schema


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "pinsweep_test")
    return Settings(passcode_length=3, batch_count=10, db_pool_max_size=8)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        ensure_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at it")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture(autouse=True)
def clean_tables(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    if request.node.get_closest_marker("integration") is None:
        yield
        return
    request.getfixturevalue("integration_pool")
    with get_connection() as conn:
        conn.execute("TRUNCATE trial_batches, file_tasks RESTART IDENTITY CASCADE")
        conn.commit()
    yield


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


def _insert_file(
    db_conn: psycopg.Connection[Any],
    path: str,
    status: str = "pending",
    fingerprint: str = "f" * 64,
    found_passcode: str | None = None,
) -> int:
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO file_tasks (file_path, fingerprint, status, found_passcode)
            VALUES (%s, %s, %s, %s)
            RETURNING id
            """,
            (path, fingerprint, status, found_passcode),
        )
        row = cur.fetchone()
        assert row is not None
    db_conn.commit()
    return int(row[0])


@pytest.fixture
def make_file(db_conn: psycopg.Connection[Any]) -> Callable[..., int]:
    """Insert a file_tasks row directly and return its id."""

    def _make(path: str, **kwargs: Any) -> int:
        return _insert_file(db_conn, path, **kwargs)

    return _make


@pytest.fixture
def seed_file(make_file: Callable[..., int]) -> int:
    return make_file("/data/a.pdf")


@pytest.fixture
def age_checkout(db_conn: psycopg.Connection[Any]) -> Callable[[int, float], None]:
    """Pretend a batch was checked out `minutes` ago."""

    def _age(batch_id: int, minutes: float) -> None:
        _age_checkout(db_conn, batch_id, minutes)

    return _age


def _age_checkout(db_conn: psycopg.Connection[Any], batch_id: int, minutes: float) -> None:
    db_conn.execute(
        """
        UPDATE trial_batches
        SET checked_out_at = NOW() - make_interval(secs => %s)
        WHERE id = %s
        """,
        (minutes * 60, batch_id),
    )
    db_conn.commit()
