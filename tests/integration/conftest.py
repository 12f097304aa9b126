"""
Shared fixtures for integration tests against PostgreSQL.

Tests using the `pool` fixture are skipped when the database from
Settings.database_url is unreachable.
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import (
    PostgresAddressBookRepository,
    PostgresContactRepository,
    run_migrations,
)
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def database_url() -> str:
    """Database URL, skipping the test when PostgreSQL is not reachable."""
    url = get_settings().database_url
    try:
        with psycopg.connect(url, connect_timeout=2):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")
    return url


@pytest.fixture(scope="module")
def pool(database_url: str) -> Generator[ConnectionPool, None, None]:
    """Create connection pool with the schema applied."""
    pool = ConnectionPool(conninfo=database_url, min_size=1, max_size=10, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def clean_database(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Empty both tables before each test that uses the database."""
    if "pool" in request.fixturenames:
        pool = request.getfixturevalue("pool")
        with pool.connection() as conn:
            conn.execute("TRUNCATE contacts, address_books RESTART IDENTITY CASCADE")
            conn.commit()
    yield


@pytest.fixture
def book_repository(pool: ConnectionPool) -> PostgresAddressBookRepository:
    """Create address book repository for each test."""
    return PostgresAddressBookRepository(pool)


@pytest.fixture
def contact_repository(pool: ConnectionPool) -> PostgresContactRepository:
    """Create contact repository for each test."""
    return PostgresContactRepository(pool)
