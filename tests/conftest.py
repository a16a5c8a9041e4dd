"""
Pytest configuration for the person query gateway.

Provides fixtures for:
- Database connection management
- Schema bootstrap and per-test table cleanup
- A gateway bound to a test connection pool
"""

from __future__ import annotations

import os
from typing import Generator, List

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from person_gateway.config import Settings
from person_gateway.domain.models import Person
from person_gateway.gateway import PersonGateway
from person_gateway.infrastructure.db_factory import apply_schema, build_dsn


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "persons_db"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return build_dsn(test_settings)


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="session")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide a session-scoped database connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="session")
def db_schema_initialized(db_connection: psycopg.Connection) -> bool:
    """
    Ensure the persons table exists by applying the packaged init.sql.
    """
    apply_schema(db_connection)
    return True


@pytest.fixture(scope="session")
def db_pool(
    test_dsn: str, db_schema_initialized: bool
) -> Generator[ConnectionPool, None, None]:
    """
    Session-scoped pool handed to the gateway under test.
    """
    pool = ConnectionPool(conninfo=test_dsn, min_size=1, max_size=4, open=True)
    try:
        yield pool
    finally:
        pool.close()


@pytest.fixture(scope="function")
def clean_persons_table(db_connection: psycopg.Connection, db_schema_initialized: bool):
    """
    Empty the persons table (restarting ids) before and after each test.
    """
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.persons RESTART IDENTITY;")
    db_connection.commit()
    yield
    with db_connection.cursor() as cur:
        cur.execute("TRUNCATE TABLE public.persons RESTART IDENTITY;")
    db_connection.commit()


@pytest.fixture(scope="function")
def gateway(db_pool: ConnectionPool, clean_persons_table) -> PersonGateway:
    """
    Gateway over an empty persons table.
    """
    return PersonGateway(pool=db_pool)


@pytest.fixture(scope="function")
def seeded_persons(gateway: PersonGateway) -> List[Person]:
    """
    Insert four people (ids 1..4) and return them as stored.

    Name lengths are 6, 5, 6, 3.
    """
    rows = [
        ("Andres", "Guzman", "Java"),
        ("Barry", "White", "Kotlin"),
        ("Lionel", "Messi", "Python"),
        ("Leo", "Marin", "Java"),
    ]
    return [
        gateway.insert(Person(name=name, lastname=lastname, programming_language=language))
        for name, lastname, language in rows
    ]
