"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A fast Argon2id hasher (low cost parameters)
- Database connection pool with migrations applied
- Table cleanup between database-backed tests
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.hashing.argon2id import Argon2PasswordHasher
from src.adapters.repository.postgres import PostgresCredentialRepository, run_migrations
from src.config.settings import get_settings

# Cheap parameters: unit tests exercise behavior, not cost.
FAST_ARGON2 = {"time_cost": 1, "memory_cost": 1024, "parallelism": 1}


@pytest.fixture
def hasher() -> Argon2PasswordHasher:
    """Argon2id hasher with low cost parameters."""
    return Argon2PasswordHasher(**FAST_ARGON2)


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against the configured database, migrations applied.

    Skips the requesting test when PostgreSQL is not reachable.
    """
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=3)
    except (PoolTimeout, psycopg.OperationalError):
        pool.close()
        pytest.skip("PostgreSQL is not available")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresCredentialRepository:
    """Create repository instance for each test."""
    return PostgresCredentialRepository(pool)


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean credential tables before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM user_password")
        conn.execute("DELETE FROM user_info")
        conn.commit()
    yield
