"""
PostgreSQL repository adapter - Implements CredentialRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Storage layout:
- user_info(user_id, username UNIQUE, email UNIQUE)
- user_password(user_id -> user_info, password_hash)

Atomicity Design:
-----------------
insert_credential writes both rows inside one transaction. The UNIQUE
constraints on user_info.username and user_info.email are the final
authority on uniqueness: a concurrent registration that slipped past the
domain's pre-checks fails here with UniqueViolation, the transaction is
rolled back, and the violated constraint name tells which field clashed.
"""

import logging
from pathlib import Path
from uuid import UUID

import psycopg
from psycopg import errors
from psycopg_pool import ConnectionPool

from src.domain.email_address import EmailAddress
from src.domain.exceptions import CredentialStoreError
from src.domain.ports import InsertResult, StoredCredential
from src.domain.username import Username

logger = logging.getLogger(__name__)

_USERNAME_CONSTRAINT = "user_info_username_key"
_EMAIL_CONSTRAINT = "user_info_email_key"

_SELECT_CREDENTIAL = """
    SELECT ui.user_id, ui.username, ui.email, up.password_hash
    FROM user_info AS ui
    JOIN user_password AS up ON ui.user_id = up.user_id
"""


class PostgresCredentialRepository:
    """
    Implements CredentialRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def find_by_username(self, username: Username) -> StoredCredential | None:
        sql = _SELECT_CREDENTIAL + " WHERE ui.username = %s"
        return self._fetch_credential(sql, (username.value,))

    def find_by_id(self, credential_id: UUID) -> StoredCredential | None:
        sql = _SELECT_CREDENTIAL + " WHERE ui.user_id = %s"
        return self._fetch_credential(sql, (credential_id,))

    def username_exists(self, username: Username) -> bool:
        return self._exists("SELECT EXISTS(SELECT 1 FROM user_info WHERE username = %s)", username.value)

    def email_exists(self, email: EmailAddress) -> bool:
        return self._exists("SELECT EXISTS(SELECT 1 FROM user_info WHERE email = %s)", email.value)

    def insert_credential(self, credential: StoredCredential) -> InsertResult:
        """
        Atomically insert identity and password-hash rows.

        Returns:
            INSERTED on commit; USERNAME_TAKEN or EMAIL_TAKEN if a unique
            constraint rejected the write (transaction rolled back)
        """
        info_sql = "INSERT INTO user_info (user_id, username, email) VALUES (%s, %s, %s)"
        password_sql = "INSERT INTO user_password (user_id, password_hash) VALUES (%s, %s)"

        try:
            with self._pool.connection() as conn:
                try:
                    with conn.transaction(), conn.cursor() as cursor:
                        cursor.execute(
                            info_sql,
                            (credential.id, credential.username.value, credential.email.value),
                        )
                        cursor.execute(password_sql, (credential.id, credential.password_hash))
                except errors.UniqueViolation as e:
                    return self._classify_conflict(e)
        except psycopg.Error as e:
            raise CredentialStoreError("Failed to insert credential") from e

        return InsertResult.INSERTED

    def update_password_hash(self, credential_id: UUID, password_hash: str) -> None:
        sql = "UPDATE user_password SET password_hash = %s WHERE user_id = %s"
        try:
            with self._pool.connection() as conn:
                conn.execute(sql, (password_hash, credential_id))
                conn.commit()
        except psycopg.Error as e:
            raise CredentialStoreError("Failed to update password hash") from e

    def ping(self) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as e:
            raise CredentialStoreError("Database unreachable") from e

    def _fetch_credential(self, sql: str, params: tuple) -> StoredCredential | None:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, params)
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise CredentialStoreError("Failed to fetch stored credential") from e

        if row is None:
            return None
        return StoredCredential(
            id=row[0],
            username=Username(row[1]),
            email=EmailAddress(row[2]),
            password_hash=row[3],
        )

    def _exists(self, sql: str, value: str) -> bool:
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (value,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            raise CredentialStoreError("Failed to check uniqueness") from e
        return bool(row and row[0])

    @staticmethod
    def _classify_conflict(error: errors.UniqueViolation) -> InsertResult:
        constraint = error.diag.constraint_name
        if constraint == _USERNAME_CONSTRAINT:
            return InsertResult.USERNAME_TAKEN
        if constraint == _EMAIL_CONSTRAINT:
            return InsertResult.EMAIL_TAKEN
        # Primary key clash on a random UUID4 is not a user-facing conflict.
        raise CredentialStoreError(f"Unexpected unique violation on {constraint}") from error


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
