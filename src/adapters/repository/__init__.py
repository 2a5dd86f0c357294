"""Repository adapters - Database implementations."""

from .postgres import PostgresCredentialRepository, run_migrations

__all__ = ["PostgresCredentialRepository", "run_migrations"]
