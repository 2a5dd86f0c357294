"""
Application composition root.

Wires settings, the PostgreSQL pool, the Argon2id hasher and the domain
services together, and exposes async entry points for a concurrent
request-handling layer.

Password hashing and verification are CPU-bound and deliberately slow.
Every operation is therefore dispatched to a bounded thread pool, so an
in-flight hash never stalls the event loop serving other requests.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, TypeVar
from uuid import UUID

from psycopg_pool import ConnectionPool

from src.adapters.hashing.argon2id import Argon2PasswordHasher
from src.adapters.repository.postgres import PostgresCredentialRepository, run_migrations
from src.config.settings import Settings, get_settings
from src.domain.authentication import AuthenticationService
from src.domain.ports import CredentialRepository, Identity, PasswordHasher
from src.domain.registration import RegistrationService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthApplication:
    """
    Async facade over the registration and authentication services.

    Use build() to create one from settings (opens the pool and runs
    migrations), or pass collaborators directly for tests.
    """

    def __init__(
        self,
        repository: CredentialRepository,
        hasher: PasswordHasher,
        workers: int = 4,
        pool: ConnectionPool | None = None,
    ) -> None:
        self.repository = repository
        self.registration = RegistrationService(repository=repository, hasher=hasher)
        self.authentication = AuthenticationService(repository=repository, hasher=hasher)
        self._executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="hashing")
        self._pool = pool

    @classmethod
    def build(cls, settings: Settings | None = None) -> "AuthApplication":
        """
        Create the application from settings.

        Manages startup:
        - Configures logging
        - Creates database connection pool
        - Runs migrations
        """
        settings = settings or get_settings()
        logging.basicConfig(level=settings.log_level.upper())

        logger.info("Starting application...")
        logger.info("Connecting to database...")

        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        run_migrations(pool)

        app = cls(
            repository=PostgresCredentialRepository(pool),
            hasher=Argon2PasswordHasher.from_settings(settings),
            workers=settings.hashing_workers,
            pool=pool,
        )
        logger.info("Application startup complete")
        return app

    async def register(self, raw_email: str, raw_username: str, raw_password: str) -> Identity:
        """See RegistrationService.register."""
        return await self._offload(
            partial(self.registration.register, raw_email, raw_username, raw_password)
        )

    async def authenticate(self, raw_username: str, raw_password: str) -> Identity:
        """See AuthenticationService.authenticate."""
        return await self._offload(
            partial(self.authentication.authenticate, raw_username, raw_password)
        )

    async def load_identity(self, credential_id: UUID) -> Identity | None:
        """See AuthenticationService.load_identity."""
        return await self._offload(partial(self.authentication.load_identity, credential_id))

    async def check_health(self) -> dict[str, str]:
        """
        Health check with database validation.

        Raises CredentialStoreError if the database is unreachable.
        """
        await self._offload(self.repository.ping)
        return {"status": "healthy"}

    def close(self) -> None:
        """Shut down the worker pool and the connection pool."""
        logger.info("Shutting down application...")
        self._executor.shutdown(wait=True)
        if self._pool is not None:
            self._pool.close()
            logger.info("Database connection pool closed")

    async def _offload(self, func: Callable[[], T]) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, func)
