"""
Argon2id password hasher adapter - Implements PasswordHasher protocol.

Wraps argon2-cffi. Encoded hashes are PHC strings
($argon2id$v=19$m=...,t=...,p=...$salt$digest), so parameters and salt
travel with the hash and old hashes stay verifiable after a cost change.
"""

import secrets

from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError, InvalidHashError, VerificationError, VerifyMismatchError

from src.config.settings import Settings
from src.domain.exceptions import PasswordHashingError
from src.domain.password import Password


class Argon2PasswordHasher:
    """
    Implements PasswordHasher protocol via argon2-cffi.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        time_cost: int = 2,
        memory_cost: int = 19456,
        parallelism: int = 1,
        hash_len: int = 32,
        salt_len: int = 16,
    ) -> None:
        self._salt_len = salt_len
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            hash_len=hash_len,
            salt_len=salt_len,
            type=Type.ID,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Argon2PasswordHasher":
        return cls(
            time_cost=settings.argon2_time_cost,
            memory_cost=settings.argon2_memory_cost,
            parallelism=settings.argon2_parallelism,
            hash_len=settings.argon2_hash_len,
            salt_len=settings.argon2_salt_len,
        )

    def hash(self, password: Password) -> str:
        """Hash with a fresh salt from the OS CSPRNG."""
        salt = secrets.token_bytes(self._salt_len)
        try:
            return self._hasher.hash(password.expose_secret(), salt=salt)
        except HashingError as e:
            raise PasswordHashingError("Argon2 hashing failed") from e

    def verify(self, secret: str, encoded_hash: str) -> bool:
        """Constant-time verification. Mismatch or malformed hash -> False."""
        try:
            return self._hasher.verify(encoded_hash, secret)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, encoded_hash: str) -> bool:
        try:
            return self._hasher.check_needs_rehash(encoded_hash)
        except InvalidHashError:
            return False
