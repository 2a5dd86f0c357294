"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the records that cross them. Adapters
implement these protocols.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol
from uuid import UUID

from .email_address import EmailAddress
from .password import Password
from .username import Username


@dataclass(frozen=True)
class Identity:
    """Authenticated identity handed back to callers."""

    id: UUID
    username: Username


@dataclass(frozen=True)
class StoredCredential:
    """
    Persisted identity.

    password_hash is an encoded Argon2id string (parameters + salt + digest).
    It is kept out of repr() so it never ends up in logs by accident.
    """

    id: UUID
    username: Username
    email: EmailAddress
    password_hash: str = field(repr=False)

    def identity(self) -> Identity:
        return Identity(id=self.id, username=self.username)


class InsertResult(Enum):
    """
    Result of an insert attempt.

    USERNAME_TAKEN / EMAIL_TAKEN are reported when a storage-level unique
    constraint rejects the write, which also covers lost races between
    concurrent registrations.
    """

    INSERTED = "inserted"
    USERNAME_TAKEN = "username_taken"
    EMAIL_TAKEN = "email_taken"


class CredentialRepository(Protocol):
    """Port interface for credential persistence."""

    def find_by_username(self, username: Username) -> StoredCredential | None:
        """
        Fetch the credential stored under a canonical username.

        Returns:
            The credential, or None if no such user exists
        """
        ...

    def find_by_id(self, credential_id: UUID) -> StoredCredential | None:
        """Fetch a credential by identifier (session re-load)."""
        ...

    def username_exists(self, username: Username) -> bool:
        """Check whether the username is already taken."""
        ...

    def email_exists(self, email: EmailAddress) -> bool:
        """Check whether the email is already bound to a credential."""
        ...

    def insert_credential(self, credential: StoredCredential) -> InsertResult:
        """
        Atomically persist a new credential.

        Both the identity row and the password-hash row are written in one
        transaction: either both are committed or neither is.

        Returns:
            INSERTED on commit, USERNAME_TAKEN or EMAIL_TAKEN when a unique
            constraint rejected the write (nothing is persisted)

        Raises:
            CredentialStoreError: store unavailable or unexpected failure
        """
        ...

    def update_password_hash(self, credential_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash (hash rotation)."""
        ...

    def ping(self) -> None:
        """Raise CredentialStoreError if the store is unreachable."""
        ...


class PasswordHasher(Protocol):
    """Port interface for a memory-hard password hashing function."""

    def hash(self, password: Password) -> str:
        """
        Hash a password with a freshly generated random salt.

        Returns:
            Encoded hash string carrying algorithm parameters and salt
        """
        ...

    def verify(self, secret: str, encoded_hash: str) -> bool:
        """
        Check a plain secret against an encoded hash in constant time.

        Mismatches and malformed hashes return False.
        """
        ...

    def needs_rehash(self, encoded_hash: str) -> bool:
        """True if the hash was made with parameters other than the current ones."""
        ...
