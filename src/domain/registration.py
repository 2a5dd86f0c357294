"""
Registration domain service - Create a new credential.

Flow
====

1. Parse raw inputs into domain types, in a fixed order:
   email -> username -> password. The first invalid field is reported.
2. Pre-check username, then email, for a fast and friendly conflict error.
3. Generate a random identifier (UUID4).
4. Hash the password (Argon2id, fresh random salt per call).
5. Insert identity row + password-hash row in one transaction.

The pre-checks are an optimization only. Two concurrent registrations can
both pass them; the storage-level unique constraints then reject the
loser's insert, which is rolled back and reported as the matching
*Exists error rather than producing a duplicate.

Hashing runs before the transaction is opened, so no connection or row
lock is held across the slow hash.
"""

import logging
import uuid
from dataclasses import dataclass

from .email_address import EmailAddress
from .exceptions import (
    CredentialStoreError,
    EmailExists,
    InvalidEmail,
    InvalidEmailError,
    InvalidPassword,
    InvalidPasswordError,
    InvalidUsername,
    InvalidUsernameError,
    PasswordHashingError,
    UnexpectedRegistrationError,
    UsernameExists,
)
from .password import Password
from .ports import CredentialRepository, Identity, InsertResult, PasswordHasher, StoredCredential
from .username import Username

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates parsing, uniqueness checks, password hashing and
    atomic persistence.
    """

    repository: CredentialRepository
    hasher: PasswordHasher

    def register(self, raw_email: str, raw_username: str, raw_password: str) -> Identity:
        """
        Register a new credential.

        Args:
            raw_email: Untrusted email input (will be lowercased)
            raw_username: Untrusted username input (will be trimmed, lowercased)
            raw_password: Untrusted password input

        Returns:
            Identity of the new credential

        Raises:
            InvalidEmail, InvalidUsername, InvalidPassword: a field failed
                validation (the ValidationError is chained as __cause__)
            UsernameExists, EmailExists: uniqueness conflict
            UnexpectedRegistrationError: store or hashing failure
        """
        email, username, password = self._parse(raw_email, raw_username, raw_password)

        try:
            return self._store(email, username, password)
        except (CredentialStoreError, PasswordHashingError):
            logger.exception("Registration failed for username %s", username)
            raise UnexpectedRegistrationError() from None

    def _parse(
        self, raw_email: str, raw_username: str, raw_password: str
    ) -> tuple[EmailAddress, Username, Password]:
        try:
            email = EmailAddress.parse(raw_email)
        except InvalidEmailError as e:
            raise InvalidEmail() from e
        try:
            username = Username.parse(raw_username)
        except InvalidUsernameError as e:
            raise InvalidUsername(str(e)) from e
        try:
            password = Password.parse(raw_password)
        except InvalidPasswordError as e:
            raise InvalidPassword(str(e)) from e
        return email, username, password

    def _store(self, email: EmailAddress, username: Username, password: Password) -> Identity:
        if self.repository.username_exists(username):
            raise UsernameExists()
        if self.repository.email_exists(email):
            raise EmailExists()

        credential = StoredCredential(
            id=uuid.uuid4(),
            username=username,
            email=email,
            password_hash=self.hasher.hash(password),
        )

        result = self.repository.insert_credential(credential)
        if result is InsertResult.USERNAME_TAKEN:
            raise UsernameExists()
        if result is InsertResult.EMAIL_TAKEN:
            raise EmailExists()

        logger.info("Registered credential for username %s", username)
        return credential.identity()
