"""
Authentication domain service - Verify a username/password pair.

Security Design - User Enumeration Prevention:
---------------------------------------------
1. **One verification per attempt**: every call to authenticate() runs
   exactly one PasswordHasher.verify(), whatever happens before it. The
   memory-hard hash dominates response time and masks the other paths.

2. **Decoy hash**: when the username is unknown (or the input does not
   even parse), the secret is checked against a decoy hash made with the
   same hasher and parameters as real hashes. Verification then fails
   deterministically but costs the same as a real one.

3. **One opaque error**: unknown user, wrong password and malformed input
   all raise the same InvalidCredentials.
"""

import logging
import secrets
from dataclasses import dataclass, field
from uuid import UUID

from .exceptions import (
    CredentialStoreError,
    InvalidCredentials,
    PasswordHashingError,
    UnexpectedAuthenticationError,
    ValidationError,
)
from .password import Password
from .ports import CredentialRepository, Identity, PasswordHasher, StoredCredential
from .username import Username

logger = logging.getLogger(__name__)

# Verified against the decoy hash when the raw password cannot be used.
_PLACEHOLDER_SECRET = "placeholder-secret-for-timing-safety"


@dataclass
class AuthenticationService:
    """
    Domain service for authentication and session identity loading.

    The decoy hash is computed once, at construction, with the injected
    hasher so it shares the algorithm and cost of stored hashes.
    """

    repository: CredentialRepository
    hasher: PasswordHasher
    _decoy_hash: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        decoy = Password.parse(secrets.token_urlsafe(32))
        self._decoy_hash = self.hasher.hash(decoy)

    def authenticate(self, raw_username: str, raw_password: str) -> Identity:
        """
        Authenticate raw credentials.

        Args:
            raw_username: Untrusted username input
            raw_password: Untrusted password input

        Returns:
            Identity of the authenticated credential

        Raises:
            InvalidCredentials: for any rejection, cause not disclosed
            UnexpectedAuthenticationError: store or hashing failure
        """
        try:
            return self._authenticate(raw_username, raw_password)
        except (CredentialStoreError, PasswordHashingError):
            logger.exception("Authentication could not be completed")
            raise UnexpectedAuthenticationError() from None

    def load_identity(self, credential_id: UUID) -> Identity | None:
        """
        Re-load the identity behind an established session.

        Returns:
            Identity, or None if the credential no longer exists
        """
        try:
            credential = self.repository.find_by_id(credential_id)
        except CredentialStoreError:
            logger.exception("Failed to load identity %s", credential_id)
            raise UnexpectedAuthenticationError() from None
        return credential.identity() if credential is not None else None

    def _authenticate(self, raw_username: str, raw_password: str) -> Identity:
        try:
            username = Username.parse(raw_username)
            password = Password.parse(raw_password)
        except ValidationError:
            # Spend the same hashing work as a real attempt before rejecting.
            self.hasher.verify(_PLACEHOLDER_SECRET, self._decoy_hash)
            logger.warning("Login rejected")
            raise InvalidCredentials() from None

        credential = self.repository.find_by_username(username)
        stored_hash = credential.password_hash if credential is not None else self._decoy_hash

        # CRITICAL: verify runs on every path, no early return before it.
        password_valid = self.hasher.verify(password.expose_secret(), stored_hash)

        if credential is None or not password_valid:
            logger.warning("Login rejected")
            raise InvalidCredentials()

        self._rotate_hash_if_outdated(credential, password)
        return credential.identity()

    def _rotate_hash_if_outdated(self, credential: StoredCredential, password: Password) -> None:
        """Re-hash with current parameters. Failure here never fails the login."""
        if not self.hasher.needs_rehash(credential.password_hash):
            return
        try:
            self.repository.update_password_hash(credential.id, self.hasher.hash(password))
        except (CredentialStoreError, PasswordHashingError):
            logger.warning("Password hash rotation failed for %s", credential.id, exc_info=True)
            return
        logger.info("Rotated password hash for %s", credential.id)
