"""
Password value object - Secret wrapper with a length policy.

The raw secret is held in a pydantic SecretStr, so repr() and str()
are redacted. expose_secret() is the only way back to the plain value
and is meant to be called at the point of hashing or verification.
"""

from dataclasses import dataclass

from pydantic import SecretStr

from .exceptions import InvalidPasswordError, PasswordErrorKind
from .graphemes import grapheme_length

MIN_PASSWORD_LENGTH = 12
MAX_PASSWORD_LENGTH = 256


@dataclass(frozen=True)
class Password:
    """Validated password. Length is 12-256 graphemes, both inclusive."""

    _secret: SecretStr

    def __post_init__(self) -> None:
        raw = self._secret.get_secret_value()
        if not raw:
            raise InvalidPasswordError(PasswordErrorKind.EMPTY)
        length = grapheme_length(raw, limit=MAX_PASSWORD_LENGTH + 1)
        if length < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordError(PasswordErrorKind.TOO_SHORT)
        if length > MAX_PASSWORD_LENGTH:
            raise InvalidPasswordError(PasswordErrorKind.TOO_LONG)

    @classmethod
    def parse(cls, raw: str) -> "Password":
        """
        Validate a raw password and wrap it.

        Raises:
            InvalidPasswordError: kind tells which rule was violated
        """
        return cls(SecretStr(raw))

    def expose_secret(self) -> str:
        """Return the plain password. Use only to hash or verify."""
        return self._secret.get_secret_value()

    def __str__(self) -> str:
        return str(self._secret)
