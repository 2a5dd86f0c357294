"""
Username value object.

Canonical form is trimmed and lowercased; this is the form used for
storage, lookup and equality.
"""

from dataclasses import dataclass

from .exceptions import InvalidUsernameError, UsernameErrorKind
from .graphemes import grapheme_length

MAX_USERNAME_LENGTH = 64

_ALLOWED_CHARACTERS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789-_.")


@dataclass(frozen=True)
class Username:
    """
    Validated, canonical username.

    Invariants (checked on construction):
    - non-empty
    - at most 64 graphemes
    - only ASCII lowercase letters, digits, "-", "_" and "."
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise InvalidUsernameError(UsernameErrorKind.EMPTY)
        if grapheme_length(self.value, limit=MAX_USERNAME_LENGTH + 1) > MAX_USERNAME_LENGTH:
            raise InvalidUsernameError(UsernameErrorKind.TOO_LONG)
        if any(char not in _ALLOWED_CHARACTERS for char in self.value):
            raise InvalidUsernameError(UsernameErrorKind.CONTAINS_FORBIDDEN_CHARACTER)

    @classmethod
    def parse(cls, raw: str) -> "Username":
        """
        Normalize and validate a raw username.

        Applies: strip whitespace + lowercase, then the invariant checks.

        Raises:
            InvalidUsernameError: kind tells which rule was violated
        """
        return cls(raw.strip().lower())

    def __str__(self) -> str:
        return self.value
