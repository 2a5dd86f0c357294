"""
Email address value object.

Validation is grammar only: a local part, an "@" and a well-formed domain.
Deliverability is not judged, so single-label and special-use domains
(localhost, intranet, *.local, *.test) are accepted.
"""

from dataclasses import dataclass

import email_validator
from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidEmailError

# email-validator rejects RFC 6761 special-use names unless they are removed
# from this module-level list, which it consults on every call.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


@dataclass(frozen=True)
class EmailAddress:
    """Lowercased, syntactically valid email address."""

    value: str

    def __post_init__(self) -> None:
        if self.value != self.value.lower():
            raise InvalidEmailError()
        try:
            validate_email(self.value, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError as e:
            raise InvalidEmailError() from e

    @classmethod
    def parse(cls, raw: str) -> "EmailAddress":
        """
        Lowercase and validate a raw email address.

        Raises:
            InvalidEmailError: address is not syntactically valid
        """
        return cls(raw.lower())

    def __str__(self) -> str:
        return self.value
