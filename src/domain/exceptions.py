"""
Domain exceptions - Semantic error types for credentials.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Three families:
- Validation errors: field-specific, safe to show to the caller.
- Registration errors: one subclass per RegisterErrorKind.
- Authentication errors: deliberately opaque (no cause is revealed).
"""

from enum import Enum


class UsernameErrorKind(str, Enum):
    """Reasons a raw username is rejected."""

    EMPTY = "empty"
    TOO_LONG = "too_long"
    CONTAINS_FORBIDDEN_CHARACTER = "contains_forbidden_character"


class PasswordErrorKind(str, Enum):
    """Reasons a raw password is rejected."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"


class RegisterErrorKind(str, Enum):
    """Outcome classes of a failed registration."""

    INVALID_EMAIL = "invalid_email"
    INVALID_USERNAME = "invalid_username"
    INVALID_PASSWORD = "invalid_password"
    USERNAME_EXISTS = "username_exists"
    EMAIL_EXISTS = "email_exists"
    UNEXPECTED = "unexpected"


# -- Validation ----------------------------------------------------------------


class ValidationError(ValueError):
    """Base class for domain type parse failures."""

    pass


class InvalidUsernameError(ValidationError):
    """Raw username violates the username policy."""

    _MESSAGES = {
        UsernameErrorKind.EMPTY: "Empty username",
        UsernameErrorKind.TOO_LONG: "Username too long",
        UsernameErrorKind.CONTAINS_FORBIDDEN_CHARACTER: "Username contains forbidden character",
    }

    def __init__(self, kind: UsernameErrorKind) -> None:
        self.kind = kind
        super().__init__(self._MESSAGES[kind])


class InvalidPasswordError(ValidationError):
    """Raw password violates the length policy."""

    _MESSAGES = {
        PasswordErrorKind.EMPTY: "Password is empty",
        PasswordErrorKind.TOO_SHORT: "Password is too short",
        PasswordErrorKind.TOO_LONG: "Password is too long",
    }

    def __init__(self, kind: PasswordErrorKind) -> None:
        self.kind = kind
        super().__init__(self._MESSAGES[kind])


class InvalidEmailError(ValidationError):
    """Raw email is not a syntactically valid address."""

    def __init__(self) -> None:
        super().__init__("Invalid email")


# -- Registration --------------------------------------------------------------


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    kind: RegisterErrorKind
    message = "Registration failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidEmail(RegistrationError):
    """Email field failed validation."""

    kind = RegisterErrorKind.INVALID_EMAIL
    message = "Invalid email address"


class InvalidUsername(RegistrationError):
    """Username field failed validation."""

    kind = RegisterErrorKind.INVALID_USERNAME
    message = "Invalid username"


class InvalidPassword(RegistrationError):
    """Password field failed validation."""

    kind = RegisterErrorKind.INVALID_PASSWORD
    message = "Invalid password"


class UsernameExists(RegistrationError):
    """Username is already taken by another credential."""

    kind = RegisterErrorKind.USERNAME_EXISTS
    message = "Username already exists"


class EmailExists(RegistrationError):
    """Email is already bound to another credential."""

    kind = RegisterErrorKind.EMAIL_EXISTS
    message = "Email already exists"


class UnexpectedRegistrationError(RegistrationError):
    """Store or hashing failure. Detail is logged, never exposed."""

    kind = RegisterErrorKind.UNEXPECTED
    message = "An internal server error occurred"


# -- Authentication ------------------------------------------------------------


class AuthenticationError(Exception):
    """Base class for authentication domain errors."""

    pass


class InvalidCredentials(AuthenticationError):
    """Username/password pair rejected. Never says why."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnexpectedAuthenticationError(AuthenticationError):
    """Store or hashing failure during authentication."""

    def __init__(self) -> None:
        super().__init__("An internal server error occurred")


# -- Infrastructure ------------------------------------------------------------


class CredentialStoreError(Exception):
    """Raised by repository adapters when the store cannot be used."""

    pass


class PasswordHashingError(Exception):
    """Raised by hasher adapters when hashing itself fails."""

    pass
