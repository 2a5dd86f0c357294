"""
Domain layer - Pure business logic with zero framework imports.

This package contains the credential value types (Username, Password,
EmailAddress) and the registration and authentication services. It
defines its own port interfaces for infrastructure abstraction, so
storage and hashing stay swappable.
"""

from .authentication import AuthenticationService
from .email_address import EmailAddress
from .exceptions import (
    AuthenticationError,
    CredentialStoreError,
    EmailExists,
    InvalidCredentials,
    InvalidEmail,
    InvalidEmailError,
    InvalidPassword,
    InvalidPasswordError,
    InvalidUsername,
    InvalidUsernameError,
    PasswordErrorKind,
    PasswordHashingError,
    RegisterErrorKind,
    RegistrationError,
    UnexpectedAuthenticationError,
    UnexpectedRegistrationError,
    UsernameErrorKind,
    UsernameExists,
    ValidationError,
)
from .graphemes import grapheme_length
from .password import Password
from .ports import (
    CredentialRepository,
    Identity,
    InsertResult,
    PasswordHasher,
    StoredCredential,
)
from .registration import RegistrationService
from .username import Username

__all__ = [
    "AuthenticationError",
    "AuthenticationService",
    "CredentialRepository",
    "CredentialStoreError",
    "EmailAddress",
    "EmailExists",
    "Identity",
    "InsertResult",
    "InvalidCredentials",
    "InvalidEmail",
    "InvalidEmailError",
    "InvalidPassword",
    "InvalidPasswordError",
    "InvalidUsername",
    "InvalidUsernameError",
    "Password",
    "PasswordErrorKind",
    "PasswordHasher",
    "PasswordHashingError",
    "RegisterErrorKind",
    "RegistrationError",
    "RegistrationService",
    "StoredCredential",
    "UnexpectedAuthenticationError",
    "UnexpectedRegistrationError",
    "Username",
    "UsernameErrorKind",
    "UsernameExists",
    "ValidationError",
    "grapheme_length",
]
