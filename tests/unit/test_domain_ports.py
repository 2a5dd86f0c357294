"""
Unit tests for domain ports and exceptions.

Tests verify:
- Port interfaces are properly defined
- Exceptions are properly structured
- Domain purity (no web framework, database driver or hashing library imports;
  pydantic only for SecretStr)
"""

import subprocess
import uuid
from enum import Enum

import pytest

from src.domain.email_address import EmailAddress
from src.domain.exceptions import (
    AuthenticationError,
    EmailExists,
    InvalidCredentials,
    InvalidEmail,
    InvalidEmailError,
    InvalidPassword,
    InvalidPasswordError,
    InvalidUsername,
    InvalidUsernameError,
    PasswordErrorKind,
    RegisterErrorKind,
    RegistrationError,
    UnexpectedAuthenticationError,
    UnexpectedRegistrationError,
    UsernameErrorKind,
    UsernameExists,
    ValidationError,
)
from src.domain.ports import (
    CredentialRepository,
    Identity,
    InsertResult,
    PasswordHasher,
    StoredCredential,
)
from src.domain.username import Username


class TestInsertResultEnum:
    def test_insert_result_is_enum(self) -> None:
        assert issubclass(InsertResult, Enum)

    def test_insert_result_values(self) -> None:
        assert InsertResult.INSERTED.value == "inserted"
        assert InsertResult.USERNAME_TAKEN.value == "username_taken"
        assert InsertResult.EMAIL_TAKEN.value == "email_taken"


class TestErrorKindEnums:
    def test_register_error_kinds(self) -> None:
        assert {kind.name for kind in RegisterErrorKind} == {
            "INVALID_EMAIL",
            "INVALID_USERNAME",
            "INVALID_PASSWORD",
            "USERNAME_EXISTS",
            "EMAIL_EXISTS",
            "UNEXPECTED",
        }

    def test_username_error_kinds(self) -> None:
        assert {kind.name for kind in UsernameErrorKind} == {
            "EMPTY",
            "TOO_LONG",
            "CONTAINS_FORBIDDEN_CHARACTER",
        }

    def test_password_error_kinds(self) -> None:
        assert {kind.name for kind in PasswordErrorKind} == {"EMPTY", "TOO_SHORT", "TOO_LONG"}

    def test_register_error_kind_is_str_mixin(self) -> None:
        """RegisterErrorKind values serialize as plain strings."""
        import json

        assert json.dumps(RegisterErrorKind.EMAIL_EXISTS) == '"email_exists"'


class TestRecords:
    def test_stored_credential_projects_identity(self) -> None:
        credential = StoredCredential(
            id=uuid.uuid4(),
            username=Username.parse("testuser"),
            email=EmailAddress.parse("test@example.com"),
            password_hash="$argon2id$v=19$m=1024,t=1,p=1$c2FsdA$aGFzaA",
        )

        assert credential.identity() == Identity(id=credential.id, username=credential.username)

    def test_stored_credential_repr_hides_hash(self) -> None:
        credential = StoredCredential(
            id=uuid.uuid4(),
            username=Username.parse("testuser"),
            email=EmailAddress.parse("test@example.com"),
            password_hash="$argon2id$secret-looking-hash",
        )

        assert "secret-looking-hash" not in repr(credential)

    def test_identity_is_immutable(self) -> None:
        identity = Identity(id=uuid.uuid4(), username=Username.parse("testuser"))

        with pytest.raises(AttributeError):
            identity.id = uuid.uuid4()  # type: ignore[misc]


class TestCredentialRepositoryProtocol:
    @pytest.mark.parametrize(
        "method",
        [
            "find_by_username",
            "find_by_id",
            "username_exists",
            "email_exists",
            "insert_credential",
            "update_password_hash",
            "ping",
        ],
    )
    def test_repository_defines_method(self, method: str) -> None:
        assert hasattr(CredentialRepository, method)


class TestPasswordHasherProtocol:
    @pytest.mark.parametrize("method", ["hash", "verify", "needs_rehash"])
    def test_hasher_defines_method(self, method: str) -> None:
        assert hasattr(PasswordHasher, method)


class TestDomainExceptions:
    @pytest.mark.parametrize(
        "error", [InvalidUsernameError, InvalidPasswordError, InvalidEmailError]
    )
    def test_validation_errors_are_value_errors(self, error: type) -> None:
        assert issubclass(error, ValidationError)
        assert issubclass(error, ValueError)

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (InvalidEmail, RegisterErrorKind.INVALID_EMAIL),
            (InvalidUsername, RegisterErrorKind.INVALID_USERNAME),
            (InvalidPassword, RegisterErrorKind.INVALID_PASSWORD),
            (UsernameExists, RegisterErrorKind.USERNAME_EXISTS),
            (EmailExists, RegisterErrorKind.EMAIL_EXISTS),
            (UnexpectedRegistrationError, RegisterErrorKind.UNEXPECTED),
        ],
    )
    def test_registration_errors_carry_kind(self, error: type, kind: RegisterErrorKind) -> None:
        assert issubclass(error, RegistrationError)
        assert error().kind is kind

    def test_authentication_errors_inherit_base(self) -> None:
        assert issubclass(InvalidCredentials, AuthenticationError)
        assert issubclass(UnexpectedAuthenticationError, AuthenticationError)

    def test_invalid_credentials_message_is_opaque(self) -> None:
        assert str(InvalidCredentials()) == "Invalid credentials"

    def test_validation_error_carries_kind(self) -> None:
        error = InvalidUsernameError(UsernameErrorKind.TOO_LONG)
        assert error.kind is UsernameErrorKind.TOO_LONG
        assert str(error) == "Username too long"


class TestDomainPurity:
    """Domain layer stays free of web framework, driver and hashing library imports."""

    @pytest.mark.parametrize(
        "pattern",
        [
            "from fastapi",
            "import fastapi",
            "from psycopg",
            "import psycopg",
            "from argon2",
            "import argon2",
        ],
    )
    def test_no_infrastructure_imports_in_domain(self, pattern: str) -> None:
        result = subprocess.run(
            ["grep", "-r", pattern, "src/domain/"],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"Infrastructure import found: {result.stdout}"

    def test_only_secret_str_is_imported_from_pydantic(self) -> None:
        """pydantic is allowed in the domain solely for the SecretStr wrapper."""
        result = subprocess.run(
            ["grep", "-rhE", r"^\s*(from|import) pydantic", "src/domain/"],
            capture_output=True,
            text=True,
        )
        imports = [line.strip() for line in result.stdout.splitlines()]
        assert imports == ["from pydantic import SecretStr"], f"Unexpected pydantic import: {imports}"
