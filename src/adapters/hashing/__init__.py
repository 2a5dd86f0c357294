"""Hashing adapters - Password hashing implementations."""

from .argon2id import Argon2PasswordHasher

__all__ = ["Argon2PasswordHasher"]
