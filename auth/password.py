"""
Password hashing and verification.

Uses Argon2id via ``argon2-cffi``.  The hasher runs with the library's
default cost parameters (RFC 9106 low-memory profile); changing them is a
security/latency tradeoff and must be done explicitly here.
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password with Argon2id (random salt, encoded parameters)."""
    return _hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time check against an Argon2 hash; malformed hashes fail."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
