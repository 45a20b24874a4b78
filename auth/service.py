"""
Credential workflow — registration and login.

``CredentialManager`` hashes or verifies the password, talks to the
``UserStore`` and hands successful identities to the ``TokenIssuer``.
Expected failures come back as ``AuthError`` values; store, config and
signing errors propagate unchanged.
"""

from __future__ import annotations

import asyncio
import logging

from auth.jwt import TokenIssuer
from auth.password import hash_password, verify_password
from auth.schemas import AuthError, AuthErrorKind, AuthRequest, AuthResult
from auth.store import UniqueConstraintViolation, UserStore

logger = logging.getLogger(__name__)


class CredentialManager:
    def __init__(self, store: UserStore, issuer: TokenIssuer) -> None:
        self._store = store
        self._issuer = issuer

    async def register(self, request: AuthRequest) -> AuthResult:
        """Create a credential for ``request.email`` and issue a token."""
        password_hash = await asyncio.to_thread(hash_password, request.password)

        created = await self._store.create(request.email, password_hash)
        if isinstance(created, UniqueConstraintViolation):
            logger.info("Registration rejected: %s already taken", created.field)
            return AuthError(kind=AuthErrorKind.DUPLICATE_EMAIL)

        logger.info("Registered user %s", created.id)
        return self._issuer.issue(created.id, created.email)

    async def login(self, request: AuthRequest) -> AuthResult:
        """Verify ``request`` against the stored hash and issue a token."""
        credential = await self._store.find_by_email(request.email)
        if credential is None:
            logger.info("Login rejected: unknown email")
            return AuthError(kind=AuthErrorKind.USER_NOT_FOUND)

        matches = await asyncio.to_thread(
            verify_password, request.password, credential.password_hash
        )
        if not matches:
            logger.info("Login rejected: bad password for user %s", credential.id)
            return AuthError(kind=AuthErrorKind.INVALID_PASSWORD)

        logger.info("Login: %s", credential.id)
        return self._issuer.issue(credential.id, credential.email)
