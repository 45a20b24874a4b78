"""
FastAPI dependencies for authentication.

Wires the credential workflow explicitly: a request-scoped DB session
backs a ``SqlAlchemyUserStore``, which together with a ``TokenIssuer``
builds the ``CredentialManager`` used by the auth routes.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.jwt import InvalidToken, TokenIssuer
from auth.schemas import TokenClaims
from auth.service import CredentialManager
from auth.store import SqlAlchemyUserStore
from database.session import get_db_session

_bearer_scheme = HTTPBearer()


async def db_session(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a DB session for route handlers."""
    yield session


def get_token_issuer() -> TokenIssuer:
    return TokenIssuer()


def get_credential_manager(
    session: AsyncSession = Depends(db_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> CredentialManager:
    return CredentialManager(SqlAlchemyUserStore(session), issuer)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(_bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenClaims:
    """
    Verify the Bearer token and return its claims.

    Raises ``HTTPException(401)`` on invalid or expired tokens.
    """
    try:
        return issuer.decode(credentials.credentials)
    except InvalidToken as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token: {exc}",
        ) from exc
