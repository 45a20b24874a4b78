"""
Auth API routes — register, login, me.

Route prefix: /api/v1/auth
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status

from auth.dependencies import get_credential_manager, get_current_user
from auth.schemas import (
    AuthError,
    AuthRequest,
    AuthResult,
    IssuedToken,
    RequestValidationFailure,
    TokenClaims,
    validate_auth_request,
)
from auth.service import CredentialManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Boundary helpers ───────────────────────────────────────────────────


def _parse(payload: Any) -> AuthRequest:
    parsed = validate_auth_request(payload)
    if isinstance(parsed, RequestValidationFailure):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=parsed.errors,
        )
    return parsed


def _respond(result: AuthResult) -> IssuedToken:
    if isinstance(result, AuthError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=result.message,
        )
    return result


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", response_model=IssuedToken)
async def register(
    payload: Any = Body(...),
    manager: CredentialManager = Depends(get_credential_manager),
) -> IssuedToken:
    """Register a new user and return an access token."""
    return _respond(await manager.register(_parse(payload)))


@router.post("/login", response_model=IssuedToken)
async def login(
    payload: Any = Body(...),
    manager: CredentialManager = Depends(get_credential_manager),
) -> IssuedToken:
    """Login with email + password."""
    return _respond(await manager.login(_parse(payload)))


@router.get("/me", response_model=TokenClaims)
async def me(claims: TokenClaims = Depends(get_current_user)) -> TokenClaims:
    """Return the identity asserted by the caller's access token."""
    return claims
