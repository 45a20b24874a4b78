"""
Access token issuance and verification.

Tokens are HS256 JWTs (``python-jose``) carrying ``sub`` (user id) and
``email``, valid for ``config.jwt_expiry_minutes`` (45 by default).
Secret key is loaded from ``config.jwt_secret`` (env var: ``JWT_SECRET``).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from auth.schemas import IssuedToken, TokenClaims
from config.settings import Settings, config


class ConfigError(RuntimeError):
    """Raised when token signing is attempted without a configured secret."""


class InvalidToken(Exception):
    """Raised by ``TokenIssuer.decode`` for bad, tampered or expired tokens."""


class TokenIssuer:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or config

    def _secret(self) -> str:
        secret = self._settings.jwt_secret
        if not secret:
            raise ConfigError("JWT_SECRET is not configured; refusing to sign tokens")
        return secret

    def issue(self, subject_id: str, email: str) -> IssuedToken:
        """Sign ``{sub, email}`` with an expiry of ``jwt_expiry_minutes``."""
        secret = self._secret()
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject_id),
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self._settings.jwt_expiry_minutes),
        }
        token = jwt.encode(payload, secret, algorithm=self._settings.jwt_algorithm)
        return IssuedToken(access_token=token)

    def decode(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry, returning the embedded claims.

        Raises ``InvalidToken`` on any failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret(),
                algorithms=[self._settings.jwt_algorithm],
            )
            return TokenClaims.model_validate(payload)
        except (JWTError, ValidationError) as exc:
            raise InvalidToken(str(exc)) from exc
