"""
Pydantic schemas for the auth flow.

``CredentialManager`` returns ``AuthResult`` — either an ``IssuedToken``
or an ``AuthError`` — so the expected failure cases are values the
caller must branch on rather than exceptions.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.networks import validate_email


# ── Request ─────────────────────────────────────────────────────────────


class AuthRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1, repr=False)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        # syntax check only; the address is kept exactly as submitted
        validate_email(value)
        return value


class RequestValidationFailure(BaseModel):
    """Returned by ``validate_auth_request`` instead of raising."""

    errors: List[str] = Field(default_factory=list)


def validate_auth_request(payload: Any) -> Union[AuthRequest, RequestValidationFailure]:
    """
    Check an inbound ``{email, password}`` body.

    Returns the parsed ``AuthRequest`` or a ``RequestValidationFailure``
    listing one message per offending field.
    """
    try:
        return AuthRequest.model_validate(payload)
    except ValidationError as exc:
        errors = []
        for err in exc.errors(include_input=False):
            field = ".".join(str(part) for part in err["loc"]) or "body"
            errors.append(f"{field}: {err['msg']}")
        return RequestValidationFailure(errors=errors)


# ── Tokens ──────────────────────────────────────────────────────────────


class TokenClaims(BaseModel):
    sub: str
    email: str


class IssuedToken(BaseModel):
    access_token: str


# ── Expected failures ───────────────────────────────────────────────────


class AuthErrorKind(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    USER_NOT_FOUND = "user_not_found"
    INVALID_PASSWORD = "invalid_password"


AUTH_ERROR_MESSAGES = {
    AuthErrorKind.DUPLICATE_EMAIL: "Email address already in use",
    AuthErrorKind.USER_NOT_FOUND: "User not found",
    AuthErrorKind.INVALID_PASSWORD: "Passwords must match!",
}


class AuthError(BaseModel):
    kind: AuthErrorKind

    @property
    def message(self) -> str:
        return AUTH_ERROR_MESSAGES[self.kind]


AuthResult = Union[IssuedToken, AuthError]
