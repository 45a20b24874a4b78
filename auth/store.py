"""
User store — the persistence contract the credential workflow relies on.

``create`` commits the new row before returning and reports a duplicate email as a ``UniqueConstraintViolation``
value instead of leaking driver-specific exceptions; every other database
failure propagates unchanged.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Union

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User

logger = logging.getLogger(__name__)

_PG_UNIQUE_VIOLATION = "23505"


class Credential(BaseModel):
    id: str
    email: str
    password_hash: str


class UniqueConstraintViolation(BaseModel):
    field: str


class UserStore(Protocol):
    async def create(
        self, email: str, password_hash: str
    ) -> Union[Credential, UniqueConstraintViolation]:
        ...

    async def find_by_email(self, email: str) -> Optional[Credential]:
        ...


def _to_credential(user: User) -> Credential:
    return Credential(
        id=str(user.user_id),
        email=user.email,
        password_hash=user.password_hash,
    )


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == _PG_UNIQUE_VIOLATION
    # sqlite: "UNIQUE constraint failed: users.email"
    return "UNIQUE constraint failed" in str(orig)


class SqlAlchemyUserStore:
    """``UserStore`` backed by the ``users`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self, email: str, password_hash: str
    ) -> Union[Credential, UniqueConstraintViolation]:
        user = User(email=email, password_hash=password_hash)
        self._session.add(user)
        # committed here so the row is durable before any token is issued
        try:
            await self._session.flush()
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            if _is_unique_violation(exc):
                # email is the only unique column besides the primary key
                return UniqueConstraintViolation(field="email")
            raise
        logger.debug("Committed user row %s", user.user_id)
        return _to_credential(user)

    async def find_by_email(self, email: str) -> Optional[Credential]:
        result = await self._session.execute(
            select(User).where(User.email == email)
        )
        user = result.scalar_one_or_none()
        return _to_credential(user) if user is not None else None
