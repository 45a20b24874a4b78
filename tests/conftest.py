"""
Shared fixtures — settings, in-memory user store, SQLite DB, HTTP client.
"""

import os

# Must be set before config.settings is imported anywhere
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import uuid
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from auth.jwt import TokenIssuer
from auth.store import Credential, UniqueConstraintViolation
from config.settings import Settings
from database.models import Base
from database.session import get_db_session
from main import app


class InMemoryUserStore:
    """Dict-backed ``UserStore`` that enforces email uniqueness."""

    def __init__(self):
        self.rows = {}

    async def create(self, email, password_hash):
        if email in self.rows:
            return UniqueConstraintViolation(field="email")
        credential = Credential(
            id=str(uuid.uuid4()), email=email, password_hash=password_hash
        )
        self.rows[email] = credential
        return credential

    async def find_by_email(self, email):
        return self.rows.get(email)


@pytest.fixture
def settings():
    return Settings(jwt_secret="test-secret", _env_file=None)


@pytest.fixture
def issuer(settings):
    return TokenIssuer(settings)


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory):
    """FastAPI test client with the DB dependency overridden."""

    async def override_get_db_session():
        async with test_session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def failing_commit_client(test_session_factory):
    """Client whose DB sessions fail on commit, with app errors rendered as 500s."""

    async def override_get_db_session():
        async with test_session_factory() as session:
            session.commit = AsyncMock(side_effect=RuntimeError("commit failed"))
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
