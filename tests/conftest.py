"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from typing import Any
from uuid import uuid4

# Disable rate limiting and point the app's own engine at SQLite in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.passwords import hash_password
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base, UserModel


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_PASSWORD = "secret123"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test (one shared connection)."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def test_user() -> TokenUser:
    """The user most tests act as."""
    return TokenUser(
        id=uuid4(),
        email="test@example.com",
        name="Test User",
    )


@pytest.fixture
def other_user() -> TokenUser:
    """A second user, for ownership checks."""
    return TokenUser(
        id=uuid4(),
        email="other@example.com",
        name="Other User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers(auth_provider: JWTAuthProvider, test_user: TokenUser) -> dict[str, str]:
    """Authorization headers for the test user."""
    return {"Authorization": f"Bearer {auth_provider.create_token(test_user)}"}


@pytest.fixture
def other_headers(auth_provider: JWTAuthProvider, other_user: TokenUser) -> dict[str, str]:
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {auth_provider.create_token(other_user)}"}


async def seed_user(
    session_factory: async_sessionmaker[AsyncSession], user: TokenUser
) -> None:
    """Insert a users row matching a token user."""
    async with session_factory() as session:
        session.add(
            UserModel(
                id=user.id,
                name=user.name or "",
                email=user.email,
                password_hash=hash_password(TEST_PASSWORD),
                avatar_url=f"https://example.com/{user.id}.png",
            )
        )
        await session.commit()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client on the module-level app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def app(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    test_user: TokenUser,
    other_user: TokenUser,
) -> AsyncGenerator[FastAPI, None]:
    """
    Application wired to the per-test database.

    - Seeds both test users into the database
    - Uses the test auth provider for issuing and validating tokens
    - Overrides the service factories to use the test session factory
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import get_post_service, get_profile_service, get_user_service
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    await seed_user(session_factory, test_user)
    await seed_user(session_factory, other_user)

    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_user_service] = lambda: UserService(test_uow_factory)
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(test_uow_factory)
    app.dependency_overrides[get_post_service] = lambda: PostService(test_uow_factory)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Client for the wired app without credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    app: FastAPI, auth_headers: dict[str, str]
) -> AsyncGenerator[AsyncClient, None]:
    """Client for the wired app acting as the test user."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url="http://test", headers=auth_headers
    ) as c:
        yield c
