"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Callable
from pathlib import Path

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.address import Address
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.database.models import Base
from infrastructure.database.session import build_engine, build_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from tests.helpers import TEST_DEPOSITS, make_key

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, shared across connections."""
    engine = build_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return build_session_factory(engine)


@pytest.fixture
def uow_factory(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of Work factory bound to the test database."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory, TEST_DEPOSITS)

    return factory


@pytest.fixture
def alice_key() -> Address:
    return make_key("alice")


@pytest.fixture
def bob_key() -> Address:
    return make_key("bob")


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_headers_for(
    auth_provider: JWTAuthProvider,
) -> Callable[[Address], dict[str, str]]:
    """Build authorization headers proving control of a key."""

    def build(key: Address) -> dict[str, str]:
        return {"Authorization": f"Bearer {auth_provider.create_token(key)}"}

    return build


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with no overrides."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork],
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the in-memory database.

    This client:
    - Validates bearer tokens with the test auth provider
    - Builds every service on a UoW factory bound to the test engine
    """
    from api.dependencies.auth import get_auth_provider
    from api.v1.dependencies import (
        get_group_service,
        get_name_service,
        get_post_service,
        get_profile_service,
    )
    from domain.services.group_service import GroupService
    from domain.services.name_service import NameService
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from main import create_app

    app = create_app()

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(uow_factory)
    app.dependency_overrides[get_group_service] = lambda: GroupService(uow_factory)
    app.dependency_overrides[get_post_service] = lambda: PostService(uow_factory)
    app.dependency_overrides[get_name_service] = lambda: NameService(uow_factory)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
