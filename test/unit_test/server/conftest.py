"""Fixtures for server tests.

Each test gets its own in-memory SQLite database. The application's session
dependency is overridden so that requests run against it.
"""

from typing import AsyncGenerator, Awaitable, Callable, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from test.helpers import ADMIN_PASSWORD, ADMIN_USERNAME, USER_PASSWORD, USER_USERNAME, basic_auth_header
from user_service.core.database.entities.users import User, UserRole
from user_service.core.database.utils import create_all, create_engine, create_sessionmaker

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh test database engine for each test."""
    engine = create_engine(TEST_DATABASE_URL)
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def make_user(session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Insert a user with a bcrypt-hashed password straight into the database."""
    from user_service.server.core.security import hash_password

    async def _make_user(
        username: str,
        password: str,
        role: UserRole = UserRole.ROLE_USER,
        email: Optional[str] = None,
    ) -> User:
        user = User(username=username, email=email, password=hash_password(password), user_role=role)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user

    return _make_user


@pytest_asyncio.fixture
async def admin(make_user) -> User:
    return await make_user(ADMIN_USERNAME, ADMIN_PASSWORD, UserRole.ROLE_ADMIN, "admin@example.com")


@pytest_asyncio.fixture
async def regular_user(make_user) -> User:
    return await make_user(USER_USERNAME, USER_PASSWORD, UserRole.ROLE_USER, "user@example.com")


@pytest.fixture
def admin_auth(admin) -> dict:
    return basic_auth_header(ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def user_auth(regular_user) -> dict:
    return basic_auth_header(USER_USERNAME, USER_PASSWORD)


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with overridden dependencies.

    ASGITransport does not run the lifespan, so no startup database work happens.
    """
    from user_service.core.database import get_session
    from user_service.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
