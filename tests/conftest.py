"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.user import UserRole
from infrastructure.database.models import ProfileModel, UserModel
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

UserFactory = Callable[..., Awaitable[int]]


def bearer(user_id: int) -> dict[str, str]:
    """Authorization header for a user id token."""
    return {"Authorization": f"Bearer {user_id}"}


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    db = Database(TEST_DATABASE_URL, poolclass=StaticPool)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Unit of work factory bound to the test database."""
    return lambda: SQLAlchemyUnitOfWork(database.session_factory)


@pytest.fixture
def create_user(database: Database) -> UserFactory:
    """Insert a user (with a profile when ``full_name`` is given) and return its id."""

    async def _create(
        email: str,
        role: UserRole = UserRole.USER,
        status: str = "ACTIVE",
        full_name: str | None = None,
    ) -> int:
        async with database.session_factory() as session:
            user = UserModel(email=email, role=role.value, status=status)
            session.add(user)
            await session.flush()
            if full_name:
                session.add(ProfileModel(user_id=user.id, full_name=full_name))
            await session.commit()
            return user.id

    return _create


@pytest.fixture
async def user_id(create_user: UserFactory) -> int:
    """A regular active user."""
    return await create_user("alice@example.com", full_name="Alice Kim")


@pytest.fixture
async def other_user_id(create_user: UserFactory) -> int:
    """A second regular user."""
    return await create_user("bob@example.com", full_name="Bob Lee")


@pytest.fixture
async def admin_id(create_user: UserFactory) -> int:
    """An administrator."""
    return await create_user("admin@example.com", role=UserRole.ADMIN, full_name="Admin")


@pytest.fixture
def auth_headers(user_id: int) -> dict[str, str]:
    """Authorization headers for the regular user."""
    return bearer(user_id)


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Async test client over an app bound to the test database."""
    from main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
