"""Test configuration and fixtures."""
import pytest
import pytest_asyncio

from ecommerce_users.config import CONNECTION_STRING_ENV
from ecommerce_users.models import User, UserRole
from ecommerce_users.services import UserService


@pytest.fixture
def database_url(tmp_path):
    """SQLite database file private to one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep a developer's connection override out of the tests."""
    monkeypatch.delenv(CONNECTION_STRING_ENV, raising=False)


@pytest_asyncio.fixture
async def user_service(database_url):
    """Create service with an empty users table."""
    service = UserService(database_url)
    await service.create_schema()

    yield service

    await service.close()


@pytest_asyncio.fixture
async def customer(user_service):
    """Create a stored customer."""
    return await user_service.create(
        User(
            email="jane.doe@shop.com",
            password_hash="hashed-secret",
            first_name="Jane",
            last_name="Doe",
            phone="555-0100",
        )
    )


@pytest_asyncio.fixture
async def seeded_users(user_service):
    """Create three stored users with different roles."""
    users = [
        User(email="alice@shop.com", first_name="Alice", last_name="Smith"),
        User(
            email="bob@shop.com",
            first_name="Bob",
            last_name="Jones",
            role=UserRole.VENDOR,
        ),
        User(
            email="carol@shop.com",
            first_name="Carol",
            last_name="White",
            role=UserRole.ADMIN,
            email_verified=True,
        ),
    ]
    return [await user_service.create(user) for user in users]
