import os

TEST_DB_URL = "sqlite://:memory:"
os.environ["DATABASE_URL"] = TEST_DB_URL
# Cheap hashes keep the suite fast; production defaults are much higher
os.environ.setdefault("PASSWORD_HASH_TIME_COST", "1")
os.environ.setdefault("PASSWORD_HASH_MEMORY_COST", "8192")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from storefront.config import settings
from storefront.core import db as db_module
from storefront.main import app
from storefront.services import identity

db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

COOKIE_NAME = settings.session_cookie_name


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest_asyncio.fixture
async def db():
    """Fresh database for tests that call the store and services directly."""
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    Cookies set by the app are kept in the client's jar.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client


@pytest_asyncio.fixture
async def registered_user(db):
    """
    Factory fixture registering users through the identity service.
    Returns (user, session_id, password).
    """

    async def _register(name: str = "Alice", email: str = "alice@example.com",
                        password: str = "Secret123"):
        user, session_id = await identity.register(name, email, password)
        return user, session_id, password

    return _register
