import os
import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from keygate.api.v1.deps import get_clock
from keygate.core import db as db_module
from keygate.main import app
from keygate.services.record_store import TortoiseRecordStore


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL

# Fixed "now" for every request made through the client fixture
NOW = 1_700_000_000_000


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
    """
    Provide a fresh Tortoise database for the duration of one test.
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def store(db):
    """
    Record store bound to the test database.
    """
    return TortoiseRecordStore()


@pytest_asyncio.fixture
async def client(db):
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB
    and the clock pinned to NOW.
    """
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)
    # Use ASGITransport without lifespan parameter (not supported in all httpx versions)
    try:
        transport = ASGITransport(app=app, lifespan="off")
    except TypeError:
        # Fallback for httpx versions that don't support lifespan parameter
        transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seed_application(store):
    """
    Factory fixture to write application records directly into the store.
    """

    async def _seed_application(name: str = "default", **fields) -> str:
        record = {"name": name, "isActive": True}
        record.update(fields)
        await store.update(f"applications/{name}", record)
        return name

    return _seed_application


@pytest_asyncio.fixture
async def seed_key(store):
    """
    Factory fixture to write key records directly into the store.
    Defaults describe a fresh, unbound, active "day" key.
    """

    async def _seed_key(key_id: str | None = None, **fields) -> str:
        key_id = key_id or f"KEY-{uuid.uuid4().hex[:12].upper()}"
        record = {
            "username": "tester",
            "type": "day",
            "isActive": True,
            "isBanned": False,
            "activated": False,
        }
        record.update(fields)
        await store.update(f"keys/{key_id}", record)
        return key_id

    return _seed_key
