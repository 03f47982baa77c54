"""Root conftest: shared test configuration and fixtures.

Invariants:
    - Tests never reach a real MongoDB; MONGODB_URI points at an unused local address
    - Every test gets a fresh MockClient / MockDatabase
    - The `client` fixture overrides get_mongo_manager, so every repository the
      routes build sits on the mock database

Design Decisions:
    - httpx ASGITransport does not run the lifespan, so no connection is attempted
"""

import os

os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017/showroom_test")

import pytest
from httpx import ASGITransport, AsyncClient

from showroom.api.dependencies import get_mongo_manager
from showroom.infrastructure.database import MongoClientManager
from showroom.main import app
from tests.mock_mongo import MockClient


@pytest.fixture
def mongo_client():
    return MockClient()


@pytest.fixture
def mongo_manager(mongo_client):
    return MongoClientManager(
        "mongodb://localhost:27017", database_name="showroom_test",
        client=mongo_client,
    )


@pytest.fixture
def database(mongo_manager):
    return mongo_manager.database


@pytest.fixture
async def client(mongo_manager):
    """FastAPI test client with the MongoDB manager overridden."""
    app.dependency_overrides[get_mongo_manager] = lambda: mongo_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
