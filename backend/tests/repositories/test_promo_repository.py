"""MongoPromoRepository: default value handling and store errors."""

import pytest
from pymongo.errors import AutoReconnect

from showroom.core.domain_types import DEFAULT_PROMO
from showroom.core.errors import DatabaseError
from showroom.repositories.promo import MongoPromoRepository
from showroom.schemas.promo import PromoUpdate
from tests.mock_mongo import MockDatabase


@pytest.fixture
def database():
    return MockDatabase()


@pytest.fixture
def repo(database):
    return MongoPromoRepository(database)


async def test_default_is_a_fresh_copy(repo):
    promo = await repo.get()
    promo["title"] = "changed by caller"

    assert (await repo.get())["title"] == DEFAULT_PROMO["title"]


async def test_upsert_with_no_fields_creates_timestamped_document(repo, database):
    result = await repo.upsert(PromoUpdate())

    assert result["_id"] == "current"
    assert result["createdAt"] == result["updatedAt"]
    assert len(database.documents("promos")) == 1


async def test_saved_promo_replaces_default(repo):
    await repo.upsert(PromoUpdate(title="Winter offer"))

    promo = await repo.get()

    assert promo["title"] == "Winter offer"
    assert "tagText" not in promo


async def test_store_error_is_translated(repo, database):
    database.fail_with[("promos", "find_one")] = AutoReconnect("socket closed")

    with pytest.raises(DatabaseError) as exc:
        await repo.get()

    assert exc.value.context.collection == "promos"
    assert "socket closed" in exc.value.message
