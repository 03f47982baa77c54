"""MongoGalleryRepository: ordering, sync and delete by _id."""

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect

from showroom.core.errors import DatabaseError
from showroom.repositories.gallery import MongoGalleryRepository
from showroom.schemas.gallery import GalleryItemCreate
from tests.mock_mongo import MockDatabase
from tests.payloads import gallery_payload


@pytest.fixture
def database():
    return MockDatabase()


@pytest.fixture
def repo(database):
    return MongoGalleryRepository(database)


def _item(title: str, **overrides) -> GalleryItemCreate:
    return GalleryItemCreate.model_validate(gallery_payload(title, **overrides))


async def test_create_returns_string_id(repo, database):
    created = await repo.create(_item("porch"))

    stored = database.documents("gallery")[0]
    assert isinstance(stored["_id"], ObjectId)
    assert created["_id"] == str(stored["_id"])


async def test_sync_round_trip_preserves_listing_order(repo):
    await repo.replace_all([_item("x"), _item("y"), _item("z")])
    listed = await repo.list_all()

    await repo.replace_all([
        GalleryItemCreate.model_validate(i) for i in listed
    ])

    assert [i["title"] for i in await repo.list_all()] == ["x", "y", "z"]


async def test_items_created_after_sync_list_first(repo):
    await repo.replace_all([_item("old-1"), _item("old-2")])
    await repo.create(_item("new"))

    assert (await repo.list_all())[0]["title"] == "new"


async def test_sync_failure_keeps_existing_items(repo, database):
    await repo.create(_item("keep"))
    database.fail_with[("*", "insert_many")] = AutoReconnect("network blip")

    with pytest.raises(DatabaseError):
        await repo.replace_all([_item("lost")])

    assert [i["title"] for i in await repo.list_all()] == ["keep"]


async def test_delete_malformed_id_skips_the_store(repo, database):
    database.fail_with[("gallery", "delete_one")] = AutoReconnect("must not be called")
    assert await repo.delete("12345") == 0


async def test_delete_existing_and_missing(repo):
    created = await repo.create(_item("porch"))
    assert await repo.delete(created["_id"]) == 1
    assert await repo.delete(created["_id"]) == 0
