"""MongoCategoryRepository: sync atomicity, upsert races and document shape."""

import asyncio

import pytest
from pymongo.errors import AutoReconnect

from showroom.core.errors import (
    DatabaseError, DocumentValidationError, DuplicateKeyConflictError,
)
from showroom.infrastructure.database import create_indexes
from showroom.repositories.categories import MongoCategoryRepository
from showroom.schemas.category import Category, CategoryUpdate
from tests.mock_mongo import MockDatabase
from tests.payloads import category_payload


@pytest.fixture
async def database():
    db = MockDatabase()
    await create_indexes(db["categories"], "categories")
    return db


@pytest.fixture
def repo(database):
    return MongoCategoryRepository(database)


def _category(key: str = "casement", **overrides) -> Category:
    return Category.model_validate(category_payload(key, **overrides))


async def test_create_omits_null_optionals(repo, database):
    await repo.create(_category(description=None, image=None))

    stored = database.documents("categories")[0]
    assert "description" not in stored
    assert "image" not in stored
    assert "longDescription" in stored["products"][0]
    assert "image" not in stored["products"][0]


async def test_create_keeps_null_values_inside_specs(repo, database):
    category = category_payload()
    category["products"][0]["specs"] = {"finish": None, "uValue": 1.4}

    await repo.create(Category.model_validate(category))

    specs = database.documents("categories")[0]["products"][0]["specs"]
    assert specs == {"finish": None, "uValue": 1.4}


async def test_create_duplicate_raises_conflict(repo):
    await repo.create(_category())
    with pytest.raises(DuplicateKeyConflictError) as exc:
        await repo.create(_category())
    assert "casement" in exc.value.message


async def test_replace_all_stamps_one_instant(repo):
    await repo.replace_all([_category("a"), _category("b")])

    listed = await repo.list_all()
    assert len({c["createdAt"] for c in listed}) == 1
    assert all(c["createdAt"] == c["updatedAt"] for c in listed)


async def test_replace_all_failure_before_swap_keeps_live_collection(repo, database):
    await repo.create(_category("live"))
    database.fail_with[("*", "insert_many")] = AutoReconnect("network blip")

    with pytest.raises(DatabaseError):
        await repo.replace_all([_category("new")])

    assert [c["id"] for c in await repo.list_all()] == ["live"]
    assert database.collection_names() == ["categories"]


async def test_replace_all_failure_on_swap_drops_staging(repo, database):
    await repo.create(_category("live"))
    database.fail_with[("*", "rename")] = AutoReconnect("primary stepped down")

    with pytest.raises(DatabaseError):
        await repo.replace_all([_category("new")])

    assert [c["id"] for c in await repo.list_all()] == ["live"]
    assert database.collection_names() == ["categories"]


async def test_replace_all_cancelled_mid_sync_drops_staging(repo, database):
    await repo.create(_category("live"))
    database.fail_with[("*", "insert_many")] = asyncio.CancelledError()

    with pytest.raises(asyncio.CancelledError):
        await repo.replace_all([_category("new")])

    assert [c["id"] for c in await repo.list_all()] == ["live"]
    assert database.collection_names() == ["categories"]


async def test_replace_all_keeps_unique_index_on_new_collection(repo):
    await repo.replace_all([_category("a")])
    with pytest.raises(DuplicateKeyConflictError):
        await repo.create(_category("a"))


async def test_upsert_retries_as_update_after_concurrent_create(repo, database, monkeypatch):
    await repo.create(_category())
    real_update = repo._update_existing
    calls = []

    async def stale_first_read(key, fields):
        calls.append(key)
        if len(calls) == 1:
            return None  # another request inserted the key after this read
        return await real_update(key, fields)

    monkeypatch.setattr(repo, "_update_existing", stale_first_read)

    result = await repo.upsert("casement", CategoryUpdate(title="Renamed", type="windows"))

    assert len(calls) == 2
    assert result["title"] == "Renamed"
    assert len(database.documents("categories")) == 1


async def test_upsert_new_key_validates_complete_category(repo):
    with pytest.raises(DocumentValidationError) as exc:
        await repo.upsert("skylight", CategoryUpdate(description="only this"))

    fields = {d["field"] for d in exc.value.details}
    assert fields == {"type", "title"}
    assert exc.value.context.document_key == "skylight"


async def test_upsert_empty_patch_on_existing_only_touches_updated_at(repo):
    created = await repo.create(_category())

    result = await repo.upsert("casement", CategoryUpdate())

    assert {k: v for k, v in result.items() if k != "updatedAt"} == {
        k: v for k, v in created.items() if k != "updatedAt"
    }


async def test_delete_reports_count(repo):
    await repo.create(_category())
    assert await repo.delete("casement") == 1
    assert await repo.delete("casement") == 0
