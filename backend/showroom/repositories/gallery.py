"""Gallery Repository: project photos, addressed by the store-assigned `_id`.

Invariants:
    - list_all() is newest first: createdAt descending, then _id descending
    - replace_all() inserts in reverse so a synced batch lists in payload order
    - delete() of an unknown or malformed id returns 0 and raises nothing
"""

import logging

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.asynchronous.database import AsyncDatabase

from showroom.core.domain_types import Collection
from showroom.infrastructure.database import translate_errors
from showroom.infrastructure.documents import serialize_document, stamp_new, utcnow
from showroom.repositories.collection_swap import replace_collection
from showroom.schemas.gallery import GalleryItemCreate

logger = logging.getLogger(__name__)

COLLECTION = Collection.GALLERY.value

LIST_ORDER = [("createdAt", DESCENDING), ("_id", DESCENDING)]


class MongoGalleryRepository:
    """GalleryRepository over the `gallery` collection."""

    def __init__(self, database: AsyncDatabase):
        self._database = database
        self._collection = database[COLLECTION]

    async def list_all(self) -> list[dict]:
        with translate_errors(COLLECTION, "list"):
            documents = await self._collection.find({}).sort(LIST_ORDER).to_list(None)
        return [serialize_document(d) for d in documents]

    async def create(self, item: GalleryItemCreate) -> dict:
        document = stamp_new(item.to_document(), utcnow())
        with translate_errors(COLLECTION, "create"):
            result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(
            f"Added gallery item {result.inserted_id}",
            extra={"collection": COLLECTION, "document_key": str(result.inserted_id)},
        )
        return serialize_document(document)

    async def replace_all(self, items: list[GalleryItemCreate]) -> int:
        now = utcnow()
        documents = [stamp_new(i.to_document(), now) for i in reversed(items)]
        return await replace_collection(self._database, COLLECTION, documents)

    async def delete(self, item_id: str) -> int:
        if not ObjectId.is_valid(item_id):
            logger.info(
                f"Delete of malformed gallery id {item_id!r} ignored",
                extra={"collection": COLLECTION, "document_key": item_id},
            )
            return 0
        with translate_errors(COLLECTION, "delete", item_id):
            result = await self._collection.delete_one({"_id": ObjectId(item_id)})
        return result.deleted_count
