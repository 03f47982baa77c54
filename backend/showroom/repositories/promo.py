"""Promo Repository: the singleton homepage banner.

Invariants:
    - The only document ever written has _id == PROMO_KEY
    - get() on an empty collection returns DEFAULT_PROMO without writing it
    - upsert() is a single atomic find_one_and_update(upsert=True)
"""

from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from showroom.core.domain_types import Collection, DEFAULT_PROMO, PROMO_KEY
from showroom.infrastructure.database import translate_errors
from showroom.infrastructure.documents import serialize_document, utcnow
from showroom.schemas.promo import PromoUpdate

COLLECTION = Collection.PROMOS.value


class MongoPromoRepository:
    """PromoRepository over the `promos` collection."""

    def __init__(self, database: AsyncDatabase):
        self._collection = database[COLLECTION]

    async def get(self) -> dict:
        with translate_errors(COLLECTION, "get", PROMO_KEY):
            document = await self._collection.find_one({"_id": PROMO_KEY})
        if document is None:
            return dict(DEFAULT_PROMO)
        return serialize_document(document)

    async def upsert(self, patch: PromoUpdate) -> dict:
        now = utcnow()
        with translate_errors(COLLECTION, "upsert", PROMO_KEY):
            document = await self._collection.find_one_and_update(
                {"_id": PROMO_KEY},
                {
                    "$set": {**patch.to_fields(), "updatedAt": now},
                    "$setOnInsert": {"createdAt": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        return serialize_document(document)
