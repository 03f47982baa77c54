"""Category Repository: categories with embedded products, keyed on the business `id`.

Invariants:
    - `id` is unique (index id_unique); a duplicate create raises DuplicateKeyConflictError
    - upsert never changes a document's `id`; the key argument wins over the body
    - upsert that creates a document validates the full Category first
    - delete of a missing key returns 0 and raises nothing
"""

import logging

from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from showroom.core.domain_types import Collection
from showroom.core.errors import (
    DocumentValidationError, DuplicateKeyConflictError, ErrorContext,
    format_validation_details,
)
from showroom.infrastructure.database import translate_errors
from showroom.infrastructure.documents import (
    serialize_document, stamp_new, utcnow,
)
from showroom.repositories.collection_swap import replace_collection
from showroom.schemas.category import Category, CategoryUpdate

logger = logging.getLogger(__name__)

COLLECTION = Collection.CATEGORIES.value

# Create-vs-update races resolve by retrying the update once
_UPSERT_ATTEMPTS = 2


class MongoCategoryRepository:
    """CategoryRepository over the `categories` collection."""

    def __init__(self, database: AsyncDatabase):
        self._database = database
        self._collection = database[COLLECTION]

    async def list_all(self) -> list[dict]:
        with translate_errors(COLLECTION, "list"):
            documents = await self._collection.find({}).to_list(None)
        return [serialize_document(d) for d in documents]

    async def create(self, category: Category) -> dict:
        document = stamp_new(category.to_document(), utcnow())
        with translate_errors(COLLECTION, "create", category.id):
            result = await self._collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(
            f"Created category '{category.id}'",
            extra={"collection": COLLECTION, "document_key": category.id},
        )
        return serialize_document(document)

    async def replace_all(self, categories: list[Category]) -> int:
        now = utcnow()
        documents = [stamp_new(c.to_document(), now) for c in categories]
        return await replace_collection(self._database, COLLECTION, documents)

    async def upsert(self, key: str, patch: CategoryUpdate) -> dict:
        fields = patch.to_fields()
        for _ in range(_UPSERT_ATTEMPTS):
            updated = await self._update_existing(key, fields)
            if updated is not None:
                return serialize_document(updated)
            category = self._validate_new(key, fields)
            try:
                return await self.create(category)
            except DuplicateKeyConflictError:
                logger.info(
                    f"Category '{key}' created concurrently, retrying as update",
                    extra={"collection": COLLECTION, "document_key": key},
                )
        raise DuplicateKeyConflictError(
            f"Category '{key}' changed concurrently, upsert abandoned",
            ErrorContext(collection=COLLECTION, operation="upsert", document_key=key),
        )

    async def delete(self, key: str) -> int:
        with translate_errors(COLLECTION, "delete", key):
            result = await self._collection.delete_one({"id": key})
        if not result.deleted_count:
            logger.info(
                f"Delete of missing category '{key}' ignored",
                extra={"collection": COLLECTION, "document_key": key},
            )
        return result.deleted_count

    async def _update_existing(self, key: str, fields: dict) -> dict | None:
        with translate_errors(COLLECTION, "upsert", key):
            return await self._collection.find_one_and_update(
                {"id": key},
                {"$set": {**fields, "updatedAt": utcnow()}},
                return_document=ReturnDocument.AFTER,
            )

    @staticmethod
    def _validate_new(key: str, fields: dict) -> Category:
        try:
            return Category.model_validate({**fields, "id": key})
        except ValidationError as e:
            raise DocumentValidationError(
                f"Category '{key}' does not exist and the body is not a complete category",
                details=format_validation_details(e.errors()),
                context=ErrorContext(
                    collection=COLLECTION, operation="upsert", document_key=key,
                ),
            ) from e
