"""MongoDB Client Manager: one async client per process, index setup and health checks.

Invariants:
    - Exactly one AsyncMongoClient per MongoClientManager; it is created at startup
      and handed to routes through app.state, never imported as a global
    - All PyMongo exceptions mapped to ShowroomError subclasses (core/errors.py)
      by translate_errors()
    - health_check() never raises
    - connect() drops staging collections left over from interrupted syncs

Design Decisions:
    - PyMongo's native async API (AsyncMongoClient): no thread pool, no Motor
    - tz_aware=True: timestamps come back as aware UTC datetimes
    - Index definitions live in INDEXES so staging collections used by sync get
      the same unique constraints as the live collection
"""

import asyncio
import logging
from contextlib import contextmanager
from typing import Iterator

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient, IndexModel
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import (
    BulkWriteError, DuplicateKeyError, PyMongoError,
)

from showroom.core.domain_types import Collection
from showroom.core.errors import (
    DatabaseError, DuplicateKeyConflictError, ErrorContext,
)

logger = logging.getLogger(__name__)

DUPLICATE_KEY_CODE = 11000

# Staging collections are named <live>_staging_<uuid4 hex>
STAGING_INFIX = "_staging_"
STAGING_PATTERN = f"{STAGING_INFIX}[0-9a-f]{{32}}$"

INDEXES: dict[str, list[IndexModel]] = {
    Collection.CATEGORIES.value: [
        IndexModel([("id", ASCENDING)], name="id_unique", unique=True),
    ],
    Collection.GALLERY.value: [
        IndexModel([("createdAt", DESCENDING)], name="createdAt_desc"),
    ],
}


@contextmanager
def translate_errors(
    collection: str, operation: str, document_key: str | None = None,
) -> Iterator[None]:
    """Map PyMongo exceptions raised inside the block to ShowroomError."""
    ctx = ErrorContext(
        collection=collection, operation=operation, document_key=document_key,
    )
    try:
        yield
    except DuplicateKeyError as e:
        logger.warning(
            f"Duplicate key on {collection}.{operation}: {e.details}",
            extra={"collection": collection, "operation": operation},
        )
        raise DuplicateKeyConflictError(
            _duplicate_message(collection, e.details), ctx,
        ) from e
    except BulkWriteError as e:
        write_errors = e.details.get("writeErrors", [])
        if write_errors and write_errors[0].get("code") == DUPLICATE_KEY_CODE:
            raise DuplicateKeyConflictError(
                _duplicate_message(collection, write_errors[0]), ctx,
            ) from e
        logger.error(f"Bulk write error on {collection}: {e.details}")
        raise DatabaseError(str(e), operation, ctx) from e
    except PyMongoError as e:
        logger.error(
            f"MongoDB error on {collection}.{operation}: {e}",
            extra={"collection": collection, "operation": operation},
        )
        raise DatabaseError(str(e), operation, ctx) from e


def _duplicate_message(collection: str, details: dict | None) -> str:
    key_value = (details or {}).get("keyValue")
    if key_value:
        pairs = ", ".join(f"{k}={v!r}" for k, v in key_value.items())
        return f"Duplicate key in {collection}: {pairs}"
    return f"Duplicate key in {collection}"


async def create_indexes(collection: AsyncCollection, name: str) -> None:
    """Create the indexes declared for `name` on `collection` (which may be a staging copy)."""
    models = INDEXES.get(name)
    if models:
        await collection.create_indexes(models)


class MongoClientManager:
    """Owns the AsyncMongoClient and the application database handle."""

    def __init__(
        self,
        uri: str,
        database_name: str = "showroom",
        server_selection_timeout_ms: int = 5000,
        health_timeout_ms: int = 1000,
        client: AsyncMongoClient | None = None,
    ):
        self.client = client if client is not None else AsyncMongoClient(
            uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            tz_aware=True,
            appname="showroom-api",
        )
        self.database: AsyncDatabase = self.client.get_default_database(
            default=database_name,
        )
        self._health_timeout = health_timeout_ms / 1000

    async def connect(self) -> None:
        """Verify connectivity and create indexes. Raises DatabaseError when unreachable."""
        with translate_errors("admin", "connect"):
            await self.client.admin.command("ping")
            for name in INDEXES:
                await create_indexes(self.database[name], name)
            await self.drop_stale_staging()
        logger.info(f"Connected to MongoDB database '{self.database.name}'")

    async def drop_stale_staging(self) -> list[str]:
        """Drop staging collections left behind by syncs that never reached the swap."""
        names = await self.database.list_collection_names(
            filter={"name": {"$regex": STAGING_PATTERN}},
        )
        for name in names:
            await self.database.drop_collection(name)
            logger.warning(
                f"Dropped stale staging collection {name}",
                extra={"collection": name, "operation": "connect"},
            )
        return names

    async def health_check(self) -> bool:
        """Ping the server (for the health probe)."""
        try:
            await asyncio.wait_for(
                self.client.admin.command("ping"), timeout=self._health_timeout,
            )
            return True
        except (PyMongoError, asyncio.TimeoutError) as e:
            logger.warning(f"MongoDB health check failed: {e!r}")
            return False

    async def close(self) -> None:
        await self.client.close()
        logger.info("MongoDB client closed")
