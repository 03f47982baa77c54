"""Collection Swap: replace a collection's contents wholesale in one atomic step.

Invariants:
    - The live collection is never observed half-written: documents go into a
      uniquely named staging collection, which is then renamed over the live one
    - Any failure or cancellation before the rename drops the staging collection
      and leaves the live collection untouched
    - Concurrent swaps on the same collection never mix documents; the last rename wins
    - Staging left by a killed process is dropped by MongoClientManager.connect()

Design Decisions:
    - renameCollection with dropTarget over delete-then-insert: one server-side
      operation, works on standalone servers where transactions are unavailable
"""

import logging
from uuid import uuid4

from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from showroom.infrastructure.database import (
    STAGING_INFIX, create_indexes, translate_errors,
)

logger = logging.getLogger(__name__)


async def replace_collection(
    database: AsyncDatabase, name: str, documents: list[dict],
) -> int:
    """Make `documents` the full contents of collection `name`. Returns the count written."""
    staging = database[f"{name}{STAGING_INFIX}{uuid4().hex}"]
    with translate_errors(name, "sync"):
        try:
            await create_indexes(staging, name)
            if documents:
                await staging.insert_many(documents, ordered=True)
            await staging.rename(name, dropTarget=True)
        except BaseException:
            await _drop_staging(staging)
            raise
    logger.info(
        f"Replaced {name} with {len(documents)} documents",
        extra={"collection": name, "operation": "sync", "count": len(documents)},
    )
    return len(documents)


async def _drop_staging(staging) -> None:
    try:
        await staging.drop()
    except PyMongoError as e:
        logger.error(f"Failed to drop staging collection {staging.name}: {e}")
