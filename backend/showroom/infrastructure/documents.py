"""Document Helpers: timestamps and JSON-ready serialization of stored documents.

Invariants:
    - Every write stamps updatedAt; inserts also stamp createdAt with the same instant
    - serialize_document never mutates its input and turns every ObjectId into str
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId


def utcnow() -> datetime:
    # MongoDB stores milliseconds; truncate so returned and re-read values agree
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def stamp_new(document: dict, now: datetime | None = None) -> dict:
    """Set createdAt/updatedAt on a document about to be inserted."""
    now = now or utcnow()
    document["createdAt"] = now
    document["updatedAt"] = now
    return document


def serialize_document(document: Mapping[str, Any] | None) -> dict | None:
    if document is None:
        return None
    return {key: _jsonable(value) for key, value in document.items()}


def _jsonable(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value
