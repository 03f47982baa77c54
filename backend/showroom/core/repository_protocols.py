"""Boundary Protocols: contracts between the API layer and persistence.

Invariants:
    - Routes depend on these Protocols, never on a concrete MongoDB class
    - Every method returns plain JSON-ready dicts (ids as str, datetimes as datetime)
    - Deletes never raise for a missing record; they report how many were removed

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async methods: every implementation does IO
"""

from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from showroom.schemas.category import Category, CategoryUpdate
    from showroom.schemas.gallery import GalleryItemCreate
    from showroom.schemas.promo import PromoUpdate


class CategoryRepository(Protocol):
    """Contract for category persistence, keyed on the business `id`."""
    async def list_all(self) -> list[dict]: ...
    async def create(self, category: "Category") -> dict: ...
    async def replace_all(self, categories: list["Category"]) -> int: ...
    async def upsert(self, key: str, patch: "CategoryUpdate") -> dict: ...
    async def delete(self, key: str) -> int: ...


class PromoRepository(Protocol):
    """Contract for the singleton promo banner."""
    async def get(self) -> dict: ...
    async def upsert(self, patch: "PromoUpdate") -> dict: ...


class GalleryRepository(Protocol):
    """Contract for gallery persistence, keyed on the store-assigned `_id`."""
    async def list_all(self) -> list[dict]: ...
    async def create(self, item: "GalleryItemCreate") -> dict: ...
    async def replace_all(self, items: list["GalleryItemCreate"]) -> int: ...
    async def delete(self, item_id: str) -> int: ...
