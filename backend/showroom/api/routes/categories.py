"""Category Routes: list, create, sync, upsert and delete product categories.

Invariants:
    - Categories are addressed by their business `id`, never by `_id`
    - DELETE of a missing category still answers {"success": true}
"""

from fastapi import APIRouter, Depends, status

from showroom.api.dependencies import get_category_repository
from showroom.core.repository_protocols import CategoryRepository
from showroom.schemas.category import (
    Category, CategorySync, CategorySyncResult, CategoryUpdate,
)

router = APIRouter(prefix="/api", tags=["categories"])


@router.get("/products")
async def list_categories(
    repo: CategoryRepository = Depends(get_category_repository),
):
    """All categories with their products."""
    return await repo.list_all()


@router.post("/category", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: Category, repo: CategoryRepository = Depends(get_category_repository),
):
    return await repo.create(body)


@router.post("/products/sync", response_model=CategorySyncResult)
async def sync_categories(
    body: CategorySync, repo: CategoryRepository = Depends(get_category_repository),
):
    """Replace every category with the given list."""
    count = await repo.replace_all(body.categories)
    return CategorySyncResult(message=f"Synced {count} categories")


@router.put("/category/{category_id}")
async def upsert_category(
    category_id: str,
    body: CategoryUpdate,
    repo: CategoryRepository = Depends(get_category_repository),
):
    """Update the category's fields, creating it when it does not exist."""
    return await repo.upsert(category_id, body)


@router.delete("/category/{category_id}")
async def delete_category(
    category_id: str, repo: CategoryRepository = Depends(get_category_repository),
):
    await repo.delete(category_id)
    return {"success": True}
