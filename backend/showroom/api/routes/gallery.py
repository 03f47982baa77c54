"""Gallery Routes: list, add, sync and delete gallery photos.

Invariants:
    - Items are addressed by the store-assigned `_id` string
    - DELETE of an unknown id still answers {"success": true}
"""

from fastapi import APIRouter, Depends, status

from showroom.api.dependencies import get_gallery_repository
from showroom.core.repository_protocols import GalleryRepository
from showroom.schemas.gallery import (
    GalleryItemCreate, GallerySync, GallerySyncResult,
)

router = APIRouter(prefix="/api/gallery", tags=["gallery"])


@router.get("")
async def list_gallery(repo: GalleryRepository = Depends(get_gallery_repository)):
    """Gallery items, newest first."""
    return await repo.list_all()


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_gallery_item(
    body: GalleryItemCreate,
    repo: GalleryRepository = Depends(get_gallery_repository),
):
    return await repo.create(body)


@router.post("/sync", response_model=GallerySyncResult)
async def sync_gallery(
    body: GallerySync, repo: GalleryRepository = Depends(get_gallery_repository),
):
    """Replace every gallery item with the given list."""
    count = await repo.replace_all(body.items)
    return GallerySyncResult(count=count)


@router.delete("/{item_id}")
async def delete_gallery_item(
    item_id: str, repo: GalleryRepository = Depends(get_gallery_repository),
):
    await repo.delete(item_id)
    return {"success": True}
