"""Promo Routes: read and update the homepage banner."""

from fastapi import APIRouter, Depends

from showroom.api.dependencies import get_promo_repository
from showroom.core.repository_protocols import PromoRepository
from showroom.schemas.promo import PromoUpdate

router = APIRouter(prefix="/api/promo", tags=["promo"])


@router.get("")
async def get_promo(repo: PromoRepository = Depends(get_promo_repository)):
    """Current promo, or the built-in default when none was saved."""
    return await repo.get()


@router.put("")
async def update_promo(
    body: PromoUpdate, repo: PromoRepository = Depends(get_promo_repository),
):
    return await repo.upsert(body)
