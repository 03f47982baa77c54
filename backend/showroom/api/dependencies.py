"""Route Dependencies: hand the per-process MongoDB handle to route handlers.

Invariants:
    - The MongoClientManager lives on app.state.mongo (set by the lifespan)
    - Routes receive repositories through Depends(), never a module global
    - Tests replace get_mongo_manager / get_database via app.dependency_overrides
"""

from fastapi import Depends, Request
from pymongo.asynchronous.database import AsyncDatabase

from showroom.core.repository_protocols import (
    CategoryRepository, GalleryRepository, PromoRepository,
)
from showroom.infrastructure.database import MongoClientManager
from showroom.repositories.categories import MongoCategoryRepository
from showroom.repositories.gallery import MongoGalleryRepository
from showroom.repositories.promo import MongoPromoRepository


def get_mongo_manager(request: Request) -> MongoClientManager | None:
    return getattr(request.app.state, "mongo", None)


def get_database(
    manager: MongoClientManager | None = Depends(get_mongo_manager),
) -> AsyncDatabase:
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager.database


def get_category_repository(
    database: AsyncDatabase = Depends(get_database),
) -> CategoryRepository:
    return MongoCategoryRepository(database)


def get_promo_repository(
    database: AsyncDatabase = Depends(get_database),
) -> PromoRepository:
    return MongoPromoRepository(database)


def get_gallery_repository(
    database: AsyncDatabase = Depends(get_database),
) -> GalleryRepository:
    return MongoGalleryRepository(database)
