"""Gallery Schemas: project photos shown on the gallery page.

Invariants:
    - url, title, location are non-empty strings
    - category falls back to GALLERY_DEFAULT_CATEGORY when missing or null
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from showroom.core.domain_types import GALLERY_DEFAULT_CATEGORY


class GalleryItemCreate(BaseModel):
    """One gallery item as accepted by create and sync."""
    model_config = ConfigDict(extra="ignore")

    url: str = Field(min_length=1)
    title: str = Field(min_length=1)
    location: str = Field(min_length=1)
    category: str = GALLERY_DEFAULT_CATEGORY

    @field_validator("category", mode="before")
    @classmethod
    def default_null_category(cls, v):
        return GALLERY_DEFAULT_CATEGORY if v is None else v

    def to_document(self) -> dict:
        return self.model_dump()


class GallerySync(BaseModel):
    """Body of POST /api/gallery/sync."""
    items: list[GalleryItemCreate]


class GallerySyncResult(BaseModel):
    success: bool = True
    count: int
