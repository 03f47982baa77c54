"""Promo Schemas: the homepage promotional banner."""

from pydantic import BaseModel, ConfigDict


class PromoUpdate(BaseModel):
    """Partial promo body; only the fields sent are merged."""
    model_config = ConfigDict(extra="ignore")

    tagText: str | None = None
    title: str | None = None
    description: str | None = None
    highlightText: str | None = None
    buttonText: str | None = None
    buttonLink: str | None = None

    def to_fields(self) -> dict:
        return self.model_dump(exclude_unset=True)
