"""Category Schemas: categories with embedded products.

Invariants:
    - Category.id, Category.title, Product.id, Product.title are non-empty strings
    - Category.type is one of CategoryType
    - Product.specs is an open mapping; key order is preserved end to end
    - CategoryUpdate never carries `id`; the path key is authoritative
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from showroom.core.domain_types import CategoryType

# Loosely typed JSON value: str, int, float, bool, None, list or nested mapping.
SpecValue = Any


class Product(BaseModel):
    """Product embedded in a category; addressable only through its parent."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None
    longDescription: str | None = None
    image: str | None = None
    specs: dict[str, SpecValue] = Field(default_factory=dict)


class Category(BaseModel):
    """Full category document as accepted by create and sync."""
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    id: str = Field(min_length=1)
    type: CategoryType
    title: str = Field(min_length=1)
    description: str | None = None
    image: str | None = None
    products: list[Product] = Field(default_factory=list)

    def to_document(self) -> dict:
        """Dump for storage: null optionals are omitted, specs are kept verbatim."""
        document = _drop_none(self.model_dump(mode="json", exclude={"products"}))
        document["products"] = _product_documents(self.products)
        return document


class CategoryUpdate(BaseModel):
    """Partial category body for upsert-by-key."""
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    type: CategoryType | None = None
    title: str | None = Field(None, min_length=1)
    description: str | None = None
    image: str | None = None
    products: list[Product] | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in ("type", "title", "products"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def to_fields(self) -> dict:
        """Fields the client actually sent, ready for $set."""
        fields = self.model_dump(
            mode="json", exclude_unset=True, exclude={"products"},
        )
        # Products are replaced whole, so they get the same shape as on create
        if "products" in self.model_fields_set:
            fields["products"] = _product_documents(self.products)
        return fields


class CategorySync(BaseModel):
    """Body of POST /api/products/sync."""
    categories: list[Category]


class CategorySyncResult(BaseModel):
    success: bool = True
    message: str


def _drop_none(fields: dict) -> dict:
    return {k: v for k, v in fields.items() if v is not None}


def _product_documents(products: list[Product]) -> list[dict]:
    """Storage shape of embedded products: defaults filled in, null optionals omitted."""
    return [_drop_none(p.model_dump(mode="json")) for p in products]
