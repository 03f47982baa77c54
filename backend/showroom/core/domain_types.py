"""Domain Types: enums and fixed values shared by schemas and repositories.

Invariants:
    - Collection names live here only; repositories never hardcode them
    - DEFAULT_PROMO is never written to the store
    - PROMO_KEY is the one _id the promo collection ever holds
"""

from enum import Enum
from types import MappingProxyType


class CategoryType(str, Enum):
    """Product line a category belongs to."""
    WINDOWS = "windows"
    DOORS = "doors"


class Collection(str, Enum):
    """MongoDB collection names."""
    CATEGORIES = "categories"
    PROMOS = "promos"
    GALLERY = "gallery"


PROMO_KEY = "current"

GALLERY_DEFAULT_CATEGORY = "General"

DEFAULT_PROMO = MappingProxyType({
    "tagText": "Special Offer",
    "title": "Already have a quote?",
    "description": "We aim to beat any comparable written quotes by up to",
    "highlightText": "15%",
    "buttonText": "Learn More",
    "buttonLink": "#contact",
})
