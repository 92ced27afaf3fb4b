"""Data models package."""
from src.models.activity import ActivityEntry
from src.models.product import (
    Product,
    Visibility,
    VISIBILITY_MODES,
    coerce_active,
    normalize_row,
)

__all__ = [
    "ActivityEntry",
    "Product",
    "Visibility",
    "VISIBILITY_MODES",
    "coerce_active",
    "normalize_row",
]
