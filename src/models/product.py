"""Product model."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Visibility = Literal["active", "inactive", "all"]
VISIBILITY_MODES: tuple[str, ...] = ("active", "inactive", "all")

# Wire column names on the remote products table
ID_FIELD = "product_id"
NAME_FIELD = "product_name"
QUANTITY_FIELD = "quantity"
COST_FIELD = "cost"
ACTIVE_FIELD = "isActive"
CREATED_FIELD = "created_at"

# Legacy price columns, checked in this order when cost is missing
LEGACY_COST_FIELDS = ("price", "unit_price")

_TRUE_STRINGS = {"true", "t"}


def coerce_active(value) -> bool:
    """Coerce a stored isActive value to a strict boolean.

    Missing (None) means active. True, 1, "1", "true" and "t" (any case)
    are active; everything else is inactive.
    """
    if value is None:
        return True
    if value is True:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)) and value == 1:
        return True
    if isinstance(value, str):
        return value == "1" or value.lower() in _TRUE_STRINGS
    return False


def _as_number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def normalize_row(row: dict) -> dict:
    """Return a copy of a store row with cost and isActive normalized."""
    out = dict(row)
    if out.get(COST_FIELD) is None:
        for legacy in LEGACY_COST_FIELDS:
            if out.get(legacy) is not None:
                out[COST_FIELD] = out[legacy]
                break
    out[ACTIVE_FIELD] = coerce_active(out.get(ACTIVE_FIELD))
    return out


@dataclass
class Product:
    product_id: str
    product_name: str
    quantity: int = 0
    cost: float = 0.0
    is_active: bool = True
    created_at: str | None = None
    extra: dict = field(default_factory=dict, repr=False)

    @classmethod
    def from_row(cls, row: dict) -> "Product":
        """Build a Product from a (normalized or raw) store row."""
        row = normalize_row(row)
        known = {ID_FIELD, NAME_FIELD, QUANTITY_FIELD, COST_FIELD, ACTIVE_FIELD, CREATED_FIELD}
        return cls(
            product_id=str(row.get(ID_FIELD) or ""),
            product_name=str(row.get(NAME_FIELD) or ""),
            quantity=int(_as_number(row.get(QUANTITY_FIELD))),
            cost=_as_number(row.get(COST_FIELD)),
            is_active=row[ACTIVE_FIELD],
            created_at=row.get(CREATED_FIELD),
            extra={k: v for k, v in row.items() if k not in known},
        )

    def to_row(self) -> dict:
        """Serialize to the wire shape expected by the store."""
        row = {
            ID_FIELD: self.product_id,
            NAME_FIELD: self.product_name,
            QUANTITY_FIELD: self.quantity,
            COST_FIELD: self.cost,
            ACTIVE_FIELD: self.is_active,
        }
        if self.created_at:
            row[CREATED_FIELD] = self.created_at
        return row

    @property
    def total_value(self) -> float:
        return (self.quantity or 0) * (self.cost or 0)

    def __repr__(self) -> str:
        return f"<Product id={self.product_id} name={self.product_name!r}>"
