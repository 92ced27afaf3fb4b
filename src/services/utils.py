"""Shared utility functions for services."""
import math
import numbers
import random
import string
from typing import Optional

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_product_id(length: int = 9) -> str:
    """Return a random base-36 identifier for a new product row."""
    return "".join(random.choices(_ID_ALPHABET, k=length))


def parse_number(value) -> Optional[float]:
    """Parse spreadsheet cell values like 12, '12.5', '1,200' into a float.

    Returns None for blanks, NaN and anything non-numeric.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        if math.isnan(value):
            return None
        return float(value)
    if isinstance(value, str):
        cleaned = value.replace(",", "").replace("$", "").strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def number_or_default(value, default: float = 1, integer: bool = False):
    """Parse *value*, falling back to *default* when missing, zero or invalid."""
    number = parse_number(value)
    if not number:
        return int(default) if integer else default
    return int(number) if integer else number
