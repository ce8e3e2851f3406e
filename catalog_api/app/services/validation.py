"""
Input checks shared by the category and product services.

Every helper either returns the normalised value or raises
``ValidationError`` with the message that is sent back to the client.
Path ids are checked here before any query runs.
"""

import math
from typing import Any

from catalog_api.app.core.errors import ValidationError

# SQLite stores INTEGER values as signed 64-bit numbers.
MAX_ID = 2 ** 63 - 1


def is_non_empty_string(value: Any) -> bool:
    """True for strings with visible content that SQLite can store as UTF-8."""
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates
        return False
    return True


def parse_id(raw: str, resource: str) -> int:
    """Parse a path id into a positive integer.

    ``resource`` is used in the error message, e.g. ``"Invalid product ID"``.
    """
    if raw.isascii() and raw.isdigit():
        value = int(raw)
        if 0 < value <= MAX_ID:
            return value
    raise ValidationError(f"Invalid {resource} ID")


def parse_price(value: Any) -> float:
    """Return ``value`` as a float if it is a finite, strictly positive number.

    Numeric strings such as ``"49.99"`` are accepted; booleans are not.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValidationError("Product price must be a positive number.")
    try:
        value = float(value)
    except (ValueError, OverflowError):
        raise ValidationError("Product price must be a positive number.") from None
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Product price must be a positive number.")
    return value


def parse_category_id(value: Any) -> int:
    """Return ``value`` as an integer category id.

    Integral floats (``1.0``) and digit strings (``"1"``) are accepted.
    Whether the category exists is checked by the database on write.
    """
    if isinstance(value, bool):
        raise ValidationError("Category ID must be a valid number.")
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("-"):
            sign, text = -1, text[1:]
        else:
            sign = 1
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("Category ID must be a valid number.")
        value = sign * int(text)
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("Category ID must be a valid number.")
        value = int(value)
    if not isinstance(value, int) or abs(value) > MAX_ID:
        raise ValidationError("Category ID must be a valid number.")
    return value
