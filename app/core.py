"""
Payload validation and the numeric coercion rules shared by the store
and the query engine.

Request bodies and query strings are loosely typed: prices may arrive
as JSON numbers or as strings such as ``"19.99"``, page numbers as
``"2"``.  ``parse_number`` and ``parse_int`` read the leading numeric
literal of a string and reject everything else, so ``"12abc"`` is 12
while ``"abc"`` and ``true`` are not numbers at all.

The validators never raise; they return the list of violation messages
and leave the status-code decision to the caller.
"""

import math
import re
from typing import Any, Dict, List, Optional, Union

_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")


def parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None
    return number if math.isfinite(number) else None


def json_number(number: float) -> Union[int, float]:
    # whole numbers go out as 1200, not 1200.0
    return int(number) if number.is_integer() else number


def parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        return int(match.group(0)) if match else None
    return None


def _is_blank_or_not_str(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _is_bad_price(value: Any) -> bool:
    number = parse_number(value)
    return number is None or number < 0


def _present(payload: Dict[str, Any], key: str) -> bool:
    return key in payload


def validate_create(payload: Dict[str, Any]) -> List[str]:
    """Check a create payload; every field except ``inStock`` is required."""
    errors = []

    if _is_blank_or_not_str(payload.get("name")):
        errors.append("Name is required and must be a non-empty string")

    if _is_blank_or_not_str(payload.get("description")):
        errors.append("Description is required and must be a non-empty string")

    if not _present(payload, "price") or _is_bad_price(payload["price"]):
        errors.append("Price is required and must be a non-negative number")

    if _is_blank_or_not_str(payload.get("category")):
        errors.append("Category is required and must be a non-empty string")

    if _present(payload, "inStock") and not isinstance(payload["inStock"], bool):
        errors.append("inStock must be a boolean value if provided")

    return errors


def validate_update(payload: Dict[str, Any]) -> List[str]:
    """Check a partial update; absent fields are never an error."""
    errors = []

    if _present(payload, "name") and _is_blank_or_not_str(payload["name"]):
        errors.append("Name must be a non-empty string if provided")

    if _present(payload, "description") and _is_blank_or_not_str(payload["description"]):
        errors.append("Description must be a non-empty string if provided")

    if _present(payload, "price") and _is_bad_price(payload["price"]):
        errors.append("Price must be a non-negative number if provided")

    if _present(payload, "category") and _is_blank_or_not_str(payload["category"]):
        errors.append("Category must be a non-empty string if provided")

    if _present(payload, "inStock") and not isinstance(payload["inStock"], bool):
        errors.append("inStock must be a boolean value if provided")

    return errors
