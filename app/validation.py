# app/validation.py
import math
from typing import Any, List

from .errors import AppError
from .models import ProductIn
from .result import Err, Ok, Result


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return False


def product_errors(payload: Any) -> List[str]:
    """Return one message per invalid field, in field order."""
    if not isinstance(payload, dict):
        payload = {}

    errors = []
    if not _is_text(payload.get("name")):
        errors.append("name (string) is required")
    if not _is_text(payload.get("description")):
        errors.append("description (string) is required")
    if not _is_number(payload.get("price")):
        errors.append("price (number) is required")
    if not _is_text(payload.get("category")):
        errors.append("category (string) is required")
    if not isinstance(payload.get("inStock"), bool):
        errors.append("inStock (boolean) is required")
    return errors


def validate_product(payload: Any) -> Result[ProductIn]:
    errors = product_errors(payload)
    if errors:
        return Err(AppError.validation("; ".join(errors)))

    return Ok(ProductIn(
        name=payload["name"],
        description=payload["description"],
        price=payload["price"],
        category=payload["category"],
        in_stock=payload["inStock"],
    ))
