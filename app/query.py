# app/query.py
"""Listing and aggregation over a store snapshot.

Pure functions: callers pass ``ProductStore.list()`` and get plain dicts back,
ready to serialize.
"""

import re
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from .models import Product

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def coerce_positive_int(value: Any, default: int) -> int:
    """Lenient query-string integer: "3" -> 3, "2abc" -> 2, "abc"/"0"/None -> default."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(str(value))
        if not match:
            return default
        number = int(match.group(1))
    return number if number >= 1 else default


def filter_products(
    products: Sequence[Product],
    category: Optional[str] = None,
    search: Optional[str] = None,
) -> List[Product]:
    out = list(products)
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if search:
        term = search.lower()
        out = [p for p in out if term in p.name.lower()]
    return out


def paginate(items: Sequence[Product], page: int, limit: int) -> List[Product]:
    start = (page - 1) * limit
    return list(items[start:start + limit])


def list_products(
    snapshot: Sequence[Product],
    category: Optional[str] = None,
    search: Optional[str] = None,
    page: Any = None,
    limit: Any = None,
) -> Dict[str, Any]:
    filtered = filter_products(snapshot, category, search)
    page = coerce_positive_int(page, DEFAULT_PAGE)
    limit = coerce_positive_int(limit, DEFAULT_LIMIT)
    return {
        "page": page,
        "limit": limit,
        "total": len(filtered),
        "data": [p.to_dict() for p in paginate(filtered, page, limit)],
    }


def category_stats(snapshot: Sequence[Product]) -> Dict[str, Any]:
    return {
        "total": len(snapshot),
        "byCategory": dict(Counter(p.category for p in snapshot)),
    }
