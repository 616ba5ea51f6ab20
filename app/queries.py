"""
Read-only views over a snapshot of the product store.

Every function takes the list returned by ``ProductStore.list()`` and
never mutates it.  Query-string values arrive as raw strings (or None)
and are coerced here with the same rules the validator uses.
"""

import math
from typing import Dict, List, Optional

from .core import json_number, parse_int, parse_number
from .errors import ValidationError
from .models import PriceStats, Product, ProductPage, ProductStats, SearchResult

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _positive_or_default(raw: Optional[str], default: int) -> int:
    value = parse_int(raw)
    if value is None or value < 1:
        return default
    return value


def filter_and_paginate(
    snapshot: List[Product],
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    max_price: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ProductPage:
    """Filter the snapshot conjunctively, then slice out one page.

    ``category`` matches case-insensitively.  ``in_stock`` is true only
    for the string ``"true"`` (any case); any other non-empty value
    selects out-of-stock products.  An unparseable ``max_price`` is
    ignored rather than rejected.  ``page`` and ``limit`` fall back to
    1 and 10 when missing, non-numeric or below 1.
    """
    products = list(snapshot)

    if category:
        wanted = category.lower()
        products = [p for p in products if p.category.lower() == wanted]

    if in_stock:
        flag = in_stock.lower() == "true"
        products = [p for p in products if p.in_stock == flag]

    if max_price:
        ceiling = parse_number(max_price)
        if ceiling is not None:
            products = [p for p in products if p.price <= ceiling]

    page_no = _positive_or_default(page, DEFAULT_PAGE)
    per_page = _positive_or_default(limit, DEFAULT_LIMIT)
    start = (page_no - 1) * per_page
    end = start + per_page

    return ProductPage(
        page=page_no,
        limit=per_page,
        total=len(products),
        total_pages=math.ceil(len(products) / per_page),
        data=products[start:end],
    )


def search(snapshot: List[Product], query: Optional[str]) -> SearchResult:
    if not query:
        message = 'Search query parameter "q" is required'
        raise ValidationError([message], message=message)

    term = query.lower()
    results = [
        p for p in snapshot
        if term in p.name.lower() or term in p.description.lower()
    ]
    return SearchResult(query=query, results=results, count=len(results))


def stats(snapshot: List[Product]) -> ProductStats:
    categories: Dict[str, int] = {}
    for p in snapshot:
        categories[p.category] = categories.get(p.category, 0) + 1

    in_stock = sum(1 for p in snapshot if p.in_stock)

    price_stats = PriceStats()
    if snapshot:
        prices = [p.price for p in snapshot]
        price_stats = PriceStats(
            min=min(prices),
            max=max(prices),
            average=json_number(sum(prices) / len(prices)),
        )

    return ProductStats(
        total_products=len(snapshot),
        in_stock=in_stock,
        out_of_stock=len(snapshot) - in_stock,
        categories=categories,
        price_stats=price_stats,
    )
