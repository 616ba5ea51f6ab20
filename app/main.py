# app/main.py
"""
FastAPI application for the in-memory product catalog.

Serve it with uvicorn, e.g.::

    uvicorn app.main:app --port 3000

or run ``python -m app.main`` / the ``product-api`` script, which reads
host and port from ``Settings``.
"""

from fastapi import Body, Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from typing import Any, Dict, Optional

from .config import settings
from .core import validate_create, validate_update
from .database import PRODUCTS
from .errors import ValidationError, register_exception_handlers
from .logging_config import log_requests, setup_logging
from .models import Product, ProductMessage, ProductPage, ProductStats, SearchResult
from . import queries
from .security import require_api_key

setup_logging(settings.log_level, settings.log_file)

app = FastAPI(title=settings.project_name, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(log_requests)
register_exception_handlers(app)


@app.get("/")
async def root():
    return {
        "message": "Welcome to the Product API!",
        "endpoints": {
            "getAllProducts": "GET /api/products",
            "getProduct": "GET /api/products/:id",
            "createProduct": "POST /api/products",
            "updateProduct": "PUT /api/products/:id",
            "deleteProduct": "DELETE /api/products/:id",
            "searchProducts": "GET /api/products/search?q=name",
            "getStats": "GET /api/products/stats",
        },
    }


# ---------------------------
# Read endpoints
# ---------------------------
# search and stats must be registered before /{product_id}
@app.get("/api/products", response_model=ProductPage)
async def list_products(
    category: Optional[str] = None,
    in_stock: Optional[str] = Query(None, alias="inStock"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
):
    return queries.filter_and_paginate(
        PRODUCTS.list(),
        category=category,
        in_stock=in_stock,
        max_price=max_price,
        page=page,
        limit=limit,
    )


@app.get("/api/products/search", response_model=SearchResult)
async def search_products(q: Optional[str] = None):
    return queries.search(PRODUCTS.list(), q)


@app.get("/api/products/stats", response_model=ProductStats)
async def product_stats():
    return queries.stats(PRODUCTS.list())


@app.get("/api/products/{product_id}", response_model=Product)
async def get_product(product_id: str):
    return PRODUCTS.get(product_id)


# ---------------------------
# Mutating endpoints (x-api-key required)
# ---------------------------
@app.post(
    "/api/products",
    status_code=201,
    response_model=ProductMessage,
    dependencies=[Depends(require_api_key)],
)
async def create_product(payload: Dict[str, Any] = Body(...)):
    errors = validate_create(payload)
    if errors:
        raise ValidationError(errors)
    product = PRODUCTS.create(payload)
    return ProductMessage(message="Product created successfully", product=product)


@app.put(
    "/api/products/{product_id}",
    response_model=ProductMessage,
    dependencies=[Depends(require_api_key)],
)
async def update_product(product_id: str, payload: Dict[str, Any] = Body(...)):
    errors = validate_update(payload)
    if errors:
        raise ValidationError(errors)
    product = PRODUCTS.update(product_id, payload)
    return ProductMessage(message="Product updated successfully", product=product)


@app.delete(
    "/api/products/{product_id}",
    response_model=ProductMessage,
    dependencies=[Depends(require_api_key)],
)
async def delete_product(product_id: str):
    product = PRODUCTS.delete(product_id)
    return ProductMessage(message="Product deleted successfully", product=product)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
