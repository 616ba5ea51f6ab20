import logging
import threading
import uuid
from typing import Any, Dict, List, Optional

from .config import settings
from .core import json_number, parse_number
from .errors import NotFoundError
from .models import Product

# In-memory product collection.  Every operation holds a single lock and
# hands out copies, so callers never alias the stored records.

logger = logging.getLogger(__name__)

SAMPLE_PRODUCTS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
    {
        "id": "4",
        "name": "Desk Chair",
        "description": "Ergonomic office chair",
        "price": 200,
        "category": "furniture",
        "inStock": True,
    },
    {
        "id": "5",
        "name": "Wireless Headphones",
        "description": "Noise-cancelling Bluetooth headphones",
        "price": 150,
        "category": "electronics",
        "inStock": True,
    },
]

# Fields overwritten by update only when the new value is truthy.
_TRUTHY_FIELDS = ("name", "description", "price", "category")


class ProductStore:
    def __init__(self, seed: bool = False):
        self._lock = threading.Lock()
        self._products: List[Product] = []
        if seed:
            self._load_samples()

    def _load_samples(self) -> None:
        self._products = [Product(**p) for p in SAMPLE_PRODUCTS]

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        raise NotFoundError("Product not found")

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def reset(self, seed: bool = True) -> None:
        with self._lock:
            self._products = []
            if seed:
                self._load_samples()

    def list(self) -> List[Product]:
        with self._lock:
            return [p.model_copy() for p in self._products]

    def get(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)].model_copy()

    def create(self, fields: Dict[str, Any]) -> Product:
        product = Product(
            id=str(uuid.uuid4()),
            name=fields["name"],
            description=fields["description"],
            price=json_number(parse_number(fields["price"])),
            category=fields["category"],
            in_stock=bool(fields.get("inStock")),
        )
        with self._lock:
            self._products.append(product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product.model_copy()

    def update(self, product_id: str, fields: Dict[str, Any]) -> Product:
        changes: Dict[str, Any] = {}
        for key in _TRUTHY_FIELDS:
            value = fields.get(key)
            if value:
                changes[key] = json_number(parse_number(value)) if key == "price" else value
        if "inStock" in fields:
            changes["in_stock"] = bool(fields["inStock"])

        with self._lock:
            idx = self._index_of(product_id)
            updated = self._products[idx].model_copy(update=changes)
            self._products[idx] = updated
        logger.info("Updated product %s fields=%s", product_id, sorted(changes))
        return updated.model_copy()

    def delete(self, product_id: str) -> Product:
        with self._lock:
            removed = self._products.pop(self._index_of(product_id))
        logger.info("Deleted product %s", product_id)
        return removed


def create_store(seed: Optional[bool] = None) -> ProductStore:
    return ProductStore(seed=settings.seed_sample_data if seed is None else seed)


PRODUCTS = create_store()
