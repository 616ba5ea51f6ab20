# sdk/pystore.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print


class StoreAPIError(Exception):
    """Raised for any non-2xx response; keeps the decoded error body."""

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        message = payload.get("message") if isinstance(payload, dict) else payload
        super().__init__(f"HTTP {status_code}: {message}")

    @property
    def details(self):
        if isinstance(self.payload, dict):
            return self.payload.get("details", [])
        return []


def _decode(r) -> Any:
    try:
        return r.json()
    except ValueError:
        return r.text


def _check(r) -> Any:
    body = _decode(r)
    if r.status_code >= 400:
        raise StoreAPIError(r.status_code, body)
    return body


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        # any requests-compatible session works (FastAPI's TestClient in tests)
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/products{path}"

    # Reads
    def list_products(self, category: Optional[str] = None, in_stock: Optional[bool] = None,
                      max_price: Optional[float] = None, page: Optional[int] = None,
                      limit: Optional[int] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if in_stock is not None:
            params["inStock"] = "true" if in_stock else "false"
        if max_price is not None:
            params["maxPrice"] = max_price
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url(""), params=params, timeout=self.timeout)
        return _check(r)

    def search_products(self, q: str) -> Dict[str, Any]:
        r = self.session.get(self._url("/search"), params={"q": q}, timeout=self.timeout)
        return _check(r)

    def stats(self) -> Dict[str, Any]:
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        return _check(r)

    # Writes (need api_key)
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: Optional[bool] = None) -> Dict[str, Any]:
        payload = _product_payload(name=name, description=description, price=price,
                                   category=category, in_stock=in_stock)
        r = self.session.post(self._url(""), json=payload, timeout=self.timeout)
        return _check(r)["product"]

    def update_product(self, product_id: str, **fields) -> Dict[str, Any]:
        r = self.session.put(self._url(f"/{product_id}"), json=_product_payload(**fields),
                             timeout=self.timeout)
        return _check(r)["product"]

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        return _check(r)["product"]

    # Async create (example)
    async def create_product_async(self, name: str, description: str, price: float, category: str,
                                   in_stock: Optional[bool] = None, transport=None) -> Dict[str, Any]:
        payload = _product_payload(name=name, description=description, price=price,
                                   category=category, in_stock=in_stock)
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.post(self._url(""), json=payload, headers=headers)
            return _check(r)["product"]


def _product_payload(**fields) -> Dict[str, Any]:
    # python names -> wire names; None means "leave out"
    if "in_stock" in fields:
        fields["inStock"] = fields.pop("in_stock")
    return {k: v for k, v in fields.items() if v is not None}


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="PyStore product catalog CLI")
    parser.add_argument("--url", default=os.getenv("STORE_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--in-stock", choices=["true", "false"], help="Filter by stock status")
    lp.add_argument("--max-price", type=float, help="Only products at or below this price")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    sp = subparsers.add_parser("search", help="Search name and description")
    sp.add_argument("--q", required=True, help="Search term")

    subparsers.add_parser("stats", help="Catalog statistics")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--name", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--in-stock", action="store_true")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", required=True)
    up.add_argument("--name")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--category")
    up.add_argument("--in-stock", choices=["true", "false"])

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = StoreClient(base_url=args.url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            in_stock = None if args.in_stock is None else args.in_stock == "true"
            print(c.list_products(args.category, in_stock, args.max_price, args.page, args.limit))
        elif args.command == "search":
            print(c.search_products(args.q))
        elif args.command == "stats":
            print(c.stats())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
        elif args.command == "update-product":
            in_stock = None if args.in_stock is None else args.in_stock == "true"
            print(c.update_product(args.product_id, name=args.name, description=args.description,
                                   price=args.price, category=args.category, in_stock=in_stock))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
    except StoreAPIError as e:
        print(f"[red]{e}[/red]")
        for detail in e.details:
            print(f"  [yellow]- {detail}[/yellow]")
        raise SystemExit(1)
