# sdk/products_client.py
import os
from typing import Any, Dict, Optional

import requests
from rich import print


class ProductsAPIError(Exception):
    """Raised for any non-2xx response; mirrors the API's error body."""

    def __init__(self, status: int, message: str, details: Any = None):
        super().__init__(f"HTTP {status}: {message}")
        self.status = status
        self.message = message
        self.details = details


class ProductsClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_key: Optional[str] = None,
        prefix: str = "/api",
        timeout: int = 10,
        session: Any = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.prefix = prefix.rstrip("/")
        self.timeout = timeout
        # anything requests-compatible works here, e.g. a FastAPI TestClient
        self.session = session if session is not None else requests.Session()
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{self.prefix}{path}"

    def _handle(self, r) -> Any:
        if r.status_code >= 400:
            try:
                body = r.json()
            except ValueError:
                body = {"message": r.text}
            if not isinstance(body, dict):
                # e.g. a proxy answering with a JSON list
                body = {"message": r.text}
            raise ProductsAPIError(r.status_code, body.get("message", ""), body.get("details"))
        return r.json()

    @staticmethod
    def _fields(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "inStock": in_stock,
        }

    # Products
    def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        params = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url("/products"), params=params, timeout=self.timeout)
        return self._handle(r)

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/products/{product_id}"), timeout=self.timeout)
        return self._handle(r)

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        payload = self._fields(name, description, price, category, in_stock)
        r = self.session.post(self._url("/products"), json=payload, timeout=self.timeout)
        return self._handle(r)

    def update_product(
        self, product_id: str, name: str, description: str, price: float, category: str, in_stock: bool,
    ):
        payload = self._fields(name, description, price, category, in_stock)
        r = self.session.put(self._url(f"/products/{product_id}"), json=payload, timeout=self.timeout)
        return self._handle(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/products/{product_id}"), timeout=self.timeout)
        return self._handle(r)

    def stats(self):
        r = self.session.get(self._url("/products-stats"), timeout=self.timeout)
        return self._handle(r)


def _bool_arg(value: str) -> bool:
    return value.lower() in ("1", "true", "yes", "y")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Products API client")
    parser.add_argument("--url", default=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--search", help="Substring of the product name")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for name, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        p = subparsers.add_parser(name, help=help_text)
        if name == "update-product":
            p.add_argument("--product-id", required=True)
        p.add_argument("--name", required=True)
        p.add_argument("--description", required=True)
        p.add_argument("--price", type=float, required=True)
        p.add_argument("--category", required=True)
        p.add_argument("--in-stock", type=_bool_arg, default=True)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    subparsers.add_parser("stats", help="Product counts per category")

    args = parser.parse_args()
    c = ProductsClient(base_url=args.url, api_key=args.api_key)

    try:
        if args.command == "list-products":
            print(c.list_products(args.category, args.search, args.page, args.limit))
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "create-product":
            print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
        elif args.command == "update-product":
            print(c.update_product(
                args.product_id, args.name, args.description, args.price, args.category, args.in_stock,
            ))
        elif args.command == "delete-product":
            print(c.delete_product(args.product_id))
        elif args.command == "stats":
            print(c.stats())
    except ProductsAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
