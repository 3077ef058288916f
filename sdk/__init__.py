"""Python client for the products API."""

from .products_client import ProductsAPIError, ProductsClient

__all__ = ["ProductsAPIError", "ProductsClient"]
