# app/database.py
import threading
import uuid
from typing import Callable, Iterable, List, Optional, Set

from .errors import AppError
from .models import Product, ProductIn
from .result import Err, Ok, Result

# This file holds the in-memory product store.

SEED_PRODUCTS = [
    ProductIn(name="Widget A", description="A nice widget", price=19.99, category="gadgets", in_stock=True),
    ProductIn(name="Widget B", description="Another widget", price=29.99, category="gadgets", in_stock=False),
    ProductIn(name="Gizmo C", description="A useful gizmo", price=49.99, category="electronics", in_stock=True),
]

PRODUCT_NOT_FOUND = "Product not found"


def _new_id() -> str:
    return str(uuid.uuid4())


class ProductStore:
    """Process-scoped collection of products, kept in insertion order.

    Every call holds one lock, so list/insert/update/delete stay atomic even
    when endpoint code runs on worker threads. Records are frozen models:
    a list() snapshot can be filtered without touching the live collection.
    """

    def __init__(
        self,
        products: Optional[Iterable[ProductIn]] = None,
        id_factory: Callable[[], str] = _new_id,
    ):
        self._products: List[Product] = []
        self._issued: Set[str] = set()
        self._id_factory = id_factory
        self._lock = threading.RLock()
        for fields in products or ():
            self.insert(fields)

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(SEED_PRODUCTS)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _mint_id(self) -> str:
        # ids are never reused, not even after a delete
        pid = self._id_factory()
        while pid in self._issued:
            pid = self._id_factory()
        self._issued.add(pid)
        return pid

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def list(self) -> List[Product]:
        with self._lock:
            return self._products.copy()

    def get(self, product_id: str) -> Result[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return Err(AppError.not_found(PRODUCT_NOT_FOUND))
            return Ok(self._products[i])

    def insert(self, fields: ProductIn) -> Product:
        with self._lock:
            product = Product(id=self._mint_id(), **fields.model_dump())
            self._products.append(product)
            return product

    def update(self, product_id: str, fields: ProductIn) -> Result[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return Err(AppError.not_found(PRODUCT_NOT_FOUND))
            product = Product(id=product_id, **fields.model_dump())
            self._products[i] = product
            return Ok(product)

    def delete(self, product_id: str) -> Result[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i == -1:
                return Err(AppError.not_found(PRODUCT_NOT_FOUND))
            return Ok(self._products.pop(i))
