# app/models.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str
    price: float
    category: str
    in_stock: bool = Field(alias="inStock")


class Product(ProductIn):
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# Response shapes, used for the OpenAPI document only

class ProductPage(BaseModel):
    page: int
    limit: int
    total: int
    data: List[Product]


class ProductStats(BaseModel):
    total: int
    byCategory: Dict[str, int]


class DeletedProduct(BaseModel):
    message: str
    product: Product


class ErrorBody(BaseModel):
    status: int
    message: str
    details: Optional[Any] = None
    stack: Optional[str] = None
