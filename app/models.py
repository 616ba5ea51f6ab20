# app/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, List, Union


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool = Field(False, alias="inStock")


class ProductPage(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")
    data: List[Product]

    model_config = ConfigDict(populate_by_name=True)


class SearchResult(BaseModel):
    query: str
    results: List[Product]
    count: int


class PriceStats(BaseModel):
    # None when the catalog is empty
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    average: Optional[Union[int, float]] = None


class ProductStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(..., alias="totalProducts")
    in_stock: int = Field(..., alias="inStock")
    out_of_stock: int = Field(..., alias="outOfStock")
    categories: Dict[str, int]
    price_stats: PriceStats = Field(..., alias="priceStats")


class ProductMessage(BaseModel):
    message: str
    product: Product
