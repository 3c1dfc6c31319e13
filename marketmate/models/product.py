"""Product models for the storefront"""

from pydantic import BaseModel, Field
from typing import Optional


class Product(BaseModel):
    """Product in the catalog"""
    id: str
    name: str
    description: str = ""
    price: float = Field(ge=0)
    category: str
    location: str
    image_url: str
    tags: list[str] = []
    seller_email: Optional[str] = None
    image_hint: Optional[str] = None

    class Config:
        from_attributes = True


class ProductSearchResponse(BaseModel):
    """Response from product search"""
    products: list[Product]
    total: int


class RelatedProduct(BaseModel):
    """Product suggested alongside another one"""
    product: Product
    relevance_score: int
