"""Bag models for the storefront"""

from typing import Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from .product import Product


class BagLine(Product):
    """A product in the bag together with its quantity"""
    quantity: int = Field(ge=1)


# Persisted shape of a bag: an ordered JSON array of lines
BagLines = TypeAdapter(list[BagLine])


class AddToBagRequest(BaseModel):
    """Request to add a product to the bag"""
    product_id: str


class UpdateBagLineRequest(BaseModel):
    """Request to update a bag line quantity.

    The quantity may arrive as raw text from a form field.
    """
    quantity: Union[int, str]


class BagSummary(BaseModel):
    """Bag contents with derived totals"""
    items: list[BagLine]
    total: float
    item_count: int


class BagResponse(BaseModel):
    """Bag API response"""
    bag: BagSummary
    message: Optional[str] = None
