"""Bag API routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Depends

from ..models.bag import AddToBagRequest, UpdateBagLineRequest, BagResponse
from ..database.bag import BagChange, BagStore
from ..database.products import ProductDatabase
from .dependencies import get_bag, get_product_db

router = APIRouter(prefix="/api/bag", tags=["Bag"])


def _response(bag: BagStore, change: BagChange, default: Optional[str] = None) -> BagResponse:
    """Bag contents plus the notice raised by this request, if any"""
    return BagResponse(bag=bag.summary(), message=change.message or default)


@router.get("", response_model=BagResponse)
async def get_bag_contents(bag: BagStore = Depends(get_bag)):
    """Get the bag with totals"""
    return BagResponse(bag=bag.summary())


@router.post("/items", response_model=BagResponse)
async def add_to_bag(
    request: AddToBagRequest,
    bag: BagStore = Depends(get_bag),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Add one unit of a product to the bag"""
    product = product_db.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    return _response(bag, bag.add_to_bag(product))


@router.put("/items/{product_id}", response_model=BagResponse)
async def update_bag_line(
    product_id: str,
    request: UpdateBagLineRequest,
    bag: BagStore = Depends(get_bag),
):
    """
    Set a line's quantity.

    Quantities below 1 remove the line; non-numeric input leaves it as is.
    A product that is not in the bag is left alone and the bag is returned
    unchanged.
    """
    change = bag.update_quantity(product_id, request.quantity)
    return _response(bag, change, default="Bag updated" if change.line is not None else None)


@router.delete("/items/{product_id}", response_model=BagResponse)
async def remove_from_bag(
    product_id: str,
    bag: BagStore = Depends(get_bag),
):
    """Remove a line from the bag; removing a missing line is not an error"""
    return _response(bag, bag.remove_from_bag(product_id))


@router.delete("", response_model=BagResponse)
async def clear_bag(bag: BagStore = Depends(get_bag)):
    """Remove everything from the bag"""
    return _response(bag, bag.clear_bag())
