"""Listing API routes for sellers"""

from fastapi import APIRouter, HTTPException, Depends

from ..models.listing import NewListingRequest
from ..models.product import Product, ProductSearchResponse
from ..services.listings import ListingService, ListingError
from .dependencies import get_listing_service

router = APIRouter(prefix="/api/listings", tags=["Listings"])


@router.get("", response_model=ProductSearchResponse)
async def list_my_listings(
    listing_service: ListingService = Depends(get_listing_service),
):
    """Products listed by the current seller"""
    products = listing_service.my_listings()
    return ProductSearchResponse(products=products, total=len(products))


@router.post("", response_model=Product, status_code=201)
async def create_listing(
    request: NewListingRequest,
    listing_service: ListingService = Depends(get_listing_service),
):
    """List a new product for sale"""
    try:
        return listing_service.create_listing(request)
    except ListingError as e:
        raise HTTPException(status_code=400, detail=f"{e.title}: {e.message}")
