"""Product API routes for the storefront"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Depends

from ..models.product import Product, ProductSearchResponse, RelatedProduct
from ..database.products import ProductDatabase
from .dependencies import get_product_db

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.get("", response_model=ProductSearchResponse)
async def search_products(
    q: Optional[str] = Query(None, description="Search by name, description or tag"),
    category: Optional[str] = Query(None, description="Category, or All"),
    location: Optional[str] = Query(None, description="Location, or All"),
    min_price: Optional[str] = Query(None, description="Minimum price"),
    max_price: Optional[str] = Query(None, description="Maximum price"),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """
    Browse the catalog.

    Price bounds are taken as entered; blank or non-numeric bounds are ignored.
    """
    products = product_db.search_products(
        query=q,
        category=category,
        location=location,
        min_price=min_price,
        max_price=max_price,
    )
    return ProductSearchResponse(products=products, total=len(products))


@router.get("/categories", response_model=list[str])
async def list_categories(product_db: ProductDatabase = Depends(get_product_db)):
    """List all product categories"""
    return product_db.categories()


@router.get("/locations", response_model=list[str])
async def list_locations(product_db: ProductDatabase = Depends(get_product_db)):
    """List all seller locations"""
    return product_db.locations()


@router.get("/{product_id}", response_model=Product)
async def get_product(
    product_id: str,
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Get a product by ID"""
    product = product_db.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.get("/{product_id}/related", response_model=list[RelatedProduct])
async def get_related_products(
    product_id: str,
    limit: int = Query(4, ge=1, le=20),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Products you might also like"""
    if not product_db.get_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return [
        RelatedProduct(product=product, relevance_score=score)
        for product, score in product_db.suggest_related(product_id, limit=limit)
    ]
