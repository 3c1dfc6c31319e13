"""Comment and rating API routes for product pages"""

from fastapi import APIRouter, HTTPException, Depends

from ..models.comment import Comment, AddCommentRequest, RatingRequest, RatingSummary
from ..database.comments import CommentDatabase
from ..database.products import ProductDatabase
from .dependencies import get_comment_db, get_product_db

router = APIRouter(prefix="/api/products", tags=["Comments"])


def _require_product(product_id: str, product_db: ProductDatabase) -> None:
    if not product_db.get_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")


@router.get("/{product_id}/comments", response_model=list[Comment])
async def list_comments(
    product_id: str,
    comment_db: CommentDatabase = Depends(get_comment_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Comments on a product, newest first"""
    _require_product(product_id, product_db)
    return comment_db.list_comments(product_id)


@router.post("/{product_id}/comments", response_model=Comment, status_code=201)
async def add_comment(
    product_id: str,
    request: AddCommentRequest,
    comment_db: CommentDatabase = Depends(get_comment_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Post a comment"""
    _require_product(product_id, product_db)
    try:
        return comment_db.add_comment(product_id, request.text)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{product_id}/rating", response_model=RatingSummary)
async def get_rating(
    product_id: str,
    comment_db: CommentDatabase = Depends(get_comment_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Average rating for a product"""
    _require_product(product_id, product_db)
    return comment_db.get_rating(product_id)


@router.post("/{product_id}/rating", response_model=RatingSummary)
async def submit_rating(
    product_id: str,
    request: RatingRequest,
    comment_db: CommentDatabase = Depends(get_comment_db),
    product_db: ProductDatabase = Depends(get_product_db),
):
    """Rate a product from 1 to 5 stars"""
    _require_product(product_id, product_db)
    return comment_db.submit_rating(product_id, request.rating)
