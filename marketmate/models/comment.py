"""Comment and rating models"""

from datetime import datetime

from pydantic import BaseModel, Field


class Comment(BaseModel):
    """Comment left on a product page"""
    id: str
    product_id: str
    user: str
    avatar: str
    text: str
    created_at: datetime


class AddCommentRequest(BaseModel):
    """Request to post a comment"""
    text: str = Field(max_length=2000)


class RatingRequest(BaseModel):
    """Request to rate a product"""
    rating: float = Field(ge=1.0, le=5.0)


class RatingSummary(BaseModel):
    """Aggregate rating for a product"""
    product_id: str
    average: float = 0.0
    count: int = 0
