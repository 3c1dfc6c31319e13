# Storefront Models

from .product import Product, ProductSearchResponse, RelatedProduct
from .bag import (
    BagLine,
    BagLines,
    AddToBagRequest,
    UpdateBagLineRequest,
    BagSummary,
    BagResponse,
)
from .notification import Notification
from .listing import NewListingRequest
from .comment import Comment, AddCommentRequest, RatingRequest, RatingSummary
from .session import (
    SignInRequest,
    SignUpRequest,
    UserProfile,
    SessionStatus,
    SessionResponse,
)

__all__ = [
    "Product",
    "ProductSearchResponse",
    "RelatedProduct",
    "BagLine",
    "BagLines",
    "AddToBagRequest",
    "UpdateBagLineRequest",
    "BagSummary",
    "BagResponse",
    "Notification",
    "NewListingRequest",
    "Comment",
    "AddCommentRequest",
    "RatingRequest",
    "RatingSummary",
    "SignInRequest",
    "SignUpRequest",
    "UserProfile",
    "SessionStatus",
    "SessionResponse",
]
