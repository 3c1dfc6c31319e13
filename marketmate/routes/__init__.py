# API Routes

from .products import router as products_router
from .bag import router as bag_router
from .listings import router as listings_router
from .comments import router as comments_router
from .tags import router as tags_router
from .notifications import router as notifications_router
from .auth import router as auth_router

__all__ = [
    "products_router",
    "bag_router",
    "listings_router",
    "comments_router",
    "tags_router",
    "notifications_router",
    "auth_router",
]
