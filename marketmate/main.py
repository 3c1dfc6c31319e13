"""
MarketMate Storefront Application

Marketplace storefront: catalog browsing and filtering, a persisted
shopping bag, seller listings, product comments and AI tag suggestions.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from .core.config import Settings, get_settings
from .database.bag import BagDatabase
from .database.comments import CommentDatabase
from .database.products import ProductDatabase
from .database.session import SessionDatabase
from .database.storage import KeyValueStorage, create_storage
from .routes import (
    products_router,
    bag_router,
    listings_router,
    comments_router,
    tags_router,
    notifications_router,
    auth_router,
)
from .services.listings import ListingService
from .services.notifications import NotificationCenter
from .services.tagging import TagSuggestionClient

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStorage] = None,
    product_db: Optional[ProductDatabase] = None,
    tag_client: Optional[TagSuggestionClient] = None,
) -> FastAPI:
    """
    Build the storefront application.

    Collaborators are created from settings unless passed in, so tests can
    supply their own storage, catalog or tagging client.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    if storage is None:
        storage = create_storage(
            settings.storage_backend,
            directory=settings.storage_dir,
            quota_bytes=settings.storage_quota_bytes,
        )
    if product_db is None:
        product_db = ProductDatabase()
    if tag_client is None and settings.tagging_configured:
        tag_client = TagSuggestionClient(
            settings.tag_service_url,
            timeout=settings.tag_service_timeout,
        )

    notifications = NotificationCenter(history_size=settings.notification_history)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info(f"{settings.app_name} starting up...")
        logger.info(f"Bag storage: {settings.storage_backend}")
        logger.info(f"Tag suggestion: {'enabled' if tag_client else 'disabled'}")
        yield
        logger.info(f"{settings.app_name} shutting down...")
        app.state.bag_db.close()
        app.state.session_db.close()
        if tag_client:
            await tag_client.close()

    app = FastAPI(
        title=settings.app_name,
        description="Marketplace storefront with a persisted shopping bag",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, restrict this
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.notifications = notifications
    app.state.product_db = product_db
    app.state.bag_db = BagDatabase(
        storage,
        notifications,
        key_prefix=settings.bag_storage_key,
        max_bags=settings.max_bags,
    )
    app.state.session_db = SessionDatabase(
        storage,
        notifications,
        key_prefix=settings.session_storage_key,
        max_sessions=settings.max_sessions,
    )
    app.state.comment_db = CommentDatabase()
    app.state.listing_service = ListingService(
        product_db,
        notifications,
        seller_email=settings.mock_seller_email,
    )
    app.state.tag_client = tag_client

    # Include API routers
    app.include_router(products_router)
    app.include_router(bag_router)
    app.include_router(listings_router)
    app.include_router(comments_router)
    app.include_router(tags_router)
    app.include_router(notifications_router)
    app.include_router(auth_router)

    @app.get("/")
    async def home():
        """Storefront API index"""
        return {
            "message": f"{settings.app_name} API",
            "docs": "/docs",
            "endpoints": {
                "products": "/api/products",
                "bag": "/api/bag",
                "listings": "/api/listings",
                "tags": "/api/tags/suggest",
                "notifications": "/api/notifications",
                "auth": "/api/auth",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "marketmate",
            "storage": settings.storage_backend,
            "tagging_configured": tag_client is not None,
        }

    return app


def run() -> None:
    """Run the development server"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "marketmate.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
