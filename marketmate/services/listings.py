"""
Listing Service

Turns a seller's listing form into a catalog product.
"""

import logging
import time
from typing import Callable, Optional

from ..database.products import ProductDatabase
from ..models.listing import NewListingRequest
from ..models.product import Product
from .notifications import Notifier

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "Uncategorized"
DEFAULT_LOCATION = "User's Location"


class ListingError(Exception):
    """Raised when a listing cannot be published"""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message


class ListingService:
    """Publishes new listings into the catalog it is given"""

    def __init__(
        self,
        catalog: ProductDatabase,
        notifier: Notifier,
        seller_email: Optional[str] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.catalog = catalog
        self.notifier = notifier
        self.seller_email = seller_email
        self._clock = clock

    def _new_id(self) -> str:
        product_id = f"mock-{int(self._clock() * 1000)}"
        # Two listings in the same millisecond
        suffix = 1
        candidate = product_id
        while self.catalog.get_product(candidate):
            candidate = f"{product_id}-{suffix}"
            suffix += 1
        return candidate

    def _reject(self, title: str, message: str) -> None:
        self.notifier.notify(title, message, destructive=True)
        raise ListingError(title, message)

    def create_listing(self, request: NewListingRequest) -> Product:
        """Validate media, build the product and add it to the catalog"""
        if not request.image_urls:
            self._reject(
                "No Images Selected",
                "Please upload at least one image for your product.",
            )

        index = request.primary_image_index
        if index is None or not 0 <= index < len(request.image_urls):
            self._reject(
                "No Primary Image",
                "Please select a primary image for your product.",
            )

        tags = request.tag_list()
        category = request.category or DEFAULT_CATEGORY
        if tags:
            image_hint = tags[0]
        else:
            image_hint = (request.category or "item").lower()

        product = Product(
            id=self._new_id(),
            name=request.product_name,
            description=request.description or "",
            price=request.price,
            category=category,
            location=DEFAULT_LOCATION,
            image_url=request.image_urls[index],
            tags=tags,
            seller_email=self.seller_email,
            image_hint=image_hint,
        )
        self.catalog.add_product(product)
        logger.info(f"Listed product {product.id}: {product.name}")

        self.notifier.notify(
            "Product Listed!",
            f"{product.name} has been successfully listed for sale.",
        )
        return product

    def my_listings(self) -> list[Product]:
        """Products listed by the current seller"""
        if not self.seller_email:
            return []
        return self.catalog.get_products_by_seller(self.seller_email)
