"""Mock product catalog"""

import re
from typing import Optional, Union

from ..models.product import Product

PLACEHOLDER_IMAGE = "https://placehold.co/600x400.png"

# Mock product catalog
PRODUCTS: list[Product] = [
    Product(
        id="1",
        name="Vintage Leather Jacket",
        description="A stylish vintage leather jacket, gently used. Brown, size M. Perfect for a cool retro look that never goes out of style.",
        price=75.00,
        category="Apparel",
        location="New York, NY",
        image_url=PLACEHOLDER_IMAGE,
        image_hint="leather jacket",
        tags=["vintage", "leather", "jacket", "fashion", "retro"],
        seller_email="seller1@marketmate.com",
    ),
    Product(
        id="2",
        name="Modern Ergonomic Chair",
        description="Barely used ergonomic office chair. Black mesh back, adjustable height and lumbar support. Excellent for home office.",
        price=120.50,
        category="Furniture",
        location="London, UK",
        image_url=PLACEHOLDER_IMAGE,
        image_hint="office chair",
        tags=["office", "furniture", "ergonomic", "chair", "modern"],
        seller_email="seller2@marketmate.com",
    ),
    Product(
        id="3",
        name="Collectible Action Figure",
        description="Rare limited edition action figure, still in original packaging. A must-have for collectors.",
        price=45.99,
        category="Collectibles",
        location="Tokyo, JP",
        image_url=PLACEHOLDER_IMAGE,
        image_hint="action figure",
        tags=["collectible", "toy", "action figure", "limited edition"],
        seller_email="seller3@marketmate.com",
    ),
    Product(
        id="4",
        name="Acoustic Guitar Set",
        description="Beginner acoustic guitar with case, picks, and tuner. Great condition, hardly played. Ideal for learning.",
        price=90.00,
        category="Musical Instruments",
        location="Berlin, DE",
        image_url=PLACEHOLDER_IMAGE,
        image_hint="acoustic guitar",
        tags=["guitar", "music", "instrument", "acoustic", "beginner"],
    ),
    Product(
        id="5",
        name="Professional DSLR Camera",
        description="Used DSLR camera body with kit lens. Works perfectly, minor cosmetic wear. Includes battery and charger.",
        price=350.00,
        category="Electronics",
        location="Paris, FR",
        image_url=PLACEHOLDER_IMAGE,
        image_hint="dslr camera",
        tags=["camera", "dslr", "electronics", "photography", "professional"],
        seller_email="sellerphotos@marketmate.com",
    ),
    Product(
        id="6",
        name="Set of Classic Novels",
        description="Collection of 5 classic novels, hardcover editions. Lightly read, excellent condition. Includes titles by famous authors.",
        price=25.00,
        category="Books",
        location="New York, NY",
        image_url=PLACEHOLDER_IMAGE,
        image_hint="book collection",
        tags=["books", "novels", "classic", "literature", "hardcover"],
        seller_email="booklover@marketmate.com",
    ),
]

ALL = "All"

CATEGORIES: list[str] = [
    ALL, "Apparel", "Electronics", "Furniture", "Collectibles",
    "Musical Instruments", "Books", "Other",
]
LOCATIONS: list[str] = [
    ALL, "New York, NY", "London, UK", "Paris, FR", "Tokyo, JP", "Berlin, DE",
]


def _parse_price(value: Union[str, float, None]) -> Optional[float]:
    """Price bound from a filter field; blank or non-numeric text means no bound"""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(value.strip())
    except ValueError:
        return None


def _tokens(product: Product) -> list[str]:
    return re.split(r"\s+", f"{product.name.lower()} {product.description.lower()}")


class ProductDatabase:
    """In-memory product catalog"""

    def __init__(self, products: Optional[list[Product]] = None):
        seed = PRODUCTS if products is None else products
        # Insertion-ordered, copied so the seed list is never mutated
        self.products: dict[str, Product] = {p.id: p.model_copy() for p in seed}

    def get_product(self, product_id: str) -> Optional[Product]:
        """Get a product by ID"""
        return self.products.get(product_id)

    def get_all_products(self) -> list[Product]:
        """Get all products"""
        return list(self.products.values())

    def add_product(self, product: Product) -> Product:
        """Add a newly listed product"""
        if product.id in self.products:
            raise ValueError(f"Product {product.id} already exists")
        self.products[product.id] = product
        return product

    def get_products_by_seller(self, seller_email: str) -> list[Product]:
        """Products listed by a seller, in catalog order"""
        return [p for p in self.products.values() if p.seller_email == seller_email]

    def categories(self) -> list[str]:
        return list(CATEGORIES)

    def locations(self) -> list[str]:
        return list(LOCATIONS)

    def search_products(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        location: Optional[str] = None,
        min_price: Union[str, float, None] = None,
        max_price: Union[str, float, None] = None,
    ) -> list[Product]:
        """
        Search products with filters.

        The query matches name, description or any tag, case-insensitively.
        Category and location of "All" match everything. Price bounds are
        inclusive and may be given as form text; unparsable bounds are ignored.
        """
        results = self.get_all_products()

        if query:
            query_lower = query.lower()
            results = [
                p for p in results
                if query_lower in p.name.lower()
                or query_lower in p.description.lower()
                or any(query_lower in tag.lower() for tag in p.tags)
            ]

        if category and category != ALL:
            results = [p for p in results if p.category == category]

        if location and location != ALL:
            results = [p for p in results if p.location == location]

        low = _parse_price(min_price)
        high = _parse_price(max_price)
        if low is not None:
            results = [p for p in results if p.price >= low]
        if high is not None:
            results = [p for p in results if p.price <= high]

        return results

    def suggest_related(self, product_id: str, limit: int = 4) -> list[tuple[Product, int]]:
        """
        Rank other products by relevance to the given one.

        Scoring: +5 for the same category, +2 per shared tag, +1 per word
        (longer than two characters) of the product's name and description
        that also appears in the candidate's. Products scoring zero are dropped.
        """
        product = self.get_product(product_id)
        if not product:
            return []

        source_tokens = _tokens(product)
        scored = []
        for candidate in self.products.values():
            if candidate.id == product.id:
                continue

            score = 0
            if candidate.category == product.category:
                score += 5
            score += 2 * sum(1 for tag in product.tags if tag in candidate.tags)
            candidate_tokens = set(_tokens(candidate))
            score += sum(
                1 for token in source_tokens
                if len(token) > 2 and token in candidate_tokens
            )

            if score > 0:
                scored.append((candidate, score))

        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:limit]
