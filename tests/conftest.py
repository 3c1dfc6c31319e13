from __future__ import annotations

from typing import Any, Dict, List

import pytest

from marketmate.database.storage import MemoryStorage
from marketmate.models.product import Product


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: List[Dict[str, Any]] = []

    def notify(self, title: str, description: str, destructive: bool = False) -> None:
        self.sent.append(
            {"title": title, "description": description, "destructive": destructive}
        )

    @property
    def titles(self) -> List[str]:
        return [n["title"] for n in self.sent]


def make_product(product_id: str = "p1", price: float = 20.0, **overrides: Any) -> Product:
    fields: Dict[str, Any] = {
        "id": product_id,
        "name": f"Product {product_id}",
        "description": "A thing for sale",
        "price": price,
        "category": "Other",
        "location": "New York, NY",
        "image_url": "https://placehold.co/600x400.png",
        "tags": ["thing"],
    }
    fields.update(overrides)
    return Product(**fields)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def product_factory():
    return make_product
