from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from marketmate.core.config import Settings
from marketmate.database.storage import MemoryStorage
from marketmate.main import create_app
from marketmate.services.tagging import TagSuggestionClient


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, storage_backend="memory", mock_seller_email="me@marketmate.com")


@pytest.fixture
def client(settings, storage):
    app = create_app(settings=settings, storage=storage)
    with TestClient(app) as c:
        yield c


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.json()["tagging_configured"] is False


def test_browse_and_filter(client):
    assert client.get("/api/products").json()["total"] == 6

    resp = client.get("/api/products", params={"q": "guitar", "min_price": "", "max_price": "abc"})
    assert [p["id"] for p in resp.json()["products"]] == ["4"]

    resp = client.get("/api/products", params={"category": "All", "location": "New York, NY"})
    assert [p["id"] for p in resp.json()["products"]] == ["1", "6"]

    assert "Books" in client.get("/api/products/categories").json()
    assert "Tokyo, JP" in client.get("/api/products/locations").json()


def test_product_detail_and_related(client):
    assert client.get("/api/products/5").json()["name"] == "Professional DSLR Camera"
    assert client.get("/api/products/999").status_code == 404

    related = client.get("/api/products/1/related").json()
    assert len(related) <= 4
    assert all(r["relevance_score"] > 0 for r in related)
    assert client.get("/api/products/999/related").status_code == 404


def test_bag_flow(client, storage):
    resp = client.post("/api/bag/items", json={"product_id": "1"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Vintage Leather Jacket has been added to your bag."

    resp = client.post("/api/bag/items", json={"product_id": "1"})
    assert resp.json()["message"] == "Vintage Leather Jacket quantity increased."

    client.post("/api/bag/items", json={"product_id": "6"})
    bag = client.get("/api/bag").json()["bag"]
    assert [(i["id"], i["quantity"]) for i in bag["items"]] == [("1", 2), ("6", 1)]
    assert bag["total"] == pytest.approx(175.0)
    assert bag["item_count"] == 3

    persisted = json.loads(storage.get_item("marketmateBag:default"))
    assert [line["quantity"] for line in persisted] == [2, 1]

    resp = client.put("/api/bag/items/1", json={"quantity": "4"})
    assert resp.json()["message"] == "Bag updated"
    assert resp.json()["bag"]["total"] == pytest.approx(325.0)

    resp = client.put("/api/bag/items/1", json={"quantity": "lots"})
    assert resp.json()["bag"]["item_count"] == 5

    resp = client.put("/api/bag/items/6", json={"quantity": 0})
    assert resp.json()["message"] == "Set of Classic Novels has been removed from your bag."
    assert [i["id"] for i in resp.json()["bag"]["items"]] == ["1"]

    resp = client.delete("/api/bag/items/1")
    assert resp.json()["bag"]["items"] == []
    resp = client.delete("/api/bag/items/1")
    assert resp.status_code == 200
    assert resp.json()["message"] is None


def test_clear_bag(client):
    client.post("/api/bag/items", json={"product_id": "2"})

    resp = client.delete("/api/bag")

    assert resp.json()["message"] == "All items have been removed from your bag."
    assert resp.json()["bag"] == {"items": [], "total": 0.0, "item_count": 0}


def test_bags_are_separated_by_header(client):
    client.post("/api/bag/items", json={"product_id": "3"}, headers={"X-Bag-Id": "alice"})

    assert client.get("/api/bag", headers={"X-Bag-Id": "alice"}).json()["bag"]["item_count"] == 1
    assert client.get("/api/bag").json()["bag"]["item_count"] == 0


def test_bag_errors(client):
    assert client.post("/api/bag/items", json={"product_id": "999"}).status_code == 404
    assert client.post("/api/bag/items", json={"product_id": ""}).status_code == 404
    assert client.post("/api/bag/items", json={}).status_code == 422


def test_update_for_product_not_in_bag_returns_bag_unchanged(client):
    client.post("/api/bag/items", json={"product_id": "2"})

    for product_id in ["1", "nope"]:
        resp = client.put(f"/api/bag/items/{product_id}", json={"quantity": 2})

        assert resp.status_code == 200
        assert resp.json()["message"] is None
        assert [(i["id"], i["quantity"]) for i in resp.json()["bag"]["items"]] == [("2", 1)]


def test_messages_do_not_depend_on_notification_history(storage):
    settings = Settings(_env_file=None, storage_backend="memory", notification_history=0)

    with TestClient(create_app(settings=settings, storage=storage)) as c:
        added = c.post("/api/bag/items", json={"product_id": "1"})
        removed = c.put("/api/bag/items/1", json={"quantity": 0})
        feed = c.get("/api/notifications").json()

    assert added.json()["message"] == "Vintage Leather Jacket has been added to your bag."
    assert removed.json()["message"] == "Vintage Leather Jacket has been removed from your bag."
    assert feed == []


def test_bag_survives_app_restart(settings, storage):
    with TestClient(create_app(settings=settings, storage=storage)) as first:
        first.post("/api/bag/items", json={"product_id": "5"})
        first.put("/api/bag/items/5", json={"quantity": 3})

    with TestClient(create_app(settings=settings, storage=storage)) as second:
        bag = second.get("/api/bag").json()["bag"]

    assert [(i["id"], i["quantity"]) for i in bag["items"]] == [("5", 3)]
    assert bag["total"] == pytest.approx(1050.0)


def test_corrupt_persisted_bag_starts_empty(settings, storage):
    storage.set_item("marketmateBag:default", "{broken")

    with TestClient(create_app(settings=settings, storage=storage)) as c:
        resp = c.get("/api/bag")

    assert resp.status_code == 200
    assert resp.json()["bag"]["items"] == []


def test_create_listing_then_buy_it(client):
    resp = client.post(
        "/api/listings",
        json={
            "product_name": "Handmade Mug",
            "price": "12.5",
            "tags": "ceramic, handmade",
            "image_urls": ["https://img/mug.png"],
            "primary_image_index": 0,
        },
    )
    assert resp.status_code == 201
    product = resp.json()
    assert product["seller_email"] == "me@marketmate.com"
    assert product["category"] == "Uncategorized"

    found = client.get("/api/products", params={"q": "ceramic"}).json()["products"]
    assert [p["id"] for p in found] == [product["id"]]

    resp = client.post("/api/bag/items", json={"product_id": product["id"]})
    assert resp.json()["bag"]["total"] == pytest.approx(12.5)


def test_my_listings(client):
    assert client.get("/api/listings").json() == {"products": [], "total": 0}

    created = client.post(
        "/api/listings",
        json={"product_name": "Handmade Mug", "price": 9, "image_urls": ["a"], "primary_image_index": 0},
    ).json()

    listings = client.get("/api/listings").json()
    assert listings["total"] == 1
    assert listings["products"][0]["id"] == created["id"]


def test_create_listing_errors(client):
    resp = client.post(
        "/api/listings",
        json={"product_name": "Handmade Mug", "price": 3, "image_urls": []},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"].startswith("No Images Selected")

    resp = client.post(
        "/api/listings",
        json={"product_name": "Mu", "price": 3, "image_urls": ["a"], "primary_image_index": 0},
    )
    assert resp.status_code == 422


def test_comments_and_rating(client):
    assert len(client.get("/api/products/1/comments").json()) == 2

    resp = client.post("/api/products/1/comments", json={"text": "Does it fit a size L?"})
    assert resp.status_code == 201
    assert client.get("/api/products/1/comments").json()[0]["text"] == "Does it fit a size L?"

    assert client.post("/api/products/1/comments", json={"text": "   "}).status_code == 400
    assert client.get("/api/products/999/comments").status_code == 404

    assert client.post("/api/products/1/rating", json={"rating": 4}).json()["count"] == 1
    assert client.get("/api/products/1/rating").json()["average"] == 4.0
    assert client.post("/api/products/1/rating", json={"rating": 0}).status_code == 422


def test_notifications_feed(client):
    client.post("/api/bag/items", json={"product_id": "1"})
    client.delete("/api/bag/items/1")

    feed = client.get("/api/notifications").json()

    assert [n["title"] for n in feed] == ["Item Added to Bag", "Item Removed"]
    assert feed[-1]["destructive"] is True
    assert len(client.get("/api/notifications", params={"limit": 1}).json()) == 1


def test_tag_suggestion_not_configured(client):
    resp = client.post("/api/tags/suggest", json={"description": "x" * 30})

    assert resp.status_code == 503


def _tag_app(settings, storage, handler):
    tag_client = TagSuggestionClient("http://tagger.local", transport=httpx.MockTransport(handler))
    return create_app(settings=settings, storage=storage, tag_client=tag_client)


def test_tag_suggestion(settings, storage):
    app = _tag_app(settings, storage, lambda request: httpx.Response(200, json={"tags": ["retro", "leather"]}))

    with TestClient(app) as c:
        ok = c.post("/api/tags/suggest", json={"description": "A vintage leather jacket in great shape"})
        short = c.post("/api/tags/suggest", json={"description": "jacket"})

    assert ok.json() == {"tags": ["retro", "leather"]}
    assert short.status_code == 400


def test_tag_suggestion_failure(settings, storage):
    app = _tag_app(settings, storage, lambda request: httpx.Response(503))

    with TestClient(app) as c:
        resp = c.post("/api/tags/suggest", json={"description": "A vintage leather jacket in great shape"})

    assert resp.status_code == 503
    assert resp.json()["detail"].startswith("Failed to suggest tags.")


def test_auth_flow(client):
    assert client.get("/api/auth/session").json() == {"logged_in": False, "profile": None}

    resp = client.post("/api/auth/signin", json={"email": "existinguser@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password."

    resp = client.post("/api/auth/signin", json={"email": "existinguser@example.com", "password": "Password123!"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Welcome back!"
    assert resp.json()["session"]["profile"]["username"] == "demouser123"

    resp = client.post("/api/auth/avatar")
    assert resp.json()["session"]["profile"]["avatar_url"].endswith("Pic2")

    resp = client.post("/api/auth/logout")
    assert resp.json()["session"] == {"logged_in": False, "profile": None}
    assert client.post("/api/auth/avatar").status_code == 401


def test_sign_up_routes(client):
    form = {
        "username": "newbie",
        "full_name": "New Person",
        "email": "existinguser@example.com",
        "password": "Sup3r$ecret",
        "confirm_password": "Sup3r$ecret",
    }
    assert client.post("/api/auth/signup", json=form).status_code == 409
    assert client.post("/api/auth/signup", json=dict(form, password="weak")).status_code == 422

    resp = client.post("/api/auth/signup", json=dict(form, email="new@example.com"), headers={"X-Session-Id": "tab1"})
    assert resp.status_code == 201
    assert resp.json()["session"]["profile"]["email"] == "new@example.com"

    assert client.get("/api/auth/session", headers={"X-Session-Id": "tab1"}).json()["logged_in"] is True
    assert client.get("/api/auth/session").json()["logged_in"] is False
