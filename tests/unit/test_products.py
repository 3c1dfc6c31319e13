from __future__ import annotations

import pytest

from marketmate.database.products import PRODUCTS, ProductDatabase


@pytest.fixture
def catalog() -> ProductDatabase:
    return ProductDatabase()


def _ids(products):
    return [p.id for p in products]


def test_no_filters_returns_catalog_in_order(catalog):
    assert _ids(catalog.search_products()) == ["1", "2", "3", "4", "5", "6"]


def test_query_matches_name_description_and_tags(catalog):
    assert _ids(catalog.search_products(query="JACKET")) == ["1"]
    assert _ids(catalog.search_products(query="lumbar")) == ["2"]
    assert _ids(catalog.search_products(query="photography")) == ["5"]
    assert catalog.search_products(query="spaceship") == []


def test_category_and_location_filters(catalog):
    assert _ids(catalog.search_products(category="Books")) == ["6"]
    assert _ids(catalog.search_products(location="New York, NY")) == ["1", "6"]
    assert _ids(catalog.search_products(category="All", location="All")) == _ids(PRODUCTS)
    assert _ids(catalog.search_products(category="Books", location="Tokyo, JP")) == []


def test_price_bounds_are_inclusive(catalog):
    assert _ids(catalog.search_products(min_price=90, max_price=120.5)) == ["2", "4"]
    assert _ids(catalog.search_products(min_price="300")) == ["5"]
    assert _ids(catalog.search_products(max_price="25")) == ["6"]


def test_unparsable_price_text_is_ignored(catalog):
    assert _ids(catalog.search_products(min_price="", max_price="cheap")) == _ids(PRODUCTS)


def test_add_product_and_reject_duplicate(catalog, product_factory):
    catalog.add_product(product_factory("new"))

    assert catalog.get_product("new").name == "Product new"
    assert _ids(catalog.get_all_products())[-1] == "new"
    with pytest.raises(ValueError):
        catalog.add_product(product_factory("new"))


def test_products_by_seller(catalog, product_factory):
    catalog.add_product(product_factory("mine", seller_email="seller1@marketmate.com"))

    assert _ids(catalog.get_products_by_seller("seller1@marketmate.com")) == ["1", "mine"]
    assert catalog.get_products_by_seller("nobody@marketmate.com") == []


def test_catalog_does_not_share_seed_products(catalog):
    catalog.get_product("1").price = 1.0

    assert ProductDatabase().get_product("1").price == 75.0


def test_categories_and_locations(catalog):
    assert catalog.categories()[0] == "All"
    assert "Musical Instruments" in catalog.categories()
    assert catalog.locations() == [
        "All", "New York, NY", "London, UK", "Paris, FR", "Tokyo, JP", "Berlin, DE",
    ]


def test_related_scoring(product_factory):
    source = product_factory(
        "src", category="Books", tags=["novel", "classic"],
        name="Old novel", description="classic story",
    )
    same_category = product_factory(
        "cat", category="Books", tags=[], name="Atlas", description="maps",
    )
    shared_tags = product_factory(
        "tags", category="Other", tags=["novel", "classic"], name="Box", description="stuff",
    )
    shared_words = product_factory(
        "words", category="Other", tags=[], name="A novel idea", description="story time",
    )
    unrelated = product_factory(
        "none", category="Other", tags=[], name="Lamp", description="it glows",
    )
    catalog = ProductDatabase([source, same_category, shared_tags, shared_words, unrelated])

    related = catalog.suggest_related("src")

    assert [(p.id, score) for p, score in related] == [
        ("cat", 5),
        ("tags", 4),
        ("words", 2),
    ]


def test_related_respects_limit_and_unknown_id(catalog):
    assert len(catalog.suggest_related("1", limit=1)) <= 1
    assert catalog.suggest_related("missing") == []
    assert all(p.id != "1" for p, _ in catalog.suggest_related("1"))
