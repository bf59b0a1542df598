"""
Сквозные сценарии каталога: идентичность категорий, замена набора
категорий и навигация по страницам.
"""

import re

import pytest

from app.schemas.pagination import PageMeta
from app.services.pagination import build_pagination_headers

PRODUCTS = "/api/v1/products"
CATEGORIES = "/api/v1/categories"


def _product(**overrides):
    payload = {"name": "Console", "description": "Video game console", "price": 3500.0}
    payload.update(overrides)
    return payload


def _relations(link: str):
    return re.findall(r'rel="(\w+)"', link)


def test_category_identity_is_shared_between_names_and_casing(client, admin_headers):
    created = client.post(CATEGORIES, json={"name": "Eletrônicos"}, headers=admin_headers)
    assert created.status_code == 201
    category_id = created.json()["id"]

    first = client.post(
        f"{PRODUCTS}/by-names",
        json=_product(category_names=["eletrônicos", "ELETRÔNICOS"]),
        headers=admin_headers,
    )
    second = client.post(
        f"{PRODUCTS}/by-names",
        json=_product(name="Joystick", category_names=["Jogos"]),
        headers=admin_headers,
    )

    assert first.json()["categories"] == ["Eletrônicos"]
    assert second.json()["categories"] == ["Jogos"]

    categories = client.get(CATEGORIES).json()
    assert [c["name"] for c in categories] == ["Eletrônicos", "Jogos"]
    assert categories[0]["id"] == category_id


def test_by_names_collapses_case_and_whitespace_variants(client, admin_headers):
    response = client.post(
        f"{PRODUCTS}/by-names",
        json=_product(category_names=["Shoes", "shoes", "  Hats "]),
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json()["categories"] == ["Shoes", "Hats"]
    assert client.get(CATEGORIES).headers["X-Total-Count"] == "2"


def test_update_replaces_whole_category_set(client, admin_headers, make_category, make_product):
    first = make_category("Books")
    second = make_category("Music")
    product = make_product(categories=[first])

    response = client.put(
        f"{PRODUCTS}/{product.id}", json={"category_ids": [second.id]}, headers=admin_headers
    )
    again = client.put(
        f"{PRODUCTS}/{product.id}", json={"category_ids": [second.id]}, headers=admin_headers
    )

    assert response.json()["categories"] == ["Music"]
    assert again.json()["categories"] == ["Music"]


@pytest.mark.parametrize(
    "page, relations",
    [
        (0, ["first", "last", "next"]),
        (1, ["first", "last", "prev", "next"]),
        (2, ["first", "last", "prev"]),
    ],
)
def test_eleven_elements_in_pages_of_five(page, relations):
    meta = PageMeta.create(page=page, page_size=5, total=11)

    headers = build_pagination_headers(meta, "http://testserver/api/v1/products")

    assert meta.total_pages == 3
    assert _relations(headers.link) == relations
    assert "page=2>; rel=\"last\"" in headers.link


def test_paged_listing_over_http(client, make_product):
    for index in range(11):
        make_product(name=f"Product {index}")

    response = client.get(PRODUCTS, params={"page": 2, "size": 5})

    assert [p["name"] for p in response.json()] == ["Product 10"]
    assert response.headers["X-Page-Number"] == "2"
    assert response.headers["X-Page-Size"] == "5"
    assert response.headers["X-Total-Count"] == "11"
    assert _relations(response.headers["Link"]) == ["first", "last", "prev"]
