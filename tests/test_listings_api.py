"""
Listing API tests - REST CRUD, auth failures and owner-only mutation.
"""

import pytest
from httpx import AsyncClient

from app.core.dependencies import get_listing_service
from app.core.security import create_access_token
from app.main import app
from app.services.listing_service import ListingService
from tests.fakes import BrokenListingStore


async def _create(client: AsyncClient, headers: dict, payload: dict) -> dict:
    response = await client.post("/api/listings", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_list_listings_empty(client: AsyncClient):
    response = await client.get("/api/listings")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_create_listing_without_token_is_401(client: AsyncClient, laptop: dict):
    response = await client.post("/api/listings", json=laptop)
    assert response.status_code == 401
    assert response.json() == {"message": "No token provided"}
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_create_listing_with_bad_token_is_403(client: AsyncClient, laptop: dict):
    response = await client.post("/api/listings", headers={"Authorization": "Bearer nope"}, json=laptop)
    assert response.status_code == 403
    assert response.json() == {"message": "Invalid token"}


@pytest.mark.asyncio
async def test_create_listing_with_foreign_secret_is_403(client: AsyncClient, seller, laptop: dict):
    token = create_access_token(seller.id, secret_key="someone-elses-secret")
    response = await client.post("/api/listings", headers={"Authorization": f"Bearer {token}"}, json=laptop)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_non_bearer_scheme_counts_as_missing(client: AsyncClient, laptop: dict):
    response = await client.post("/api/listings", headers={"Authorization": "Basic YWRhOnB3"}, json=laptop)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_listing(client: AsyncClient, auth_headers: dict, seller, laptop: dict):
    data = await _create(client, auth_headers, laptop)
    assert data["title"] == "Laptop"
    assert data["price"] == 300
    assert data["owner_id"] == seller.id
    assert data["owner"] == {"id": seller.id, "name": "Ada Seller", "email": "ada@example.com"}
    assert data["status"] == "available"
    assert data["images"] == []
    assert data["created_at"] and data["updated_at"]


@pytest.mark.asyncio
async def test_create_listing_accepts_lowercase_header_and_string_price(
    client: AsyncClient, seller, laptop: dict
):
    headers = {"authorization": f"Bearer {create_access_token(seller.id)}"}
    data = await _create(client, headers, {**laptop, "price": "300.50", "images": ["https://img/a.jpg"]})
    assert data["price"] == 300.5
    assert data["images"] == ["https://img/a.jpg"]


@pytest.mark.asyncio
async def test_create_ignores_owner_in_body(client: AsyncClient, auth_headers: dict, seller, other_user, laptop: dict):
    data = await _create(client, auth_headers, {**laptop, "owner_id": other_user.id, "status": "sold"})
    assert data["owner_id"] == seller.id
    assert data["status"] == "available"


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["title", "description", "category", "condition", "price"])
async def test_create_missing_required_field_is_400_and_not_persisted(
    client: AsyncClient, auth_headers: dict, laptop: dict, field: str
):
    payload = {k: v for k, v in laptop.items() if k != field}
    response = await client.post("/api/listings", headers=auth_headers, json=payload)
    assert response.status_code == 400
    assert response.json() == {"message": "All fields required"}
    assert (await client.get("/api/listings")).json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [{"title": ""}, {"category": "cars"}, {"condition": "broken"}, {"price": -1}, {"price": None}],
)
async def test_create_invalid_field_is_400(client: AsyncClient, auth_headers: dict, laptop: dict, override: dict):
    response = await client.post("/api/listings", headers=auth_headers, json={**laptop, **override})
    assert response.status_code == 400
    assert "message" in response.json()


@pytest.mark.asyncio
async def test_create_treats_null_images_as_empty(client: AsyncClient, auth_headers: dict, laptop: dict):
    data = await _create(client, auth_headers, {**laptop, "images": None})
    assert data["images"] == []


@pytest.mark.asyncio
async def test_get_listing_and_not_found(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, laptop)

    response = await client.get(f"/api/listings/{created['id']}")
    assert response.status_code == 200
    assert response.json()["owner"]["name"] == "Ada Seller"

    missing = await client.get("/api/listings/9999")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Listing not found"}


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, auth_headers: dict, laptop: dict):
    for title in ("one", "two", "three"):
        await _create(client, auth_headers, {**laptop, "title": title})
    titles = [item["title"] for item in (await client.get("/api/listings")).json()]
    assert titles == ["three", "two", "one"]


@pytest.mark.asyncio
async def test_my_listings_requires_auth_and_filters_by_owner(
    client: AsyncClient, auth_headers: dict, other_headers: dict, laptop: dict
):
    assert (await client.get("/api/listings/user/me")).status_code == 401

    mine = await _create(client, auth_headers, {**laptop, "title": "mine"})
    await _create(client, other_headers, {**laptop, "title": "theirs"})

    response = await client.get("/api/listings/user/me", headers=auth_headers)
    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [mine["id"]]


@pytest.mark.asyncio
async def test_update_by_non_owner_is_403_and_unchanged(
    client: AsyncClient, auth_headers: dict, other_headers: dict, laptop: dict
):
    created = await _create(client, auth_headers, laptop)

    response = await client.put(f"/api/listings/{created['id']}", headers=other_headers, json={"price": 1})
    assert response.status_code == 403
    assert response.json() == {"message": "Not authorized"}

    stored = (await client.get(f"/api/listings/{created['id']}")).json()
    assert stored["price"] == 300
    assert stored["updated_at"] == created["updated_at"]


@pytest.mark.asyncio
async def test_update_missing_listing_is_404_before_ownership(client: AsyncClient, other_headers: dict):
    response = await client.put("/api/listings/9999", headers=other_headers, json={"price": 1})
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{"price": -1}, {"category": "cars"}, {"title": ""}, {"price": None}, {"images": "not-a-list"}],
)
async def test_update_by_non_owner_with_invalid_body_is_still_403(
    client: AsyncClient, auth_headers: dict, other_headers: dict, laptop: dict, body: dict
):
    created = await _create(client, auth_headers, laptop)

    response = await client.put(f"/api/listings/{created['id']}", headers=other_headers, json=body)
    assert response.status_code == 403
    assert response.json() == {"message": "Not authorized"}
    stored = (await client.get(f"/api/listings/{created['id']}")).json()
    assert {k: stored[k] for k in ("title", "category", "price", "images", "updated_at")} == {
        k: created[k] for k in ("title", "category", "price", "images", "updated_at")
    }


@pytest.mark.asyncio
async def test_update_missing_listing_with_invalid_body_is_404(client: AsyncClient, auth_headers: dict):
    response = await client.put("/api/listings/9999", headers=auth_headers, json={"price": -1})
    assert response.status_code == 404
    assert response.json() == {"message": "Listing not found"}


@pytest.mark.asyncio
async def test_update_by_owner_with_invalid_body_is_400(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, laptop)
    response = await client.put(
        f"/api/listings/{created['id']}", headers=auth_headers, json={"price": -1, "title": "Cheap"}
    )
    assert response.status_code == 400
    assert (await client.get(f"/api/listings/{created['id']}")).json()["title"] == "Laptop"


@pytest.mark.asyncio
async def test_update_without_body_is_a_no_op(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, laptop)
    response = await client.put(f"/api/listings/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    updated = response.json()
    for field in ("title", "description", "category", "condition", "price", "images", "status", "owner_id"):
        assert updated[field] == created[field]


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, {**laptop, "images": ["https://img/a.jpg"]})

    response = await client.put(f"/api/listings/{created['id']}", headers=auth_headers, json={"price": 250})
    assert response.status_code == 200
    updated = response.json()
    assert updated["price"] == 250
    for field in ("title", "description", "category", "condition", "images", "status", "owner_id", "created_at"):
        assert updated[field] == created[field]


@pytest.mark.asyncio
async def test_update_applies_zero_price_and_empty_images(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, {**laptop, "images": ["https://img/a.jpg"]})
    response = await client.put(
        f"/api/listings/{created['id']}", headers=auth_headers, json={"price": 0, "images": []}
    )
    assert response.status_code == 200
    assert response.json()["price"] == 0
    assert response.json()["images"] == []


@pytest.mark.asyncio
async def test_update_rejects_explicit_null(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, laptop)
    response = await client.put(f"/api/listings/{created['id']}", headers=auth_headers, json={"title": None})
    assert response.status_code == 400
    assert (await client.get(f"/api/listings/{created['id']}")).json()["title"] == "Laptop"


@pytest.mark.asyncio
async def test_update_cannot_change_owner(
    client: AsyncClient, auth_headers: dict, seller, other_user, laptop: dict
):
    created = await _create(client, auth_headers, laptop)
    response = await client.put(
        f"/api/listings/{created['id']}",
        headers=auth_headers,
        json={"owner_id": other_user.id, "status": "pending"},
    )
    assert response.status_code == 200
    assert response.json()["owner_id"] == seller.id
    assert response.json()["status"] == "pending"


@pytest.mark.asyncio
async def test_delete_by_non_owner_is_403(client: AsyncClient, auth_headers: dict, other_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, laptop)
    response = await client.delete(f"/api/listings/{created['id']}", headers=other_headers)
    assert response.status_code == 403
    assert (await client.get(f"/api/listings/{created['id']}")).status_code == 200


@pytest.mark.asyncio
async def test_second_delete_is_404(client: AsyncClient, auth_headers: dict, laptop: dict):
    created = await _create(client, auth_headers, laptop)

    first = await client.delete(f"/api/listings/{created['id']}", headers=auth_headers)
    assert first.status_code == 200
    assert first.json() == {"message": "Listing deleted"}

    second = await client.delete(f"/api/listings/{created['id']}", headers=auth_headers)
    assert second.status_code == 404


@pytest.mark.asyncio
async def test_ownership_scenario(client: AsyncClient, auth_headers: dict, other_headers: dict, seller, laptop: dict):
    created = await _create(client, auth_headers, laptop)
    assert created["owner_id"] == seller.id
    assert created["status"] == "available"
    url = f"/api/listings/{created['id']}"

    assert (await client.put(url, headers=other_headers, json={"price": 1})).status_code == 403

    response = await client.put(url, headers=auth_headers, json={"price": 250})
    assert response.status_code == 200
    assert response.json()["price"] == 250
    assert response.json()["title"] == "Laptop"

    assert (await client.delete(url, headers=auth_headers)).status_code == 200
    assert (await client.get(url)).status_code == 404


@pytest.mark.asyncio
async def test_store_failure_is_generic_500(client: AsyncClient):
    app.dependency_overrides[get_listing_service] = lambda: ListingService(BrokenListingStore())
    response = await client.get("/api/listings")
    assert response.status_code == 500
    assert response.json() == {"message": "Server error"}
