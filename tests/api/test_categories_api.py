# tests/api/test_categories_api.py
from uuid import uuid4

import pytest

from catalog_api.services.slugs import SlugGenerator

pytestmark = pytest.mark.integration

CATEGORIES = "/api/v1/categories"


async def create(client, **payload):
    response = await client.post(CATEGORIES, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_category(client):
    response = await client.post(
        CATEGORIES,
        json={"name": "Home & Garden", "description": "Everything for the house", "display_order": 3},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "home-garden"
    assert body["parent_id"] is None
    assert body["display_order"] == 3
    assert body["is_active"] is True
    assert "id" in body and "created_at" in body and "updated_at" in body


async def test_duplicate_name_gets_suffixed_slug(client):
    first = await create(client, name="Electronics")
    second = await create(client, name="Electronics")

    assert first["slug"] == "electronics"
    assert second["slug"] == "electronics-1"


async def test_create_validates_payload(client):
    too_short = await client.post(CATEGORIES, json={"name": "A"})
    no_slug_characters = await client.post(CATEGORIES, json={"name": "!!!"})
    negative_order = await client.post(CATEGORIES, json={"name": "Books", "display_order": -1})

    assert too_short.status_code == 422
    assert no_slug_characters.status_code == 422
    assert negative_order.status_code == 422


async def test_create_with_unknown_parent_is_404(client):
    response = await client.post(CATEGORIES, json={"name": "Orphan", "parent_id": str(uuid4())})

    assert response.status_code == 404


async def test_get_category_by_id_and_slug(client):
    created = await create(client, name="Books")

    by_id = await client.get(f"{CATEGORIES}/{created['id']}")
    by_slug = await client.get(f"{CATEGORIES}/slug/books")

    assert by_id.status_code == 200
    assert by_id.json()["name"] == "Books"
    assert by_slug.status_code == 200
    assert by_slug.json()["id"] == created["id"]


async def test_get_unknown_category_is_404(client):
    assert (await client.get(f"{CATEGORIES}/{uuid4()}")).status_code == 404
    assert (await client.get(f"{CATEGORIES}/slug/nothing-here")).status_code == 404


async def test_get_category_with_malformed_id_is_422(client):
    response = await client.get(f"{CATEGORIES}/not-a-uuid")

    assert response.status_code == 422


async def test_list_root_and_children(client):
    electronics = await create(client, name="Electronics", display_order=1)
    await create(client, name="Furniture", display_order=2)
    await create(client, name="Peripherals", parent_id=electronics["id"], display_order=2)
    await create(client, name="Computers", parent_id=electronics["id"], display_order=1)

    roots = await client.get(f"{CATEGORIES}/root")
    children = await client.get(f"{CATEGORIES}/{electronics['id']}/children")

    assert [c["name"] for c in roots.json()] == ["Electronics", "Furniture"]
    assert [c["name"] for c in children.json()] == ["Computers", "Peripherals"]


async def test_list_with_children_nests_subtrees(client):
    electronics = await create(client, name="Electronics")
    computers = await create(client, name="Computers", parent_id=electronics["id"])
    await create(client, name="Laptops", parent_id=computers["id"])

    response = await client.get(CATEGORIES, params={"include_children": "true"})

    assert response.status_code == 200
    by_name = {c["name"]: c for c in response.json()}
    assert [c["name"] for c in by_name["Electronics"]["children"]] == ["Computers"]
    assert [c["name"] for c in by_name["Electronics"]["children"][0]["children"]] == ["Laptops"]


async def test_list_hides_inactive_unless_asked(client):
    await create(client, name="Books")
    await create(client, name="Archive", is_active=False)

    default = await client.get(CATEGORIES)
    everything = await client.get(CATEGORIES, params={"active_only": "false"})

    assert [c["name"] for c in default.json()] == ["Books"]
    assert sorted(c["name"] for c in everything.json()) == ["Archive", "Books"]
    assert "children" not in default.json()[0]


async def test_update_renames_and_regenerates_slug(client):
    created = await create(client, name="Books")

    response = await client.put(f"{CATEGORIES}/{created['id']}", json={"name": "Rare Books"})

    assert response.status_code == 200
    assert response.json()["slug"] == "rare-books"
    assert response.json()["description"] is None


async def test_update_null_parent_moves_to_root(client):
    parent = await create(client, name="Electronics")
    child = await create(client, name="Computers", parent_id=parent["id"])

    response = await client.put(f"{CATEGORIES}/{child['id']}", json={"parent_id": None})

    assert response.status_code == 200
    assert response.json()["parent_id"] is None


async def test_update_self_parent_is_409(client):
    created = await create(client, name="Books")

    response = await client.put(f"{CATEGORIES}/{created['id']}", json={"parent_id": created["id"]})

    assert response.status_code == 409
    assert response.json()["detail"] == "Category cannot be its own parent."


async def test_update_creating_cycle_is_409(client):
    electronics = await create(client, name="Electronics")
    computers = await create(client, name="Computers", parent_id=electronics["id"])

    response = await client.put(f"{CATEGORIES}/{electronics['id']}", json={"parent_id": computers["id"]})

    assert response.status_code == 409
    assert "circular" in response.json()["detail"]


async def test_update_unknown_category_is_404(client):
    response = await client.put(f"{CATEGORIES}/{uuid4()}", json={"name": "Anything"})

    assert response.status_code == 404


async def test_delete_category(client):
    created = await create(client, name="Books")

    response = await client.delete(f"{CATEGORIES}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Category deleted successfully"}
    assert (await client.get(f"{CATEGORIES}/{created['id']}")).status_code == 404
    assert (await client.delete(f"{CATEGORIES}/{created['id']}")).status_code == 404


async def test_delete_parent_is_409(client):
    parent = await create(client, name="Electronics")
    await create(client, name="Computers", parent_id=parent["id"])

    response = await client.delete(f"{CATEGORIES}/{parent['id']}")

    assert response.status_code == 409
    assert (await client.get(f"{CATEGORIES}/{parent['id']}")).status_code == 200


async def test_delete_category_with_products_is_409(client):
    category = await create(client, name="Books")
    product = await client.post(
        "/api/v1/products",
        json={"name": "Novel", "description": "Paperback", "price": "12.50", "category_id": category["id"]},
    )
    assert product.status_code == 201

    response = await client.delete(f"{CATEGORIES}/{category['id']}")
    products = await client.get(f"{CATEGORIES}/{category['id']}/products")

    assert response.status_code == 409
    assert [p["name"] for p in products.json()] == ["Novel"]


async def test_deleted_slug_can_be_reused(client):
    created = await create(client, name="Books")
    await client.delete(f"{CATEGORIES}/{created['id']}")

    recreated = await create(client, name="Books")

    assert recreated["slug"] == "books"


async def test_slug_lost_to_concurrent_writer_is_409(client, monkeypatch):
    await create(client, name="Books")

    # Another request took the slug between the uniqueness check and the insert
    async def stale_check(self, base_slug, exclude_id=None):
        return base_slug

    monkeypatch.setattr(SlugGenerator, "ensure_unique", stale_check)

    response = await client.post(CATEGORIES, json={"name": "Books"})

    assert response.status_code == 409
    assert response.json()["detail"] == "Conflicting change detected, please retry the request"

    monkeypatch.undo()
    listed = await client.get(CATEGORIES)
    assert [c["slug"] for c in listed.json()] == ["books"]


async def test_slug_conflict_on_update_is_409(client, monkeypatch):
    await create(client, name="Books")
    magazines = await create(client, name="Magazines")

    async def stale_check(self, base_slug, exclude_id=None):
        return base_slug

    monkeypatch.setattr(SlugGenerator, "ensure_unique", stale_check)

    response = await client.put(f"{CATEGORIES}/{magazines['id']}", json={"slug": "books"})

    assert response.status_code == 409
    monkeypatch.undo()
    unchanged = await client.get(f"{CATEGORIES}/{magazines['id']}")
    assert unchanged.json()["slug"] == "magazines"
