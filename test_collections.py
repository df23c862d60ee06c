"""Collection repository and listing endpoints."""

import json

from core.collections import filter_collections
from crud import collection as collection_crud
from models.collection import Collection
from schemas.collection import CollectionSave

def save(db, **fields):
    return collection_crud.create_collection(db, CollectionSave(**fields))

def test_create_assigns_version_and_defaults(db):
    collection = save(db, collection_id="col-1", name="Genesis")

    assert collection.version == 1
    assert collection.is_latest is True
    assert collection.created_at == collection.updated_at
    assert collection.shipping_required is False
    assert collection.owner_signature_mint_allowed is True

def test_create_keeps_explicit_flags(db):
    collection = save(db, collection_id="col-1", shipping_required=True, owner_signature_mint_allowed=False)

    assert collection.shipping_required is True
    assert collection.owner_signature_mint_allowed is False

def test_most_recent_version_wins(db):
    for version in (1, 3, 2):
        db.add(Collection(collection_id="col-1", version=version, name=f"v{version}", address="0xabc"))
    db.commit()

    assert collection_crud.get_most_recent_collection(db, "col-1").version == 3
    assert collection_crud.get_collection_by_address(db, "0xabc").version == 3
    assert collection_crud.get_most_recent_collection(db, "unknown") is None

def test_update_overwrites_version_one(db):
    created = save(db, collection_id="col-1", name="Before", category="art")
    created_at, first_updated_at = created.created_at, created.updated_at

    updated = collection_crud.update_collection(db, CollectionSave(collection_id="col-1", name="After"))

    assert updated.version == 1
    assert updated.name == "After"
    # full overwrite: fields missing from the payload are cleared
    assert updated.category is None
    assert updated.created_at == created_at
    assert updated.updated_at >= first_updated_at
    assert db.query(Collection).count() == 1

def test_filter_hides_test_categories():
    collections = [
        Collection(collection_id="a", category="art"),
        Collection(collection_id="b", category="test-art"),
        Collection(collection_id="c", category=None),
    ]

    assert [c.collection_id for c in filter_collections(collections)] == ["a", "c"]
    assert len(filter_collections(collections, filter_test_override=True)) == 3

def test_filter_by_flags_and_chain():
    collections = [
        Collection(collection_id="a", is_created_by_unic=True, chain="polygon", creator_address="0x1"),
        Collection(collection_id="b", is_created_by_unic=False, chain="polygon", creator_address="0x1"),
        Collection(collection_id="c", is_created_by_unic=True, chain="ethereum", creator_address="0x2"),
    ]

    result = filter_collections(collections, is_created_by_unic=True, chain="polygon")
    assert [c.collection_id for c in result] == ["a"]

    result = filter_collections(collections, creator_address="0x2")
    assert [c.collection_id for c in result] == ["c"]

def test_query_collection_endpoints(client, make_body):
    params = {"API_KEY": "test-key"}
    response = client.post(
        "/save_collection",
        params=params,
        json=make_body({"collectionId": "col-1", "address": "0xabc", "category": "art", "links": ["https://x"]}),
    )
    data = response.json()["data"]
    assert data["shippingRequired"] is False
    assert data["ownerSignatureMintAllowed"] is True

    response = client.get("/query_collection/col-1")
    assert response.json()["data"]["links"] == ["https://x"]

    response = client.get("/query_collection_by_address/0xabc")
    assert response.json()["data"]["collectionId"] == "col-1"

    response = client.get("/query_collection/missing")
    assert response.json() == {"success": True, "data": {}}

def test_update_collection_endpoint(client, make_body):
    params = {"API_KEY": "test-key"}
    client.post("/save_collection", params=params, json=make_body({"collectionId": "col-1", "name": "A"}))

    response = client.put("/save_collection", params=params, json=make_body({"collectionId": "col-1", "name": "B"}))

    assert response.json()["data"]["name"] == "B"
    assert response.json()["data"]["version"] == 1

def test_query_collections_by_category(client, make_body):
    params = {"API_KEY": "test-key"}
    for collection_id, category, chain in [("a", "art", "polygon"), ("b", "art", "ethereum"), ("c", "test", "polygon")]:
        client.post(
            "/save_collection",
            params=params,
            json=make_body({"collectionId": collection_id, "category": category, "chain": chain}),
        )

    response = client.get(
        "/query_collections",
        params={**params, "QUERY_PARAMS": json.dumps({"category": "art", "chain": "polygon"})},
    )
    assert [c["collectionId"] for c in response.json()["data"]] == ["a"]

    response = client.get("/query_collections_all", params={**params, "QUERY_PARAMS": json.dumps({})})
    assert sorted(c["collectionId"] for c in response.json()["data"]) == ["a", "b"]

    response = client.get(
        "/query_collections",
        params={**params, "QUERY_PARAMS": json.dumps({"category": "all", "filterTestOverride": True})},
    )
    assert len(response.json()["data"]) == 3

def test_query_collections_requires_category_or_creator(client):
    response = client.get("/query_collections", params={"API_KEY": "test-key", "QUERY_PARAMS": "{}"})

    assert response.json() == {
        "success": False,
        "message": "Validation Error: either category or creatorAddress must be provided.",
    }

def test_query_collections_rejects_malformed_params(client):
    response = client.get("/query_collections", params={"API_KEY": "test-key", "QUERY_PARAMS": "{not json"})

    body = response.json()
    assert body["success"] is False
    assert body["message"].startswith("Validation Error:")
