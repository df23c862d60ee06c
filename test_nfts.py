"""NFT creation, lookups and the combined NFT + metadata + assets flow."""

import json

import pytest

from core.errors import PartialBatchError
from core.nft import create_assets_and_save_nfts, metadata_key
from crud import asset as asset_crud
from crud import nft as nft_crud
from schemas.nft import AssetsAndNFT

PARAMS = {"API_KEY": "test-key"}

def test_save_nft_defaults(client, make_body):
    response = client.post("/save_nft", params=PARAMS, json=make_body({
        "nftId": "nft-1",
        "tokenId": 7,
        "marketplaceURL": "https://market.example/7",
        "imageURL": "https://img.example/7.png",
        "scanCount": 50,
    }))

    data = response.json()["data"]
    assert data["isMinted"] is False
    assert data["scanCount"] == 0
    assert data["viewCount"] == 0
    assert data["marketplaceURL"] == "https://market.example/7"
    assert data["imageURL"] == "https://img.example/7.png"

def test_save_nft_explicit_is_minted(client, make_body):
    response = client.post("/save_nft", params=PARAMS, json=make_body({"nftId": "nft-1", "tokenId": 1, "isMinted": True}))

    assert response.json()["data"]["isMinted"] is True

def test_nft_lookups(client, make_body):
    for nft_id, token_id in [("nft-1", 1), ("nft-2", 2)]:
        client.post("/save_nft", params=PARAMS, json=make_body({
            "nftId": nft_id,
            "tokenId": token_id,
            "dotId": f"dot-{token_id}",
            "collectionId": "col-1",
            "collectionAddress": "0xabc",
        }))

    assert client.get("/query_nft/nft-1").json()["data"]["tokenId"] == 1
    assert client.get("/query_nft/unknown").json() == {"success": True, "data": {}}
    assert client.get("/query_nft_by_dot_id/dot-2").json()["data"]["nftId"] == "nft-2"
    assert len(client.get("/query_nfts_by_collection_id/col-1").json()["data"]) == 2
    assert len(client.get("/query_nfts_by_collection_address/0xabc").json()["data"]) == 2

def test_lookup_by_collection_address_and_token_ids(client, make_body):
    client.post("/save_nft", params=PARAMS, json=make_body({"nftId": "nft-1", "tokenId": 1, "collectionAddress": "0xabc"}))
    query = [
        {"collectionAddress": "0xabc", "tokenId": "1"},
        {"collectionAddress": "0xabc", "tokenId": 99},
    ]

    response = client.get(
        "/query_nfts_by_collection_addresses_and_token_ids",
        params={**PARAMS, "QUERY_PARAMS": json.dumps(query)},
    )

    data = response.json()["data"]
    assert data[0]["nftId"] == "nft-1"
    assert data[1] == {}

def test_lookup_requires_query_params(client):
    response = client.get("/query_nfts_by_collection_addresses_and_token_ids", params=PARAMS)

    assert response.json() == {"success": False, "message": "Validation Error: QUERY_PARAMS must be provided."}

def item(nft_id, token_id, assets=(), **extra):
    return {
        "nftData": {
            "nftId": nft_id,
            "tokenId": token_id,
            "name": f"Token {token_id}",
            "description": "desc",
            "imageURL": f"https://img.example/{token_id}.png",
            "creatorAddress": "0xcreator",
            "collectionId": "col-1",
        },
        "assets": list(assets),
        "traits": [{"trait_type": "color", "value": "red"}],
        "assetCreatorAddress": "0xcreator",
        "assetCreatorId": "user-1",
        **extra,
    }

def test_create_assets_and_save_nfts_endpoint(client, storage, make_body, db):
    response = client.post("/create_assets_and_save_nfts", params=PARAMS, json=make_body([
        item("nft-1", 1, [{"assetId": "asset-1", "assetType": "image"}]),
        item("nft-2", 2, skipMetadataUpload=True),
    ]))

    assert response.json() == {"success": True, "message": "Successfully generated assets and NFTs."}
    assert storage.uploads == {
        ("unic-collections", "0xcreator/col-1/1.json"): {
            "name": "Token 1",
            "description": "desc",
            "image": "https://img.example/1.png",
            "traits": [{"trait_type": "color", "value": "red"}],
        }
    }
    assert nft_crud.get_nft(db, "nft-2").is_minted is False
    assert asset_crud.get_asset(db, "asset-1").nft_id == "nft-1"

def test_create_assets_and_save_nfts_requires_items(client, make_body):
    response = client.post("/create_assets_and_save_nfts", params=PARAMS, json=make_body([]))

    assert response.json()["success"] is False
    assert response.json()["message"].startswith("Validation Error:")

def test_failure_keeps_completed_items(db, storage, pinning, settings):
    broken_url = "https://proj.supabase.co/storage/v1/object/public/original-assets/missing"
    items = [
        AssetsAndNFT.model_validate(item("nft-1", 1)),
        AssetsAndNFT.model_validate(item("nft-2", 2, [{"assetId": "asset-2", "assetType": "image", "assetURL": broken_url}])),
        AssetsAndNFT.model_validate(item("nft-3", 3)),
    ]

    with pytest.raises(PartialBatchError) as exc_info:
        create_assets_and_save_nfts(db, storage, pinning, settings, items)

    assert (exc_info.value.completed, exc_info.value.total) == (1, 3)
    # steps of the failing item that ran before the failure stay persisted
    assert nft_crud.get_nft(db, "nft-1") is not None
    assert nft_crud.get_nft(db, "nft-2") is not None
    assert nft_crud.get_nft(db, "nft-3") is None
    assert asset_crud.get_asset(db, "asset-2") is None

def test_metadata_key():
    assert metadata_key("0xcreator", "col-1", 12) == "0xcreator/col-1/12.json"
