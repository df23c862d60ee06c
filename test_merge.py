"""Partial updates of NFTs and assets."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from core.errors import NotFoundError
from core.merge import compute_changes
from crud import asset as asset_crud
from crud import nft as nft_crud
from models.asset import Asset
from schemas.asset import AssetPatch
from schemas.nft import NFTCreate, NFTPatch

@pytest.fixture
def nft(db):
    return nft_crud.create_nft(db, NFTCreate.model_validate({
        "nftId": "nft-1",
        "tokenId": 1,
        "name": "Original name",
        "description": "Original description",
        "marketplaceURL": "https://market.example/1",
        "collectionId": "col-1",
    }))

def test_compute_changes_only_reports_differing_allowed_fields(nft):
    patch = NFTPatch.model_validate({"name": "Original name", "description": "New", "scanCount": 40})

    assert compute_changes(nft, patch, nft_crud.NFT_UPDATABLE_FIELDS) == {"description": "New"}

def test_marketplace_url_patch_leaves_other_fields(db, nft):
    changes = nft_crud.update_nft(db, "nft-1", NFTPatch.model_validate({"marketplaceURL": "https://market.example/2"}))

    assert changes == {"marketplace_url": "https://market.example/2"}
    db.expire_all()
    stored = nft_crud.get_nft(db, "nft-1")
    assert stored.marketplace_url == "https://market.example/2"
    assert stored.name == "Original name"
    assert stored.description == "Original description"

def test_same_patch_twice_is_idempotent(db, nft, mutations):
    patch = NFTPatch.model_validate({"name": "Renamed", "isMinted": True})

    nft_crud.update_nft(db, "nft-1", patch)
    db.expire_all()
    first = nft_crud.get_nft(db, "nft-1").to_dict()
    writes_after_first = len(mutations)

    assert nft_crud.update_nft(db, "nft-1", patch) == {}
    db.expire_all()
    assert nft_crud.get_nft(db, "nft-1").to_dict() == first
    assert writes_after_first == 1
    assert len(mutations) == writes_after_first

def test_patch_writes_a_single_statement(db, nft, mutations):
    nft_crud.update_nft(db, "nft-1", NFTPatch.model_validate({"name": "A", "description": "B"}))

    assert len(mutations) == 1
    assert mutations[0].lstrip().upper().startswith("UPDATE")

def test_is_minted_untouched_when_absent(db, nft):
    nft_crud.update_nft(db, "nft-1", NFTPatch.model_validate({"isMinted": True}))
    nft_crud.update_nft(db, "nft-1", NFTPatch.model_validate({"name": "Other"}))

    db.expire_all()
    stored = nft_crud.get_nft(db, "nft-1")
    assert stored.is_minted is True
    assert stored.name == "Other"

def test_counters_cannot_be_patched(db, nft):
    changes = nft_crud.update_nft(db, "nft-1", NFTPatch.model_validate({"scanCount": 99, "viewCount": 7}))

    assert changes == {}
    db.expire_all()
    stored = nft_crud.get_nft(db, "nft-1")
    assert stored.scan_count == 0
    assert stored.view_count == 0

def test_patch_of_missing_nft_raises(db):
    with pytest.raises(NotFoundError):
        nft_crud.update_nft(db, "missing", NFTPatch(name="x"))

def test_asset_visibility_patch(db):
    asset_crud.put_asset(db, Asset(asset_id="asset-1", nft_id="nft-1", asset_type="image", visibility=False))

    changes = asset_crud.update_asset(db, "asset-1", AssetPatch.model_validate({"visibility": True, "assetType": "video"}))

    assert changes == {"visibility": True}
    db.expire_all()
    stored = asset_crud.get_asset(db, "asset-1")
    assert stored.visibility is True
    assert stored.asset_type == "image"

def test_update_nft_endpoint(client, db, nft, make_body):
    response = client.put(
        "/update_nft/nft-1",
        params={"API_KEY": "test-key"},
        json=make_body({"description": "Via API"}),
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    db.expire_all()
    assert nft_crud.get_nft(db, "nft-1").description == "Via API"

def test_update_missing_nft_endpoint_reports_failure(client, make_body):
    response = client.put(
        "/update_nft/missing",
        params={"API_KEY": "test-key"},
        json=make_body({"name": "x"}),
    )

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is False
    assert body["message"].startswith("Error occured during updateNFT:")

def test_null_is_minted_is_rejected():
    with pytest.raises(PydanticValidationError):
        NFTPatch.model_validate({"isMinted": None})

    assert NFTPatch.model_validate({"name": "x"}).is_minted is None

def test_update_nft_endpoint_rejects_null_is_minted(client, db, nft, make_body, mutations):
    response = client.put(
        "/update_nft/nft-1",
        params={"API_KEY": "test-key"},
        json=make_body({"isMinted": None}),
    )

    body = response.json()
    assert response.status_code == 200
    assert body["success"] is False
    assert body["message"].startswith("Validation Error:")
    assert "isMinted cannot be null" in body["message"]
    assert mutations == []
    db.expire_all()
    assert nft_crud.get_nft(db, "nft-1").is_minted is False
