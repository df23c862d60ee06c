from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from config.settings import Settings, get_settings
from core.assets import create_assets, create_pre_signed_urls
from core.auth import TokenVerifier, get_token_verifier, require_api_key
from core.dependencies import get_blob_storage, get_pinning_client
from core.errors import upstream_guard
from crud import asset as asset_crud
from db.session import get_db
from schemas.asset import AssetPatch, AssetsCreate, PresignedURLRequest
from schemas.common import AuthenticatedRequest
from utilities.ipfs import PinningClient
from utilities.response import success_response
from utilities.supabase_client import BlobStorage

logger = logging.getLogger(__name__)
router = APIRouter(tags=["assets"])

@router.post("/create_pre_signed_url")
def create_pre_signed_url(
    body: AuthenticatedRequest[PresignedURLRequest],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    storage: BlobStorage = Depends(get_blob_storage),
    settings: Settings = Depends(get_settings)
):
    """Signed upload URLs for a user's original assets"""
    verifier.authorize(body, body.data.user_id)
    with upstream_guard("createPreSignedURL"):
        return success_response(create_pre_signed_urls(storage, settings, body.data))

@router.get("/query_assets_by_nft_id/{nft_id}")
def query_assets_by_nft_id(nft_id: str, db: Session = Depends(get_db)):
    """Get assets attached to an NFT"""
    with upstream_guard("queryAssetsByNFTId"):
        assets = asset_crud.get_assets_by_nft_id(db, nft_id)
        return success_response([asset.to_dict() for asset in assets])

@router.post("/save_assets")
def save_assets(
    body: AuthenticatedRequest[AssetsCreate],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    storage: BlobStorage = Depends(get_blob_storage),
    pinning: PinningClient = Depends(get_pinning_client),
    db: Session = Depends(get_db)
):
    """Create assets for an NFT, pinning each backing object"""
    verifier.authorize(body)
    with upstream_guard("createAssets"):
        assets = create_assets(db, storage, pinning, body.data)
        return success_response([asset.to_dict() for asset in assets])

@router.put("/update_asset/{asset_id}")
def update_asset(
    asset_id: str,
    body: AuthenticatedRequest[AssetPatch],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Partially update an asset"""
    verifier.authorize(body)
    with upstream_guard("updateAsset"):
        asset_crud.update_asset(db, asset_id, body.data)
        return success_response()

@router.delete("/delete_asset_by_id/{asset_id}")
def delete_asset_by_id(asset_id: str, _: str = Depends(require_api_key), db: Session = Depends(get_db)):
    """Delete an asset"""
    with upstream_guard("deleteAssetById"):
        asset_crud.delete_asset(db, asset_id)
        return success_response(message="Asset successfully deleted")
