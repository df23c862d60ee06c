from sqlalchemy.orm import Session
from typing import List
import logging

from config.settings import Settings
from core.errors import MarketplaceError, PartialBatchError, upstream_guard
from crud.asset import put_asset
from models.asset import Asset
from schemas.asset import AssetInfo, AssetsCreate, PresignedURLRequest
from utilities.ipfs import PinningClient
from utilities.supabase_client import BlobStorage, parse_storage_url

logger = logging.getLogger(__name__)

def create_asset(
    db: Session,
    storage: BlobStorage,
    pinning: PinningClient,
    asset_info: AssetInfo,
    nft_id: str,
    creator_address: str,
    creator_id: str
) -> Asset:
    """Pin the asset's backing object (when it has one) and persist the asset"""
    db_asset = Asset(
        asset_id=asset_info.asset_id,
        asset_type=asset_info.asset_type,
        asset_url=asset_info.asset_url,
        creator_address=creator_address,
        creator_id=creator_id,
        visibility=asset_info.visibility,
        processed=asset_info.processed,
        nft_id=nft_id,
        ipfs_hash="",
        ipfs_url=""
    )

    with upstream_guard("createAsset"):
        if asset_info.asset_url:
            bucket, key = parse_storage_url(asset_info.asset_url)
            if bucket and key:
                body, content_type = storage.get_object(bucket, key)
                pinned = pinning.pin_file_to_ipfs(body, asset_info.asset_id, content_type)
                db_asset.ipfs_hash = pinned["IpfsHash"]
                db_asset.ipfs_url = pinning.gateway_url(db_asset.ipfs_hash)
            else:
                logger.warning(f"Asset {asset_info.asset_id} URL is not a storage object, skipping pinning")

        return put_asset(db, db_asset)

def create_assets(
    db: Session,
    storage: BlobStorage,
    pinning: PinningClient,
    request: AssetsCreate
) -> List[Asset]:
    """Create assets in order; the first failure aborts the rest"""
    return create_asset_batch(
        db, storage, pinning, request.assets,
        request.nft_id, request.asset_creator_address, request.asset_creator_id,
        operation="createAssets"
    )

def create_asset_batch(
    db: Session,
    storage: BlobStorage,
    pinning: PinningClient,
    assets: List[AssetInfo],
    nft_id: str,
    creator_address: str,
    creator_id: str,
    operation: str
) -> List[Asset]:
    created = []
    for asset_info in assets:
        try:
            created.append(
                create_asset(db, storage, pinning, asset_info, nft_id, creator_address, creator_id)
            )
        except MarketplaceError as e:
            logger.error(f"{operation} stopped at asset {asset_info.asset_id}: {e.to_message()}")
            raise PartialBatchError(operation, len(created), len(assets), e) from e
    return created

def create_pre_signed_urls(storage: BlobStorage, settings: Settings, request: PresignedURLRequest) -> List[str]:
    """Signed upload URLs for original assets under {userId}/{assetType}/{assetId}"""
    return [
        storage.create_signed_upload_url(
            settings.ORIGINAL_ASSETS_BUCKET,
            f"{request.user_id}/{asset.asset_type}/{asset.asset_id}"
        )
        for asset in request.assets
    ]
