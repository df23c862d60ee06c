from sqlalchemy.orm import Session
from typing import Any, List
import logging

from config.settings import Settings
from core.assets import create_asset
from core.errors import MarketplaceError, PartialBatchError, upstream_guard
from crud.nft import create_nft
from models.nft import NFT
from schemas.nft import AssetsAndNFT
from utilities.ipfs import PinningClient
from utilities.supabase_client import BlobStorage

logger = logging.getLogger(__name__)

def metadata_key(creator_address: str, collection_id: str, token_id: int) -> str:
    return f"{creator_address}/{collection_id}/{token_id}.json"

def upload_metadata(storage: BlobStorage, settings: Settings, nft: NFT, traits: Any) -> str:
    """Publish the token metadata document; returns its object key"""
    key = metadata_key(nft.creator_address, nft.collection_id, nft.token_id)
    metadata = {
        "name": nft.name,
        "description": nft.description,
        "image": nft.image_url,
        "traits": traits,
    }
    storage.upload_json(settings.COLLECTIONS_BUCKET, key, metadata)
    logger.info(f"Uploaded metadata for NFT {nft.nft_id} to {key}")
    return key

def create_assets_and_save_nfts(
    db: Session,
    storage: BlobStorage,
    pinning: PinningClient,
    settings: Settings,
    items: List[AssetsAndNFT]
) -> int:
    """For each item: save the NFT, upload its metadata, create its assets.

    Items run in order and nothing is rolled back: when an item fails, the
    items before it (and the completed steps of the failing item) stay
    persisted and the remaining items are skipped.
    """
    operation = "createAssetsAndSaveNfts"
    for completed, item in enumerate(items):
        try:
            with upstream_guard(operation):
                nft = create_nft(db, item.nft_data)

                if not item.skip_metadata_upload:
                    upload_metadata(storage, settings, nft, item.traits)

                for asset_info in item.assets:
                    create_asset(
                        db, storage, pinning, asset_info,
                        nft.nft_id, item.asset_creator_address, item.asset_creator_id
                    )
        except MarketplaceError as e:
            logger.error(f"{operation} stopped at NFT {item.nft_data.nft_id}: {e.to_message()}")
            raise PartialBatchError(operation, completed, len(items), e) from e

    logger.info(f"Created {len(items)} NFTs with their assets")
    return len(items)
