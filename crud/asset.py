from sqlalchemy.orm import Session
from typing import Dict, Any, Optional, List
import logging

from core.merge import merge_update
from models.asset import Asset
from schemas.asset import AssetPatch

logger = logging.getLogger(__name__)

ASSET_UPDATABLE_FIELDS = {"visibility"}

def get_asset(db: Session, asset_id: str) -> Optional[Asset]:
    """Get asset by ID"""
    return db.get(Asset, asset_id)

def get_assets_by_nft_id(db: Session, nft_id: str) -> List[Asset]:
    """Get assets attached to an NFT"""
    return db.query(Asset).filter(Asset.nft_id == nft_id).all()

def put_asset(db: Session, db_asset: Asset) -> Asset:
    """Persist asset by full overwrite"""
    try:
        db_asset = db.merge(db_asset)
        db.commit()
        db.refresh(db_asset)

        logger.info(f"Saved asset: {db_asset.asset_id}")
        return db_asset

    except Exception as e:
        logger.error(f"Error saving asset: {e}")
        db.rollback()
        raise e

def update_asset(db: Session, asset_id: str, patch: AssetPatch) -> Dict[str, Any]:
    """Merge a partial update into an asset"""
    return merge_update(db, Asset, asset_id, patch, ASSET_UPDATABLE_FIELDS)

def delete_asset(db: Session, asset_id: str) -> bool:
    """Delete asset"""
    deleted = db.query(Asset).filter(Asset.asset_id == asset_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Deleted asset {asset_id}")
    return deleted > 0
