from sqlalchemy import update
from sqlalchemy.orm import Session
from typing import Dict, Any, Optional, List
import logging

from core.errors import NotFoundError
from core.merge import merge_update
from models.nft import NFT
from schemas.nft import NFTCreate, NFTPatch

logger = logging.getLogger(__name__)

NFT_UPDATABLE_FIELDS = {"description", "name", "marketplace_url", "is_minted"}

def get_nft(db: Session, nft_id: str) -> Optional[NFT]:
    """Get NFT by ID"""
    return db.get(NFT, nft_id)

def get_nft_by_dot_id(db: Session, dot_id: str) -> Optional[NFT]:
    """Get NFT by dot ID"""
    return db.query(NFT).filter(NFT.dot_id == dot_id).first()

def get_nfts_by_collection_id(db: Session, collection_id: str) -> List[NFT]:
    """Get NFTs of a collection"""
    return db.query(NFT).filter(NFT.collection_id == collection_id).all()

def get_nfts_by_collection_address(db: Session, collection_address: str) -> List[NFT]:
    """Get NFTs by collection contract address"""
    return db.query(NFT).filter(NFT.collection_address == collection_address).all()

def get_nft_by_collection_address_and_token_id(db: Session, collection_address: str, token_id: int) -> Optional[NFT]:
    """Get the NFT minted under a contract with a token id"""
    return (
        db.query(NFT)
        .filter(NFT.collection_address == collection_address, NFT.token_id == token_id)
        .first()
    )

def create_nft(db: Session, nft_data: NFTCreate) -> NFT:
    """Create NFT with zeroed counters"""
    try:
        db_nft = db.merge(NFT(**nft_data.model_dump(), scan_count=0, view_count=0))
        db.commit()
        db.refresh(db_nft)

        logger.info(f"Created new NFT: {nft_data.nft_id}")
        return db_nft

    except Exception as e:
        logger.error(f"Error creating NFT: {e}")
        db.rollback()
        raise e

def update_nft(db: Session, nft_id: str, patch: NFTPatch) -> Dict[str, Any]:
    """Merge a partial update into an NFT"""
    return merge_update(db, NFT, nft_id, patch, NFT_UPDATABLE_FIELDS)

def _increment(db: Session, nft_id: str, column) -> None:
    result = db.execute(
        update(NFT)
        .where(NFT.nft_id == nft_id)
        .values({column: column + 1})
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount == 0:
        raise NotFoundError(f"NFT {nft_id} does not exist")

def increment_scan_count(db: Session, nft_id: str) -> None:
    """Atomically add one to the scan counter"""
    _increment(db, nft_id, NFT.scan_count)
    logger.info(f"Incremented scan count of NFT {nft_id}")

def increment_view_count(db: Session, nft_id: str) -> None:
    """Atomically add one to the view counter"""
    _increment(db, nft_id, NFT.view_count)
    logger.info(f"Incremented view count of NFT {nft_id}")

def delete_nft(db: Session, nft_id: str) -> bool:
    """Delete NFT (test cleanup only, not routed)"""
    deleted = db.query(NFT).filter(NFT.nft_id == nft_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Deleted NFT {nft_id}")
    return deleted > 0
