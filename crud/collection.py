from sqlalchemy.orm import Session
from typing import Optional, List
import logging

from models.collection import Collection
from schemas.collection import CollectionSave
from utilities.timestamps import now_millis

logger = logging.getLogger(__name__)

# Versioning is not supported yet: every save writes version 1 in place
CURRENT_VERSION = 1

def _most_recent(collections: List[Collection]) -> Optional[Collection]:
    if not collections:
        return None
    return max(collections, key=lambda c: c.version)

def get_collection_with_version(db: Session, collection_id: str, version: int) -> Optional[Collection]:
    """Get one version of a collection"""
    return db.get(Collection, (collection_id, version))

def get_most_recent_collection(db: Session, collection_id: str) -> Optional[Collection]:
    """Get the highest version stored for a collection id"""
    return _most_recent(db.query(Collection).filter(Collection.collection_id == collection_id).all())

def get_collection_by_address(db: Session, address: str) -> Optional[Collection]:
    """Get the highest version stored for a contract address"""
    return _most_recent(db.query(Collection).filter(Collection.address == address).all())

def get_collections_by_category(db: Session, category: str) -> List[Collection]:
    """Get collections in a category"""
    return db.query(Collection).filter(Collection.category == category).all()

def get_collections_by_creator_address(db: Session, creator_address: str) -> List[Collection]:
    """Get collections by creator address"""
    return db.query(Collection).filter(Collection.creator_address == creator_address).all()

def get_all_collections(db: Session) -> List[Collection]:
    """Get every stored collection row"""
    return db.query(Collection).all()

def _put_collection(db: Session, db_collection: Collection) -> Collection:
    db_collection = db.merge(db_collection)
    db.commit()
    db.refresh(db_collection)
    return db_collection

def create_collection(db: Session, collection_data: CollectionSave) -> Collection:
    """Create collection at version 1"""
    try:
        values = collection_data.model_dump()
        if values["shipping_required"] is None:
            values["shipping_required"] = False
        if values["owner_signature_mint_allowed"] is None:
            values["owner_signature_mint_allowed"] = True

        now = now_millis()
        values.update(created_at=now, updated_at=now)
        db_collection = _put_collection(
            db, Collection(**values, version=CURRENT_VERSION, is_latest=True)
        )

        logger.info(f"Created collection: {collection_data.collection_id}")
        return db_collection

    except Exception as e:
        logger.error(f"Error creating collection: {e}")
        db.rollback()
        raise e

def update_collection(db: Session, collection_data: CollectionSave) -> Collection:
    """Overwrite the current version of a collection"""
    try:
        values = collection_data.model_dump()
        if values["created_at"] is None:
            stored = get_collection_with_version(db, collection_data.collection_id, CURRENT_VERSION)
            if stored is not None:
                values["created_at"] = stored.created_at

        db_collection = _put_collection(
            db,
            Collection(**values, version=CURRENT_VERSION, is_latest=True, updated_at=now_millis())
        )

        logger.info(f"Updated collection: {collection_data.collection_id}")
        return db_collection

    except Exception as e:
        logger.error(f"Error updating collection: {e}")
        db.rollback()
        raise e

def delete_collection(db: Session, collection_id: str, version: int) -> bool:
    """Delete one version of a collection (test cleanup only, not routed)"""
    deleted = (
        db.query(Collection)
        .filter(Collection.collection_id == collection_id, Collection.version == version)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Deleted collection {collection_id} v{version}")
    return deleted > 0
