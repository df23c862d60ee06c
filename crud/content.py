from datetime import datetime
from sqlalchemy.orm import Session
from typing import List, Optional
import hashlib
import logging

from models.content import Content
from schemas.content import ContentCreate

logger = logging.getLogger(__name__)

def make_content_hash_id(title: str, number: Optional[int], creator: Optional[str]) -> str:
    """sha256 hex of title + number + creator; absent parts contribute nothing"""
    raw = f"{title}{'' if number is None else number}{creator or ''}"
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()

def get_contents_by_category(db: Session, category: str) -> List[Content]:
    """Get contents in a category"""
    return db.query(Content).filter(Content.category == category).all()

def create_content(db: Session, content_data: ContentCreate) -> Content:
    """Create (or overwrite) content under its hash id"""
    try:
        db_content = Content(
            **content_data.model_dump(),
            hash_id=make_content_hash_id(content_data.title, content_data.number, content_data.creator),
            date_time=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

        db_content = db.merge(db_content)
        db.commit()
        db.refresh(db_content)

        logger.info(f"Created content: {content_data.title} ({db_content.hash_id})")
        return db_content

    except Exception as e:
        logger.error(f"Error creating content: {e}")
        db.rollback()
        raise e

def delete_content(db: Session, hash_id: str) -> bool:
    """Delete content by hash id"""
    deleted = db.query(Content).filter(Content.hash_id == hash_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Deleted content {hash_id}")
    return deleted > 0
