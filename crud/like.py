from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List
import logging

from models.like import UserLikedNFT, UserLikedCollection

logger = logging.getLogger(__name__)

class LikeStore:
    """User -> entity "liked" relation; a row existing is the only state"""

    def __init__(self, model, entity_column: str):
        self.model = model
        self.entity_column = entity_column

    def like(self, db: Session, entity_id: str, user_id: str) -> None:
        """Record a like; liking twice leaves one record"""
        try:
            db.merge(self.model(**{self.entity_column: entity_id, "user_id": user_id}))
            db.commit()
        except IntegrityError:
            # A concurrent like inserted the same key first
            db.rollback()
        logger.info(f"{user_id} liked {self.entity_column} {entity_id}")

    def unlike(self, db: Session, entity_id: str, user_id: str) -> None:
        """Remove a like; removing an absent like is a no-op"""
        (
            db.query(self.model)
            .filter(getattr(self.model, self.entity_column) == entity_id, self.model.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        logger.info(f"{user_id} unliked {self.entity_column} {entity_id}")

    def is_liked(self, db: Session, entity_id: str, user_id: str) -> bool:
        return db.get(self.model, (entity_id, user_id)) is not None

    def list_liked_by_user(self, db: Session, user_id: str) -> List[str]:
        """Entity ids a user has liked"""
        column = getattr(self.model, self.entity_column)
        return [row[0] for row in db.query(column).filter(self.model.user_id == user_id).all()]

nft_likes = LikeStore(UserLikedNFT, "nft_id")
collection_likes = LikeStore(UserLikedCollection, "collection_id")
