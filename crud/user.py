from sqlalchemy.orm import Session
from typing import Optional
import logging

from models.user import User
from schemas.user import UserSave

logger = logging.getLogger(__name__)

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by ID"""
    return db.get(User, user_id)

def get_user_by_tag(db: Session, user_tag: str) -> Optional[User]:
    """Get the first user carrying a tag"""
    return db.query(User).filter(User.user_tag == user_tag).first()

def save_user(db: Session, user_data: UserSave) -> User:
    """Save user by full overwrite"""
    try:
        db_user = User(**user_data.model_dump(exclude={"social_links"}))
        db_user.set_social_links(user_data.social_links or {})

        db_user = db.merge(db_user)
        db.commit()
        db.refresh(db_user)

        logger.info(f"Saved user: {user_data.user_id}")
        return db_user

    except Exception as e:
        logger.error(f"Error saving user: {e}")
        db.rollback()
        raise e

def delete_user(db: Session, user_id: str) -> bool:
    """Delete user (test cleanup only, not routed)"""
    deleted = db.query(User).filter(User.user_id == user_id).delete(synchronize_session=False)
    db.commit()
    logger.info(f"Deleted user {user_id}")
    return deleted > 0
