import json
from typing import Dict

from sqlalchemy import Column, String, Text, JSON
from db.base import Base, ProjectionMixin
from schemas.user import UserResponse

class User(ProjectionMixin, Base):
    __tablename__ = "users"
    __projection__ = UserResponse

    user_id = Column(String(255), primary_key=True)
    # Expected to be unique, not enforced by a constraint
    user_tag = Column(String(255), nullable=True, index=True)
    description = Column(Text, nullable=True)
    profile_photo = Column(Text, nullable=True)
    cover_photo = Column(Text, nullable=True)
    public_key = Column(String(255), nullable=True)
    bookmarks = Column(JSON, nullable=True)
    followers = Column(JSON, nullable=True)
    following = Column(JSON, nullable=True)
    social_links = Column(Text, nullable=True)  # JSON-encoded provider -> URL mapping

    def set_social_links(self, social_links: Dict[str, str]) -> None:
        self.social_links = json.dumps(social_links)
