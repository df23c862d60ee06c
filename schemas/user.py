import json
from typing import Dict, List, Optional
from pydantic import field_validator

from schemas.common import CamelModel

class UserBase(CamelModel):
    user_id: str
    user_tag: Optional[str] = None
    description: Optional[str] = None
    profile_photo: Optional[str] = None
    cover_photo: Optional[str] = None
    public_key: Optional[str] = None
    bookmarks: Optional[List[str]] = None
    followers: Optional[List[str]] = None
    following: Optional[List[str]] = None

class UserSave(UserBase):
    user_tag: str
    social_links: Optional[Dict[str, str]] = None

class UserResponse(UserBase):
    social_links: Dict[str, str] = {}

    @field_validator("social_links", mode="before")
    @classmethod
    def decode_social_links(cls, value):
        # Persisted as encoded JSON text
        if not value:
            return {}
        if isinstance(value, str):
            return json.loads(value)
        return value
