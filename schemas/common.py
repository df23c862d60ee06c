from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

class CamelModel(BaseModel):
    """Wire models use camelCase keys, Python code uses snake_case"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

class TokenPayload(CamelModel):
    """Credentials every authenticated request body carries"""
    access_token: Optional[str] = None
    user_id: Optional[str] = None
    device: Optional[Any] = None

class AuthenticatedRequest(TokenPayload, Generic[DataT]):
    data: DataT

class LikeRelation(CamelModel):
    is_liked: bool = False
