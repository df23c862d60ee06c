from typing import Optional

from schemas.common import CamelModel

class ContentCreate(CamelModel):
    title: str
    image_url: str
    creator_address: str
    number: Optional[int] = None
    description: Optional[str] = None
    category: Optional[str] = None
    asset_contract_address: Optional[str] = None
    owner_address: Optional[str] = None
    owner: Optional[str] = None
    creator: Optional[str] = None
    likes: Optional[int] = None
    price: Optional[float] = None

class ContentResponse(ContentCreate):
    hash_id: str
    date_time: Optional[str] = None
