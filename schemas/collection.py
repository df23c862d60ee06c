from typing import List, Optional

from schemas.common import CamelModel

class CollectionBase(CamelModel):
    collection_id: str
    address: Optional[str] = None
    creator_address: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    cover_photo: Optional[str] = None
    main_photo: Optional[str] = None
    chain: Optional[str] = None
    standard: Optional[str] = None
    is_listed: Optional[bool] = None
    status: Optional[str] = None
    links: Optional[List[str]] = None
    created_at: Optional[int] = None
    is_created_by_unic: Optional[bool] = None
    shipping_required: Optional[bool] = None
    owner_signature_mint_allowed: Optional[bool] = None
    mint_price: Optional[float] = None

class CollectionSave(CollectionBase):
    """Full collection payload; version and timestamps are assigned server-side"""
    pass

class CollectionResponse(CollectionBase):
    version: Optional[int] = None
    updated_at: Optional[int] = None
    is_latest: Optional[bool] = None

class CollectionQuery(CamelModel):
    """Decoded QUERY_PARAMS of the collection listing endpoints"""
    category: Optional[str] = None
    creator_address: Optional[str] = None
    chain: Optional[str] = None
    is_created_by_unic: bool = False
    filter_test_override: bool = False

class ScanAndViewTotals(CamelModel):
    total_scan_count: int = 0
    total_view_count: int = 0
