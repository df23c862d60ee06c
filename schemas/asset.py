from typing import List, Optional
from pydantic import Field

from schemas.common import CamelModel

class AssetInfo(CamelModel):
    asset_id: str
    asset_type: str = Field(min_length=1)
    asset_url: Optional[str] = Field(default="", alias="assetURL")
    visibility: Optional[bool] = None
    processed: Optional[int] = None

class AssetsCreate(CamelModel):
    nft_id: str = Field(min_length=1)
    asset_creator_address: str = Field(min_length=1)
    asset_creator_id: str = Field(min_length=1)
    assets: List[AssetInfo] = Field(min_length=1)

class AssetPatch(CamelModel):
    visibility: Optional[bool] = None

class AssetResponse(CamelModel):
    asset_id: str
    nft_id: Optional[str] = None
    creator_id: Optional[str] = None
    creator_address: Optional[str] = None
    asset_type: Optional[str] = None
    asset_url: Optional[str] = Field(default=None, alias="assetURL")
    visibility: Optional[bool] = None
    processed: Optional[int] = None
    ipfs_hash: Optional[str] = None
    ipfs_url: Optional[str] = Field(default=None, alias="ipfsURL")

class PresignedAsset(CamelModel):
    asset_type: str
    asset_id: str
    file_type: str

class PresignedURLRequest(CamelModel):
    user_id: str = Field(min_length=1)
    assets: List[PresignedAsset] = Field(min_length=1)
