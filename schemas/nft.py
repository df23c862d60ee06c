from typing import Annotated, Any, List, Optional
from pydantic import Field, field_validator

from schemas.common import CamelModel
from schemas.asset import AssetInfo

class NFTBase(CamelModel):
    nft_id: str
    token_id: int
    dot_id: Optional[str] = None
    description: Optional[str] = None
    name: Optional[str] = None
    standard: Optional[str] = None
    supply: Optional[int] = None
    collection_address: Optional[str] = None
    collection_id: Optional[str] = None
    marketplace_url: Optional[str] = Field(default=None, alias="marketplaceURL")
    mint_price: Optional[float] = None
    creator_signature: Optional[str] = None
    amount: Optional[int] = None
    image_url: Optional[str] = Field(default=None, alias="imageURL")
    owner_address: Optional[str] = None
    creator_address: Optional[str] = None

class NFTCreate(NFTBase):
    # Counters are not accepted from clients; they start at 0
    is_minted: bool = False

class NFTPatch(CamelModel):
    """Fields a partial NFT update may touch. Unknown keys are ignored."""
    description: Optional[str] = None
    name: Optional[str] = None
    marketplace_url: Optional[str] = Field(default=None, alias="marketplaceURL")
    is_minted: Optional[bool] = None

    @field_validator("is_minted")
    @classmethod
    def reject_null_is_minted(cls, value):
        # Omit the key to leave it unchanged; the column is NOT NULL
        if value is None:
            raise ValueError("isMinted cannot be null")
        return value

class NFTResponse(NFTBase):
    scan_count: Optional[int] = None
    view_count: Optional[int] = None
    is_minted: Optional[bool] = None

class NFTIdentifier(CamelModel):
    collection_address: str
    token_id: int

class AssetsAndNFT(CamelModel):
    nft_data: NFTCreate
    assets: List[AssetInfo] = []
    traits: Optional[Any] = None
    asset_creator_address: Optional[str] = None
    asset_creator_id: Optional[str] = None
    skip_metadata_upload: bool = False

# Body of create_assets_and_save_nfts: at least one item
AssetsAndNFTList = Annotated[List[AssetsAndNFT], Field(min_length=1)]
