from sqlalchemy import Column, Integer, String, Text, Boolean, Float, Index
from db.base import Base, ProjectionMixin
from schemas.nft import NFTResponse

class NFT(ProjectionMixin, Base):
    __tablename__ = "nfts"
    __projection__ = NFTResponse
    __table_args__ = (
        Index("collectionAddress-tokenId-index", "collection_address", "token_id"),
    )

    nft_id = Column(String(255), primary_key=True)
    token_id = Column(Integer, nullable=False)
    dot_id = Column(String(255), nullable=True, index=True)
    description = Column(Text, nullable=True)
    name = Column(String(255), nullable=True)
    standard = Column(String(64), nullable=True)
    scan_count = Column(Integer, nullable=False, default=0)
    view_count = Column(Integer, nullable=False, default=0)
    supply = Column(Integer, nullable=True)
    collection_address = Column(String(255), nullable=True, index=True)
    collection_id = Column(String(255), nullable=True, index=True)
    marketplace_url = Column(Text, nullable=True)
    mint_price = Column(Float, nullable=True)
    creator_signature = Column(Text, nullable=True)
    amount = Column(Integer, nullable=True)
    image_url = Column(Text, nullable=True)
    owner_address = Column(String(255), nullable=True)
    creator_address = Column(String(255), nullable=True)
    is_minted = Column(Boolean, nullable=False, default=False)  # recorded, never submitted on-chain
