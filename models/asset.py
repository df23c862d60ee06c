from sqlalchemy import Column, Integer, String, Text, Boolean
from db.base import Base, ProjectionMixin
from schemas.asset import AssetResponse

class Asset(ProjectionMixin, Base):
    __tablename__ = "assets"
    __projection__ = AssetResponse

    asset_id = Column(String(255), primary_key=True)
    nft_id = Column(String(255), nullable=True, index=True)
    asset_type = Column(String(64), nullable=True)
    asset_url = Column(Text, nullable=True)
    creator_address = Column(String(255), nullable=True)
    creator_id = Column(String(255), nullable=True)
    visibility = Column(Boolean, nullable=True)
    processed = Column(Integer, nullable=True)
    ipfs_hash = Column(String(255), nullable=False, default="")
    ipfs_url = Column(Text, nullable=False, default="")
