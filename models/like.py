from sqlalchemy import Column, String
from db.base import Base

# Existence-only join records: presence of the row is the signal

class UserLikedNFT(Base):
    __tablename__ = "user_liked_nfts"

    nft_id = Column(String(255), primary_key=True)
    user_id = Column(String(255), primary_key=True, index=True)

class UserLikedCollection(Base):
    __tablename__ = "user_liked_collections"

    collection_id = Column(String(255), primary_key=True)
    user_id = Column(String(255), primary_key=True, index=True)
