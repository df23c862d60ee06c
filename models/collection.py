from sqlalchemy import Column, Integer, String, Text, Boolean, BigInteger, Float, JSON
from db.base import Base, ProjectionMixin
from schemas.collection import CollectionResponse

class Collection(ProjectionMixin, Base):
    __tablename__ = "collections"
    __projection__ = CollectionResponse

    collection_id = Column(String(255), primary_key=True)
    version = Column(Integer, primary_key=True, autoincrement=False)
    address = Column(String(255), nullable=True, index=True)  # contract address
    creator_address = Column(String(255), nullable=True, index=True)
    name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    cover_photo = Column(Text, nullable=True)
    main_photo = Column(Text, nullable=True)
    chain = Column(String(64), nullable=True)
    standard = Column(String(64), nullable=True)
    is_listed = Column(Boolean, nullable=True)
    status = Column(String(64), nullable=True)
    links = Column(JSON, nullable=True)
    created_at = Column(BigInteger, nullable=True)  # ms since epoch
    updated_at = Column(BigInteger, nullable=True)
    is_latest = Column(Boolean, nullable=True)
    is_created_by_unic = Column(Boolean, nullable=True)
    shipping_required = Column(Boolean, nullable=True)
    owner_signature_mint_allowed = Column(Boolean, nullable=True)
    mint_price = Column(Float, nullable=True)
