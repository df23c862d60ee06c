from sqlalchemy import Column, Integer, String, Text, Float
from db.base import Base, ProjectionMixin
from schemas.content import ContentResponse

class Content(ProjectionMixin, Base):
    __tablename__ = "contents"
    __projection__ = ContentResponse

    hash_id = Column(String(64), primary_key=True)  # sha256(title + number + creator)
    title = Column(String(255), nullable=False)
    number = Column(Integer, nullable=True)
    image_url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True, index=True)
    asset_contract_address = Column(String(255), nullable=True)
    owner_address = Column(String(255), nullable=True)
    owner = Column(String(255), nullable=True)
    creator_address = Column(String(255), nullable=False)
    creator = Column(String(255), nullable=True)
    likes = Column(Integer, nullable=True)
    price = Column(Float, nullable=True)
    date_time = Column(String(64), nullable=True)
