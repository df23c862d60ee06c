from sqlalchemy import Column, String, BigInteger, Index
from db.base import Base, ProjectionMixin
from schemas.wallet import WalletResponse

class Wallet(ProjectionMixin, Base):
    __tablename__ = "wallets"
    __projection__ = WalletResponse
    __table_args__ = (
        Index("userId-chain-index", "user_id", "chain"),
    )

    address = Column(String(255), primary_key=True)
    chain = Column(String(64), primary_key=True)
    user_id = Column(String(255), nullable=True)  # owner, existence not enforced
    connected_time = Column(BigInteger, nullable=True)  # ms since epoch, set on save
