from models.user import User
from models.wallet import Wallet
from models.collection import Collection
from models.nft import NFT
from models.asset import Asset
from models.content import Content
from models.like import UserLikedNFT, UserLikedCollection

__all__ = [
    "User",
    "Wallet",
    "Collection",
    "NFT",
    "Asset",
    "Content",
    "UserLikedNFT",
    "UserLikedCollection",
]
