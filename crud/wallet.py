from sqlalchemy.orm import Session
from typing import Optional, List
import logging

from models.wallet import Wallet
from schemas.wallet import WalletSave
from utilities.timestamps import now_millis

logger = logging.getLogger(__name__)

def get_wallet(db: Session, address: str, chain: str) -> Optional[Wallet]:
    """Get wallet by address and chain"""
    return db.get(Wallet, (address, chain))

def get_wallets_by_user_id_and_chain(db: Session, user_id: str, chain: str) -> List[Wallet]:
    """Get a user's wallets on a chain, oldest connection first"""
    return (
        db.query(Wallet)
        .filter(Wallet.user_id == user_id, Wallet.chain == chain)
        .order_by(Wallet.connected_time.asc())
        .all()
    )

def save_wallet(db: Session, wallet_data: WalletSave) -> Wallet:
    """Save wallet, stamping the connection time"""
    try:
        db_wallet = db.merge(Wallet(**wallet_data.model_dump(), connected_time=now_millis()))
        db.commit()
        db.refresh(db_wallet)

        logger.info(f"Saved wallet: {wallet_data.address} ({wallet_data.chain})")
        return db_wallet

    except Exception as e:
        logger.error(f"Error saving wallet: {e}")
        db.rollback()
        raise e
