from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from core.auth import TokenVerifier, get_token_verifier, require_api_key
from core.errors import ValidationError, upstream_guard
from crud import user as user_crud
from crud import wallet as wallet_crud
from db.session import get_db
from schemas.common import AuthenticatedRequest
from schemas.wallet import WalletSave
from utilities.response import success_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["wallets"])

@router.get("/query_wallet/{address}/{chain}")
def query_wallet(address: str, chain: str, db: Session = Depends(get_db)):
    """Get wallet by address and chain"""
    with upstream_guard("queryWallet"):
        wallet = wallet_crud.get_wallet(db, address, chain)
        return success_response(wallet.to_dict() if wallet else {})

@router.get("/query_wallets_by_user_id_and_chain/{user_id}/{chain}")
def query_wallets_by_user_id_and_chain(user_id: str, chain: str, db: Session = Depends(get_db)):
    """Get a user's wallets on a chain, oldest connection first"""
    with upstream_guard("queryWalletByUserIdAndChain"):
        wallets = wallet_crud.get_wallets_by_user_id_and_chain(db, user_id, chain)
        return success_response([wallet.to_dict() for wallet in wallets])

@router.get("/query_user_by_wallet_address/{address}/{chain}")
def query_user_by_wallet_address(address: str, chain: str, db: Session = Depends(get_db)):
    """Get the user owning a wallet"""
    with upstream_guard("queryUserByWallet"):
        wallet = wallet_crud.get_wallet(db, address, chain)
        if wallet is None or not wallet.user_id:
            raise ValidationError("given wallet does not exist or userId does not exist in wallet data.")

        user = user_crud.get_user(db, wallet.user_id)
        return success_response(user.to_dict() if user else {})

@router.api_route("/save_wallet", methods=["POST", "PUT"])
def save_wallet(
    body: AuthenticatedRequest[WalletSave],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Save wallet, stamping the connection time"""
    verifier.authorize(body)
    with upstream_guard("saveWallet"):
        wallet = wallet_crud.save_wallet(db, body.data)
        return success_response(wallet.to_dict())
