from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from config.settings import Settings, get_settings
from core.auth import TokenVerifier, get_token_verifier, require_api_key
from core.dependencies import get_blob_storage, get_pinning_client
from core.errors import upstream_guard
from core.nft import create_assets_and_save_nfts as save_assets_and_nfts
from core.params import parse_query_params
from crud import nft as nft_crud
from crud.like import nft_likes
from db.session import get_db
from schemas.common import AuthenticatedRequest, LikeRelation, TokenPayload
from schemas.nft import AssetsAndNFTList, NFTCreate, NFTIdentifier, NFTPatch
from utilities.ipfs import PinningClient
from utilities.response import success_response
from utilities.supabase_client import BlobStorage

logger = logging.getLogger(__name__)
router = APIRouter(tags=["nfts"])

@router.get("/query_nft/{nft_id}")
def query_nft(nft_id: str, db: Session = Depends(get_db)):
    """Get NFT by ID"""
    with upstream_guard("queryNFT"):
        nft = nft_crud.get_nft(db, nft_id)
        return success_response(nft.to_dict() if nft else {})

@router.get("/query_nft_by_dot_id/{dot_id}")
def query_nft_by_dot_id(dot_id: str, db: Session = Depends(get_db)):
    """Get NFT by dot ID"""
    with upstream_guard("queryNFTbyDotId"):
        nft = nft_crud.get_nft_by_dot_id(db, dot_id)
        return success_response(nft.to_dict() if nft else {})

@router.get("/query_nfts_by_collection_id/{collection_id}")
def query_nfts_by_collection_id(collection_id: str, db: Session = Depends(get_db)):
    with upstream_guard("queryNFTsbyCollectionId"):
        nfts = nft_crud.get_nfts_by_collection_id(db, collection_id)
        return success_response([nft.to_dict() for nft in nfts])

@router.get("/query_nfts_by_collection_address/{collection_address}")
def query_nfts_by_collection_address(collection_address: str, db: Session = Depends(get_db)):
    with upstream_guard("queryNFTsbyCollectionAddress"):
        nfts = nft_crud.get_nfts_by_collection_address(db, collection_address)
        return success_response([nft.to_dict() for nft in nfts])

@router.get("/query_nfts_by_collection_addresses_and_token_ids")
def query_nfts_by_collection_addresses_and_token_ids(
    _: str = Depends(require_api_key),
    query_params: Optional[str] = Query(None, alias="QUERY_PARAMS"),
    db: Session = Depends(get_db)
):
    """NFTs for (collectionAddress, tokenId) pairs, in request order; misses are {}"""
    identifiers = parse_query_params(query_params, List[NFTIdentifier])
    with upstream_guard("queryNFTSByCollectionAddressesAndTokenIds"):
        results = []
        for identifier in identifiers:
            nft = nft_crud.get_nft_by_collection_address_and_token_id(
                db, identifier.collection_address, identifier.token_id
            )
            results.append(nft.to_dict() if nft else {})
        return success_response(results)

@router.post("/save_nft")
def save_nft(
    body: AuthenticatedRequest[NFTCreate],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Create an NFT"""
    verifier.authorize(body)
    with upstream_guard("createNFT"):
        nft = nft_crud.create_nft(db, body.data)
        return success_response(nft.to_dict())

@router.put("/update_nft/{nft_id}")
def update_nft(
    nft_id: str,
    body: AuthenticatedRequest[NFTPatch],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Partially update an NFT"""
    verifier.authorize(body)
    with upstream_guard("updateNFT"):
        nft_crud.update_nft(db, nft_id, body.data)
        return success_response()

@router.post("/increment_nft_scan_count/{nft_id}")
def increment_nft_scan_count(
    nft_id: str,
    body: TokenPayload,
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    verifier.authorize(body)
    with upstream_guard("incrementNFTScanCount"):
        nft_crud.increment_scan_count(db, nft_id)
        return success_response()

@router.post("/increment_nft_view_count/{nft_id}")
def increment_nft_view_count(
    nft_id: str,
    body: TokenPayload,
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    verifier.authorize(body)
    with upstream_guard("incrementNFTViewCount"):
        nft_crud.increment_view_count(db, nft_id)
        return success_response()

@router.post("/create_assets_and_save_nfts")
def create_assets_and_save_nfts(
    body: AuthenticatedRequest[AssetsAndNFTList],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    storage: BlobStorage = Depends(get_blob_storage),
    pinning: PinningClient = Depends(get_pinning_client),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Save NFTs with their metadata and assets"""
    verifier.authorize(body)
    save_assets_and_nfts(db, storage, pinning, settings, body.data)
    return success_response(message="Successfully generated assets and NFTs.")

@router.post("/like_nft/{nft_id}/{user_id}")
def like_nft(
    nft_id: str,
    user_id: str,
    body: TokenPayload,
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    verifier.authorize(body)
    with upstream_guard("NFTLikeAction"):
        nft_likes.like(db, nft_id, user_id)
        return success_response()

@router.post("/unlike_nft/{nft_id}/{user_id}")
def unlike_nft(
    nft_id: str,
    user_id: str,
    body: TokenPayload,
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    verifier.authorize(body)
    with upstream_guard("NFTUnlikeAction"):
        nft_likes.unlike(db, nft_id, user_id)
        return success_response()

@router.get("/query_user_liked_nfts/{user_id}")
def query_user_liked_nfts(user_id: str, _: str = Depends(require_api_key), db: Session = Depends(get_db)):
    """Every existing NFT a user liked"""
    with upstream_guard("queryUserLikedNFTs"):
        results = []
        for nft_id in nft_likes.list_liked_by_user(db, user_id):
            nft = nft_crud.get_nft(db, nft_id)
            if nft is None:
                logger.debug(f"Liked NFT {nft_id} no longer exists, skipping")
                continue
            results.append(nft.to_dict())
        return success_response(results)

@router.get("/query_nft_user_relation/{nft_id}/{user_id}")
def query_nft_user_relation(
    nft_id: str,
    user_id: str,
    _: str = Depends(require_api_key),
    db: Session = Depends(get_db)
):
    with upstream_guard("queryNFTUserRelation"):
        relation = LikeRelation(is_liked=nft_likes.is_liked(db, nft_id, user_id))
        return success_response(relation.model_dump(by_alias=True))
