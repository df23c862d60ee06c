from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
import logging

from core.aggregates import collection_scan_and_view_totals
from core.auth import TokenVerifier, get_token_verifier, require_api_key
from core.collections import filter_collections
from core.errors import ValidationError, upstream_guard
from core.params import parse_query_params
from crud import collection as collection_crud
from crud.like import collection_likes
from db.session import get_db
from schemas.collection import CollectionQuery, CollectionSave
from schemas.common import AuthenticatedRequest, LikeRelation, TokenPayload
from utilities.response import success_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["collections"])

ALL_CATEGORIES = "all"

@router.get("/query_collections_all")
def query_collections_all(
    _: str = Depends(require_api_key),
    query_params: Optional[str] = Query(None, alias="QUERY_PARAMS"),
    db: Session = Depends(get_db)
):
    """Every collection, with display filtering"""
    query = parse_query_params(query_params, CollectionQuery) if query_params else CollectionQuery()
    with upstream_guard("getAllCollections"):
        collections = filter_collections(
            collection_crud.get_all_collections(db),
            is_created_by_unic=query.is_created_by_unic,
            filter_test_override=query.filter_test_override
        )
        return success_response([c.to_dict() for c in collections])

@router.get("/query_collections")
def query_collections(
    _: str = Depends(require_api_key),
    query_params: Optional[str] = Query(None, alias="QUERY_PARAMS"),
    db: Session = Depends(get_db)
):
    """Collections by category and/or creator address, with display filtering"""
    query = parse_query_params(query_params, CollectionQuery)
    if not query.category and not query.creator_address:
        raise ValidationError("either category or creatorAddress must be provided.")

    with upstream_guard("queryCollections"):
        if query.category == ALL_CATEGORIES:
            collections = collection_crud.get_all_collections(db)
        elif query.category:
            collections = collection_crud.get_collections_by_category(db, query.category)
        else:
            collections = collection_crud.get_collections_by_creator_address(db, query.creator_address)

        collections = filter_collections(
            collections,
            is_created_by_unic=query.is_created_by_unic,
            filter_test_override=query.filter_test_override,
            chain=query.chain,
            creator_address=query.creator_address
        )
        return success_response([c.to_dict() for c in collections])

@router.get("/query_collection/{collection_id}")
def query_collection(collection_id: str, db: Session = Depends(get_db)):
    """Most recent version of a collection"""
    with upstream_guard("queryCollection"):
        collection = collection_crud.get_most_recent_collection(db, collection_id)
        return success_response(collection.to_dict() if collection else {})

@router.get("/query_collection_by_address/{address}")
def query_collection_by_address(address: str, db: Session = Depends(get_db)):
    """Most recent version of the collection deployed at a contract address"""
    with upstream_guard("queryCollectionByAddress"):
        collection = collection_crud.get_collection_by_address(db, address)
        return success_response(collection.to_dict() if collection else {})

@router.get("/query_collection_scan_and_view_count/{collection_id}")
def query_collection_scan_and_view_count(collection_id: str, db: Session = Depends(get_db)):
    with upstream_guard("queryCollectionScanAndViewCount"):
        totals = collection_scan_and_view_totals(db, collection_id)
        return success_response(totals.model_dump(by_alias=True))

@router.post("/save_collection")
def create_collection(
    body: AuthenticatedRequest[CollectionSave],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Create a collection"""
    verifier.authorize(body)
    with upstream_guard("createCollection"):
        collection = collection_crud.create_collection(db, body.data)
        return success_response(collection.to_dict())

@router.put("/save_collection")
def update_collection(
    body: AuthenticatedRequest[CollectionSave],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Overwrite a collection"""
    verifier.authorize(body)
    with upstream_guard("updateCollection"):
        collection = collection_crud.update_collection(db, body.data)
        return success_response(collection.to_dict())

@router.post("/like_collection/{collection_id}/{user_id}")
def like_collection(
    collection_id: str,
    user_id: str,
    body: TokenPayload,
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    verifier.authorize(body)
    with upstream_guard("collectionLikeAction"):
        collection_likes.like(db, collection_id, user_id)
        return success_response()

@router.post("/unlike_collection/{collection_id}/{user_id}")
def unlike_collection(
    collection_id: str,
    user_id: str,
    body: TokenPayload,
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    verifier.authorize(body)
    with upstream_guard("collectionUnlikeAction"):
        collection_likes.unlike(db, collection_id, user_id)
        return success_response()

@router.get("/query_user_liked_collections/{user_id}")
def query_user_liked_collections(user_id: str, _: str = Depends(require_api_key), db: Session = Depends(get_db)):
    """Most recent version of every collection a user liked"""
    with upstream_guard("queryUserLikedCollections"):
        results = []
        for collection_id in collection_likes.list_liked_by_user(db, user_id):
            collection = collection_crud.get_most_recent_collection(db, collection_id)
            if collection is None:
                logger.debug(f"Liked collection {collection_id} no longer exists, skipping")
                continue
            results.append(collection.to_dict())
        return success_response(results)

@router.get("/query_collection_user_relation/{collection_id}/{user_id}")
def query_collection_user_relation(
    collection_id: str,
    user_id: str,
    _: str = Depends(require_api_key),
    db: Session = Depends(get_db)
):
    with upstream_guard("queryCollectionUserRelation"):
        relation = LikeRelation(is_liked=collection_likes.is_liked(db, collection_id, user_id))
        return success_response(relation.model_dump(by_alias=True))
