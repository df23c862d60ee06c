from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from core.auth import require_api_key
from core.errors import upstream_guard
from crud import content as content_crud
from db.session import get_db
from schemas.common import AuthenticatedRequest
from schemas.content import ContentCreate
from utilities.response import success_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["contents"])

@router.get("/query_contents/{category}")
def query_contents(category: str, db: Session = Depends(get_db)):
    """Get contents in a category"""
    with upstream_guard("queryContents"):
        contents = content_crud.get_contents_by_category(db, category)
        return success_response([content.to_dict() for content in contents])

@router.post("/add_content")
def add_content(
    body: AuthenticatedRequest[ContentCreate],
    _: str = Depends(require_api_key),
    db: Session = Depends(get_db)
):
    """Add content under its deterministic hash id"""
    with upstream_guard("addContent"):
        content = content_crud.create_content(db, body.data)
        return success_response(content.to_dict())

@router.delete("/delete_content/{hash_id}")
def delete_content(hash_id: str, _: str = Depends(require_api_key), db: Session = Depends(get_db)):
    """Delete content by hash id"""
    with upstream_guard("deleteContent"):
        content_crud.delete_content(db, hash_id)
        return success_response()
