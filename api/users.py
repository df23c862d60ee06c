from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from core.auth import TokenVerifier, get_token_verifier, require_api_key
from core.errors import upstream_guard
from crud import user as user_crud
from db.session import get_db
from schemas.common import AuthenticatedRequest
from schemas.user import UserSave
from utilities.response import success_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])

@router.get("/query_user/{user_id}")
def query_user(user_id: str, db: Session = Depends(get_db)):
    """Get user by ID"""
    with upstream_guard("queryUser"):
        user = user_crud.get_user(db, user_id)
        return success_response(user.to_dict() if user else {})

@router.get("/query_user_by_tag/{user_tag}")
def query_user_by_tag(user_tag: str, db: Session = Depends(get_db)):
    """Get user by tag"""
    with upstream_guard("queryUserByTag"):
        user = user_crud.get_user_by_tag(db, user_tag)
        return success_response(user.to_dict() if user else {})

@router.api_route("/save_user", methods=["POST", "PUT"])
def save_user(
    body: AuthenticatedRequest[UserSave],
    _: str = Depends(require_api_key),
    verifier: TokenVerifier = Depends(get_token_verifier),
    db: Session = Depends(get_db)
):
    """Save user by full overwrite; the token must belong to the saved user"""
    verifier.authorize(body, body.data.user_id)
    with upstream_guard("saveUser"):
        user = user_crud.save_user(db, body.data)
        return success_response(user.to_dict())
