from fastapi import APIRouter, Depends, Query
import logging

from config.settings import Settings, get_settings
from core.errors import ValidationError, upstream_guard
from utilities.external import base_fetch_get
from utilities.response import success_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["external"])

@router.get("/fetch_external_img_metadata")
def fetch_external_img_metadata(
    endpoint: str = Query("", alias="ENDPOINT"),
    settings: Settings = Depends(get_settings)
):
    """Pass through a token's external JSON metadata"""
    if not endpoint:
        raise ValidationError("ENDPOINT must be provided.")
    with upstream_guard("fetchExternalImageMetadata"):
        return success_response(base_fetch_get(endpoint, timeout=settings.HTTP_TIMEOUT))
