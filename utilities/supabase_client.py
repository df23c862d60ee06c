import json
import logging
import mimetypes
from functools import lru_cache
from typing import Optional, Tuple
from urllib.parse import unquote, urlparse

from supabase import create_client, Client

from core.errors import UpstreamError

logger = logging.getLogger(__name__)

STORAGE_PATH_PREFIX = "/storage/v1/object/"
# Access modes that may sit between the prefix and the bucket name
STORAGE_ACCESS_MODES = {"public", "sign", "authenticated"}

@lru_cache(maxsize=4)
def get_supabase(url: str, key: str) -> Optional[Client]:
    """Return a cached Supabase client if configured, else None."""
    if not url or not key:
        return None
    try:
        return create_client(url, key)
    except Exception as e:
        logger.warning(f"Failed to initialize Supabase client: {e}")
        return None

def parse_storage_url(url: str) -> Tuple[str, str]:
    """Split an object URL into (bucket, key).

    Understands Supabase Storage object URLs
    (``/storage/v1/object/[public|sign|authenticated/]<bucket>/<key>``) and
    S3-style virtual-hosted URLs (``<bucket>.s3.<region>.amazonaws.com/<key>``).
    Returns empty strings when the URL does not identify an object.
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return "", ""
    if not parsed.scheme or not parsed.netloc:
        return "", ""

    path = unquote(parsed.path)
    if path.startswith(STORAGE_PATH_PREFIX):
        parts = path[len(STORAGE_PATH_PREFIX):].split("/")
        if parts and parts[0] in STORAGE_ACCESS_MODES:
            parts = parts[1:]
        if len(parts) < 2:
            return "", ""
        return parts[0], "/".join(parts[1:])

    host = parsed.hostname or ""
    if ".s3." in host or host.endswith(".s3.amazonaws.com"):
        bucket = host.split(".s3", 1)[0]
        return bucket, path.lstrip("/")

    return "", ""

class BlobStorage:
    """Thin wrapper over Supabase Storage buckets"""

    def __init__(self, client: Optional[Client]):
        self.client = client

    def _bucket(self, bucket: str):
        if self.client is None:
            raise UpstreamError(message="blob storage is not configured")
        return self.client.storage.from_(bucket)

    def get_object(self, bucket: str, key: str) -> Tuple[bytes, str]:
        """Download an object; returns its bytes and content type"""
        storage = self._bucket(bucket)
        try:
            body = storage.download(key)
        except Exception as e:
            logger.error(f"Blob download failed for {bucket}/{key}: {e}", exc_info=True)
            raise UpstreamError() from e

        content_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
        logger.debug(f"get_object complete: {bucket}/{key} ({content_type})")
        return body, content_type

    def upload_json(self, bucket: str, key: str, payload: dict) -> None:
        storage = self._bucket(bucket)
        try:
            storage.upload(
                key,
                json.dumps(payload).encode("utf-8"),
                file_options={"content-type": "application/json", "upsert": "true"},
            )
        except Exception as e:
            logger.error(f"upload_json failed for: {bucket}/{key}", exc_info=True)
            raise UpstreamError() from e
        logger.debug(f"upload_json complete: {bucket}/{key}")

    def create_signed_upload_url(self, bucket: str, key: str) -> str:
        storage = self._bucket(bucket)
        try:
            result = storage.create_signed_upload_url(key)
        except Exception as e:
            logger.error(f"create_signed_upload_url failed for: {bucket}/{key}", exc_info=True)
            raise UpstreamError() from e
        logger.debug(f"create_signed_upload_url complete: {bucket}/{key}")
        return result.get("signed_url") or result.get("signedUrl")
