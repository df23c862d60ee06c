import logging
from typing import Any, Optional

import httpx

from core.errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

def base_fetch_get(endpoint: str, timeout: float = 30.0, transport: Optional[httpx.BaseTransport] = None) -> Any:
    """GET an external JSON document (e.g. token image metadata)"""
    with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
        try:
            response = client.get(endpoint)
        except httpx.InvalidURL as e:
            raise ValidationError(f"ENDPOINT is not a valid URL: {endpoint}") from e
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Non-JSON response from {endpoint}")
            raise UpstreamError("fetchExternalImageMetadata", "response is not JSON") from e

    logger.debug(f"base_fetch_get to {endpoint} complete.")
    return data
