import logging
from typing import Any, Dict, Optional

import httpx

from config.settings import Settings
from core.errors import UpstreamError

logger = logging.getLogger(__name__)

class PinningClient:
    """Pinata client for content-addressed (IPFS) uploads"""

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.settings.PINATA_BASE_URL,
            timeout=self.settings.HTTP_TIMEOUT,
            transport=self.transport,
        )

    def _pin_result(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            result = response.json()
        except ValueError:
            result = None
        if not isinstance(result, dict) or not result.get("IpfsHash"):
            logger.error(f"Pinata answered {response.request.url.path} without an IpfsHash: {response.text[:200]}")
            raise UpstreamError(message="pinning response has no IpfsHash")
        return result

    def pin_file_to_ipfs(self, data: bytes, filename: str, content_type: str) -> Dict[str, Any]:
        """Pin raw bytes; the response carries ``IpfsHash``"""
        headers = {
            "pinata_api_key": self.settings.PINATA_API_KEY,
            "pinata_secret_api_key": self.settings.PINATA_API_SECRET,
        }
        with self._client() as client:
            response = client.post(
                "/pinning/pinFileToIPFS",
                files={"file": (filename, data, content_type)},
                headers=headers,
            )
            response.raise_for_status()
            result = self._pin_result(response)

        logger.debug(f"pin_file_to_ipfs through Pinata complete: {result['IpfsHash']}")
        return result

    def pin_json_to_ipfs(self, data: Dict[str, Any]) -> Dict[str, Any]:
        headers = {"Authorization": f"Bearer {self.settings.PINATA_JWT}"}
        with self._client() as client:
            response = client.post("/pinning/pinJSONToIPFS", json=data, headers=headers)
            response.raise_for_status()
            result = self._pin_result(response)

        logger.debug(f"pin_json_to_ipfs through Pinata complete: {result['IpfsHash']}")
        return result

    def gateway_url(self, ipfs_hash: str) -> str:
        return f"{self.settings.IPFS_GATEWAY_URL.rstrip('/')}/{ipfs_hash}"
