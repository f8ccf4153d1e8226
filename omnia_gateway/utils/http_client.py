"""
Shared HTTP client with connection pooling for the raw-HTTP vendors
"""

import time
from typing import Any, Optional

import httpx
import structlog

from ..config import settings
from ..errors import VendorError
from ..middleware.metrics import record_vendor_call

logger = structlog.get_logger(__name__)


class HTTPClientPool:
    """Singleton HTTP client with connection pooling"""

    _instance = None
    _client = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    async def initialize(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the HTTP client"""
        if self._client is None:
            limits = httpx.Limits(
                max_keepalive_connections=50,
                max_connections=100,
                keepalive_expiry=30.0
            )

            # Long reads: STT uploads and TTS streams can take a while
            timeout = httpx.Timeout(
                connect=settings.http_connect_timeout,
                read=settings.http_read_timeout,
                write=settings.http_read_timeout,
                pool=5.0
            )

            self._client = httpx.AsyncClient(
                limits=limits,
                timeout=timeout,
                http2=transport is None,
                transport=transport,
                follow_redirects=True
            )

            logger.info("HTTP client pool initialized",
                        max_connections=100,
                        read_timeout=settings.http_read_timeout)

    async def get_client(self) -> httpx.AsyncClient:
        """Get the shared HTTP client"""
        if self._client is None:
            await self.initialize()
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("HTTP client pool closed")


# Global instance
http_pool = HTTPClientPool()


async def vendor_request(
    client: httpx.AsyncClient,
    vendor: str,
    method: str,
    url: str,
    stream: bool = False,
    **kwargs: Any
) -> httpx.Response:
    """Send a request to a vendor and raise VendorError on failure.

    With ``stream=True`` the response body is left unread and the caller owns
    closing it. Error bodies are always read and the response closed before
    raising.
    """
    start = time.time()
    request = client.build_request(method, url, **kwargs)

    try:
        response = await client.send(request, stream=stream)
    except httpx.TimeoutException as e:
        record_vendor_call(vendor, "timeout", time.time() - start)
        logger.error("Vendor request timed out", vendor=vendor, url=url, error=str(e))
        raise VendorError(vendor, 504, f"Timeout: {e}") from e
    except httpx.HTTPError as e:
        record_vendor_call(vendor, "transport_error", time.time() - start)
        logger.error("Vendor request failed", vendor=vendor, url=url, error=str(e))
        raise VendorError(vendor, 502, str(e)) from e

    if response.is_success:
        record_vendor_call(vendor, "success", time.time() - start)
        return response

    if stream:
        await response.aread()
        await response.aclose()
    details = response.text
    record_vendor_call(vendor, "error", time.time() - start)
    logger.error("Vendor returned error",
                 vendor=vendor,
                 status_code=response.status_code,
                 details=details[:200])
    raise VendorError(vendor, response.status_code, details)
