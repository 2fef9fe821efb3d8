"""Pooled HTTP client shared by the external lookup clients."""
import httpx
import logging
from typing import Optional

from ..core.config import get_settings

logger = logging.getLogger(__name__)

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client() -> httpx.AsyncClient:
    """
    Get or create the process-wide async HTTP client.

    Address search fires a request per settled query, so lookups reuse
    keep-alive connections to the geocoder instead of reconnecting each time.
    The client carries the configured User-Agent, which Nominatim requires.

    Returns:
        Shared AsyncClient instance
    """
    global _shared_client

    if _shared_client is None or _shared_client.is_closed:
        settings = get_settings()
        _shared_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.geocoder_timeout),
            headers={"User-Agent": settings.geocoder_user_agent},
            limits=httpx.Limits(
                max_keepalive_connections=4,
                max_connections=8,
                keepalive_expiry=60.0,
            ),
            http2=True,
        )
        logger.info("Created shared HTTP client for geocoding")

    return _shared_client


async def close_shared_http_client() -> None:
    """Close the shared client; the next lookup creates a fresh one"""
    global _shared_client

    if _shared_client is None:
        return
    await _shared_client.aclose()
    _shared_client = None
    logger.info("Closed shared HTTP client")
