# Standard library imports
import logging
from typing import Any, Dict, List, Optional

# External package imports
import httpx

# Local application imports
from ...core.config import get_settings
from ...domain.exceptions import GeocodingError
from ...domain.interfaces.geocoder import GeocodeCandidate, Geocoder
from ..http_client_factory import get_shared_http_client

logger = logging.getLogger(__name__)


class NominatimGeocoder(Geocoder):
    """
    HTTP client for the Nominatim (OpenStreetMap) search API.

    Queries are scoped to the working region by a bounding box and by
    appending free-text region qualifiers; every request carries the
    client identifier header Nominatim requires.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        viewbox: Optional[str] = None,
        region: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize Nominatim client.

        Args:
            base_url: Provider base URL. If None, reads from settings.
            user_agent: Client identifier header value. If None, reads from settings.
            viewbox: `west,south,east,north` box. If None, reads from settings.
            region: Region qualifiers appended to each query. If None, reads from settings.
            timeout: Request timeout in seconds. If None, reads from settings.
            client: HTTP client to use. Defaults to the shared pooled client.
        """
        settings = get_settings()
        self.base_url = (base_url or settings.geocoder_url).rstrip("/")
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.viewbox = viewbox if viewbox is not None else settings.geocoder_viewbox
        self.region = region if region is not None else settings.geocoder_region
        self.timeout = timeout if timeout is not None else settings.geocoder_timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client if self._client is not None else get_shared_http_client()

    def _build_params(self, query: str, limit: int) -> Dict[str, Any]:
        q = f"{query},{self.region}" if self.region else query
        params: Dict[str, Any] = {
            "q": q,
            "format": "json",
            "limit": limit,
            "addressdetails": 1,
        }
        if self.viewbox:
            params["viewbox"] = self.viewbox
        return params

    async def search(self, query: str, limit: int) -> List[GeocodeCandidate]:
        """
        Search for address candidates.

        Args:
            query: Free-text query (street name, place)
            limit: Maximum number of candidates to return

        Returns:
            Candidates in provider ranking order, at most `limit`

        Raises:
            GeocodingError: On timeout, HTTP error or malformed payload
        """
        try:
            response = await self.client.get(
                f"{self.base_url}/search",
                params=self._build_params(query, limit),
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException as e:
            raise GeocodingError(f"Timeout while searching '{query}'") from e
        except httpx.HTTPStatusError as e:
            raise GeocodingError(
                f"HTTP error searching '{query}': {e.response.status_code} - {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise GeocodingError(f"Network error searching '{query}': {e}") from e
        except ValueError as e:
            raise GeocodingError(f"Invalid JSON from geocoder for '{query}': {e}") from e

        if not isinstance(payload, list):
            raise GeocodingError(f"Unexpected geocoder payload for '{query}': {type(payload).__name__}")

        candidates = []
        for item in payload:
            candidate = self._parse_candidate(item)
            if candidate is not None:
                candidates.append(candidate)
        return candidates[:limit]

    def _parse_candidate(self, item: Any) -> Optional[GeocodeCandidate]:
        """
        Convert one provider entry; lat/lon arrive as strings.
        """
        try:
            return GeocodeCandidate(
                id=str(item["place_id"]),
                label=str(item["display_name"]),
                lat=float(item["lat"]),
                lng=float(item["lon"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Skipping malformed geocoder entry {item!r}: {e}")
            return None
