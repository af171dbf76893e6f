"""Overpass API geodata adapter.

Fetches road ways with their geometry from an Overpass interpreter,
either around a circle or inside a corridor polygon, and converts the
response into ``Way`` records. Adds:
- Rate limiting (geopy's RateLimiter in front of every request)
- Retries on transport errors, HTTP 429 and 5xx (urllib3 Retry mounted
  on the requests session)
- Response caching via CachePort
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

import requests
from geopy.extra.rate_limiter import RateLimiter
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from ...config import OverpassConfig, get_config
from ...domain.errors import ConfigurationError, DataFetchError, InvalidInputError
from ...domain.models import Corridor, FetchCircle, Way
from ...graph.parser import ways_from_elements
from ...ports.cache import CachePort
from ..cache.memory_cache import InMemoryCache

RETRYABLE_STATUS = (429, 500, 502, 503, 504)


@dataclass
class OverpassGeodataSource:
    """Geodata source backed by the Overpass API.

    This adapter implements GeodataSourcePort.

    Attributes:
        config: Endpoint, timeouts, rate limiting and highway filter
        cache: Cache for raw responses, keyed by query text
        session: HTTP session; a retry policy is mounted on it
    """

    config: OverpassConfig = field(default_factory=lambda: get_config().overpass)
    cache: CachePort[Dict[str, Any]] = field(
        default_factory=lambda: InMemoryCache(
            name="overpass",
            default_ttl_seconds=get_config().overpass.cache_ttl_seconds,
        )
    )
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    _get: Callable[..., requests.Response] = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if not self.config.base_url:
            raise ConfigurationError(
                "Overpass base URL is not set", setting_name="base_url"
            )

        retry = Retry(
            total=self.config.max_retries,
            status_forcelist=RETRYABLE_STATUS,
            backoff_factor=self.config.error_wait_seconds,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        # retries happen in the transport adapter, the limiter only paces
        self._get = RateLimiter(
            self.session.get,
            min_delay_seconds=self.config.rate_limit_delay,
            max_retries=0,
            swallow_exceptions=False,
        )

    def fetch_circle(self, circle: FetchCircle) -> List[Way]:
        """Fetch the ways within ``circle``."""
        center = circle.center
        selector = (
            f"way(around:{circle.radius_m:.0f},{center.latitude:.7f},{center.longitude:.7f})"
        )
        return self._fetch_ways(selector)

    def fetch_corridor(self, corridor: Corridor) -> List[Way]:
        """Fetch the ways within ``corridor``."""
        polygon = " ".join(
            f"{c.latitude:.7f} {c.longitude:.7f}" for c in corridor.vertices
        )
        return self._fetch_ways(f'way(poly:"{polygon}")')

    def build_query(self, selector: str) -> str:
        """Overpass QL asking for highway ways with inline geometry."""
        highways = "|".join(self.config.highway_types)
        return (
            f"[out:json][timeout:{int(self.config.timeout_seconds)}];"
            f'{selector}["highway"~"^({highways})$"];'
            "out geom;"
        )

    def _fetch_ways(self, selector: str) -> List[Way]:
        query = self.build_query(selector)
        payload = self._fetch_payload(query)
        try:
            ways = ways_from_elements(payload)
        except InvalidInputError as e:
            raise DataFetchError(
                "Geodata service returned malformed ways", query=query, cause=e
            )
        self._logger.info("Ways fetched", extra={"ways": len(ways)})
        return ways

    def _fetch_payload(self, query: str) -> Dict[str, Any]:
        cached = self.cache.get(query)
        if cached is not None:
            self._logger.debug("Overpass cache hit", extra={"query": query})
            return cached

        try:
            response = self._get(
                self.config.base_url,
                params={"data": query},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            self._logger.error("Overpass request failed", extra={"error": str(e)})
            raise DataFetchError(
                "Geodata service request failed", query=query, cause=e
            )

        if response.status_code != 200:
            self._logger.error(
                "Overpass returned error status",
                extra={"status_code": response.status_code},
            )
            raise DataFetchError(
                f"Geodata service returned HTTP {response.status_code}",
                query=query,
                status_code=response.status_code,
            )

        payload = self._decode(response, query)
        self.cache.set(query, payload)
        return payload

    def _decode(self, response: requests.Response, query: str) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as e:
            raise DataFetchError(
                "Geodata service returned invalid JSON",
                query=query,
                status_code=response.status_code,
                cause=e,
            )
        if not isinstance(payload, dict):
            raise DataFetchError(
                "Geodata service returned an unexpected payload",
                query=query,
                status_code=response.status_code,
            )
        return payload
