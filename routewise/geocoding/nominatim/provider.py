"""
Nominatim provider implementation.

Geocodes against OpenStreetMap Nominatim through geopy. geopy is
synchronous, so calls run in a worker thread.
"""

import asyncio
import logging
import time
from typing import List, Optional

from geopy.exc import GeopyError
from geopy.geocoders import Nominatim

from ..base import GeocodingProvider
from ..errors import NoMatchError, ProviderUnavailableError, UnsupportedOperationError
from ..models import AutocompleteSuggestion, GeocodeResult, GeoPoint, ProviderType

logger = logging.getLogger(__name__)


class NominatimProvider(GeocodingProvider):
    """
    OpenStreetMap Nominatim provider.

    The public instance allows at most one request per second and forbids
    autocomplete, so requests are serialized and autocomplete is not offered.
    """

    def __init__(self, config):
        """Initialize Nominatim provider from the resolved config."""
        self.geolocator = Nominatim(
            user_agent=config.nominatim_user_agent,
            domain=config.nominatim_domain,
            timeout=config.request_timeout,
        )

        # Rate limiting attributes
        self._last_request_time: float = 0.0
        self._query_delay: float = 1.0  # 1 second between requests
        self._request_lock = asyncio.Lock()

    async def _wait_before_request(self):
        """Implement rate limiting for Nominatim requests."""
        async with self._request_lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self._query_delay:
                await asyncio.sleep(self._query_delay - elapsed)
            self._last_request_time = time.monotonic()

    async def _call(self, func, *args, **kwargs):
        await self._wait_before_request()
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        except GeopyError as e:
            logger.warning(f"Nominatim request failed: {e.__class__.__name__}: {e}")
            raise ProviderUnavailableError(f"Nominatim unavailable ({e.__class__.__name__})")

    @staticmethod
    def _confidence(raw: dict) -> Optional[float]:
        importance = raw.get("importance") if isinstance(raw, dict) else None
        if importance is None:
            return None
        try:
            return min(max(float(importance), 0.0), 1.0)
        except (TypeError, ValueError):
            return None

    async def _forward_geocode(self, address: str) -> GeocodeResult:
        location = await self._call(self.geolocator.geocode, address, exactly_one=True)
        if not location:
            logger.info(f"No Nominatim results for address: {address}")
            raise NoMatchError(f"No results for address '{address}'")

        logger.debug(f"📍 location.raw = {getattr(location, 'raw', None)}")
        return GeocodeResult(
            point=GeoPoint(latitude=location.latitude, longitude=location.longitude),
            formatted_address=location.address,
            provider_used=ProviderType.NOMINATIM,
            confidence=self._confidence(getattr(location, "raw", {})),
        )

    async def _reverse_geocode(self, point: GeoPoint) -> GeocodeResult:
        location = await self._call(
            self.geolocator.reverse, (point.latitude, point.longitude), exactly_one=True
        )
        if not location:
            logger.info(f"No Nominatim results for ({point.latitude}, {point.longitude})")
            raise NoMatchError(f"No results for ({point.latitude}, {point.longitude})")

        return GeocodeResult(
            point=point,
            formatted_address=location.address,
            provider_used=ProviderType.NOMINATIM,
            confidence=self._confidence(getattr(location, "raw", {})),
        )

    async def _autocomplete(self, partial_text: str) -> List[AutocompleteSuggestion]:
        raise UnsupportedOperationError("Nominatim does not offer autocomplete")

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.NOMINATIM
