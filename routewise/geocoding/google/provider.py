"""
Google Maps provider implementation.

Uses the Geocoding API for forward and reverse geocoding and the Places
Autocomplete API (Legacy) for suggestions.
https://developers.google.com/maps/documentation/geocoding
"""

import logging
from typing import Any, Dict, List

import httpx

from ..base import GeocodingProvider
from ..errors import NoMatchError, ProviderUnavailableError
from ..models import AutocompleteSuggestion, GeocodeResult, GeoPoint, ProviderType

logger = logging.getLogger(__name__)

# geometry.location_type -> confidence
LOCATION_TYPE_CONFIDENCE = {
    "ROOFTOP": 1.0,
    "RANGE_INTERPOLATED": 0.8,
    "GEOMETRIC_CENTER": 0.6,
    "APPROXIMATE": 0.4,
}

MAX_SUGGESTIONS = 5


class GoogleMapsProvider(GeocodingProvider):
    """
    Google Maps provider.

    Requires GOOGLE_MAPS_API_KEY. The key only ever leaves this class as a
    request parameter; it is never logged or put into error messages.
    """

    # API endpoints
    GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
    AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"

    def __init__(self, config):
        """
        Initialize Google Maps provider.

        Args:
            config: Resolved GeocodingConfig

        Raises:
            ProviderUnavailableError: If no API key is configured
        """
        if not config.has_google_maps_key:
            raise ProviderUnavailableError(
                "GOOGLE_MAPS_API_KEY is required for the google-maps provider"
            )
        self._api_key = config.google_maps_api_key.get_secret_value()
        self._timeout = config.request_timeout

        logger.info("Google Maps provider initialized successfully")

    def _get_http_client(self) -> httpx.AsyncClient:
        """
        Create a new HTTP client for the current async context.

        A fresh client per call keeps connection state out of other event loops.
        """
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            headers={"User-Agent": "RouteWise-API/1.0"},
        )

    async def _request(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Perform a GET against a Maps endpoint and return the decoded body.

        Every transport or decoding failure is normalized to
        ProviderUnavailableError.
        """
        params = {**params, "key": self._api_key}
        try:
            async with self._get_http_client() as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.TimeoutException:
            logger.warning("Google Maps API timeout")
            raise ProviderUnavailableError("Google Maps API timed out")
        except httpx.HTTPStatusError as e:
            # The exception text carries the request URL, including the key
            status_code = e.response.status_code
            logger.error(f"Google Maps API HTTP error: {status_code}")
            raise ProviderUnavailableError(f"Google Maps API returned HTTP {status_code}")
        except httpx.HTTPError as e:
            logger.error(f"Google Maps API transport error: {e.__class__.__name__}")
            raise ProviderUnavailableError(f"Google Maps API unreachable ({e.__class__.__name__})")
        except ValueError:
            logger.error("Google Maps API returned a malformed body")
            raise ProviderUnavailableError("Google Maps API returned a malformed body")

        if not isinstance(data, dict) or "status" not in data:
            raise ProviderUnavailableError("Google Maps API returned an unexpected payload")
        return data

    def _parse_geocode_response(self, data: Dict[str, Any], query: str) -> GeocodeResult:
        status = data["status"]
        if status == "ZERO_RESULTS":
            logger.info(f"No Google Maps results for {query}")
            raise NoMatchError(f"No results for {query}")
        if status != "OK":
            logger.warning(f"Google Maps API status: {status}")
            raise ProviderUnavailableError(f"Google Maps API status {status}")

        try:
            result = data["results"][0]
            geometry = result["geometry"]
            location = geometry["location"]
            point = GeoPoint(latitude=float(location["lat"]), longitude=float(location["lng"]))
            formatted_address = result["formatted_address"]
        except (KeyError, IndexError, TypeError, ValueError):
            logger.error("Google Maps API result is missing required fields")
            raise ProviderUnavailableError("Google Maps API result is malformed")

        return GeocodeResult(
            point=point,
            formatted_address=formatted_address,
            provider_used=ProviderType.GOOGLE_MAPS,
            confidence=LOCATION_TYPE_CONFIDENCE.get(geometry.get("location_type")),
        )

    async def _forward_geocode(self, address: str) -> GeocodeResult:
        data = await self._request(self.GEOCODE_URL, {"address": address})
        result = self._parse_geocode_response(data, f"address '{address}'")
        logger.debug(
            f"📍 Geocoded '{address}' to {result.point.latitude}, {result.point.longitude}"
        )
        return result

    async def _reverse_geocode(self, point: GeoPoint) -> GeocodeResult:
        data = await self._request(
            self.GEOCODE_URL, {"latlng": f"{point.latitude},{point.longitude}"}
        )
        result = self._parse_geocode_response(
            data, f"({point.latitude}, {point.longitude})"
        )
        # Report the queried point, as callers asked about that location
        return result.model_copy(update={"point": point})

    async def _autocomplete(self, partial_text: str) -> List[AutocompleteSuggestion]:
        data = await self._request(self.AUTOCOMPLETE_URL, {"input": partial_text})
        status = data["status"]
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            logger.warning(f"Google Places Autocomplete status: {status}")
            raise ProviderUnavailableError(f"Google Places Autocomplete status {status}")

        predictions = data.get("predictions")
        if not isinstance(predictions, list):
            raise ProviderUnavailableError("Google Places Autocomplete payload is malformed")

        suggestions = []
        for prediction in predictions[:MAX_SUGGESTIONS]:
            if not isinstance(prediction, dict) or not prediction.get("description"):
                continue
            suggestions.append(AutocompleteSuggestion(
                text=prediction["description"],
                place_id=prediction.get("place_id"),
            ))
        return suggestions

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.GOOGLE_MAPS
