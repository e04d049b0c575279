"""
Unified data models for geocoding across all providers.

Every provider normalizes its backend responses into these models, so callers
never see provider-specific payloads.
"""

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import InvalidInputError


class ProviderType(Enum):
    """Supported geocoding providers."""
    MOCK = "mock"
    GOOGLE_MAPS = "google-maps"
    NOMINATIM = "nominatim"


class GeocodingOperation(Enum):
    """Operations a provider may declare support for."""
    FORWARD_GEOCODE = "forward_geocode"
    REVERSE_GEOCODE = "reverse_geocode"
    AUTOCOMPLETE = "autocomplete"


class ProviderCapabilities(BaseModel):
    """Capability flags declared for a provider at registration time."""
    supports_forward_geocode: bool = Field(..., description="Address to coordinates")
    supports_reverse_geocode: bool = Field(..., description="Coordinates to address")
    supports_autocomplete: bool = Field(..., description="Partial text suggestions")
    is_real_time: bool = Field(..., description="Backed by a live data source")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def supports(self, operation: GeocodingOperation) -> bool:
        """Whether the given operation is declared for this provider."""
        flags = {
            GeocodingOperation.FORWARD_GEOCODE: self.supports_forward_geocode,
            GeocodingOperation.REVERSE_GEOCODE: self.supports_reverse_geocode,
            GeocodingOperation.AUTOCOMPLETE: self.supports_autocomplete,
        }
        return flags[operation]


class ProviderInfo(BaseModel):
    """Registry entry for a provider."""
    capabilities: ProviderCapabilities
    description: str
    requires_api_key: bool = False

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class GeoPoint(BaseModel):
    """A point on the globe in decimal degrees."""
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False, description="Longitude coordinate")

    model_config = {"frozen": True}

    @classmethod
    def from_coordinates(cls, latitude: float, longitude: float) -> "GeoPoint":
        """
        Build a point, mapping range violations to InvalidInputError.

        Raises:
            InvalidInputError: If either coordinate is missing, non-finite or out of range
        """
        try:
            return cls(latitude=latitude, longitude=longitude)
        except ValidationError as e:
            raise InvalidInputError(
                f"Invalid coordinates ({latitude}, {longitude}): {e.error_count()} validation error(s)"
            ) from e


def ensure_valid_point(point: GeoPoint) -> GeoPoint:
    """
    Re-check a point's ranges.

    Points built with ``model_construct`` skip validation, so providers call
    this before any network request.
    """
    lat, lng = point.latitude, point.longitude
    if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
        raise InvalidInputError(f"Coordinates must be numbers, got ({lat!r}, {lng!r})")
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InvalidInputError(f"Coordinates must be finite, got ({lat}, {lng})")
    if not -90 <= lat <= 90:
        raise InvalidInputError(f"Latitude {lat} outside [-90, 90]")
    if not -180 <= lng <= 180:
        raise InvalidInputError(f"Longitude {lng} outside [-180, 180]")
    return point


def normalize_address(address: Optional[str]) -> str:
    """Strip an address, rejecting empty or whitespace-only input."""
    if address is None or not isinstance(address, str) or not address.strip():
        raise InvalidInputError("Address must be a non-empty string")
    return address.strip()


class GeocodeResult(BaseModel):
    """Normalized geocoding result."""
    point: GeoPoint = Field(..., description="Resolved coordinates")
    formatted_address: str = Field(..., description="Full formatted address")
    provider_used: ProviderType = Field(..., description="Provider that produced the result")
    confidence: Optional[float] = Field(None, ge=0, le=1, description="Match confidence (0-1)")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    def tagged(self, provider_type: ProviderType) -> "GeocodeResult":
        """Return a copy attributed to another provider."""
        return self.model_copy(update={"provider_used": provider_type})


class AutocompleteSuggestion(BaseModel):
    """A single autocomplete suggestion. Suggestions are returned ranked."""
    text: str = Field(..., description="Suggested address text")
    place_id: Optional[str] = Field(None, description="Provider place identifier")

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class ProviderStats(BaseModel):
    """
    Usage counters for a geocoding provider.

    Process-wide, updated by the manager after each attempt.
    """
    provider_type: str = Field(..., description="Provider identifier")
    total_requests: int = Field(default=0, description="Attempts made against the provider")
    successful_requests: int = Field(default=0, description="Successful attempts")
    failed_requests: int = Field(default=0, description="Failed attempts")
    fallbacks: int = Field(default=0, description="Requests that fell back to the mock provider")

    @property
    def success_rate(self) -> float:
        """Calculate success rate percentage."""
        if self.total_requests == 0:
            return 0.0
        return (self.successful_requests / self.total_requests) * 100
