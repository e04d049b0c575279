"""
Geocoding router: forward/reverse geocoding, autocomplete and introspection.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from routewise.geocoding import registry
from routewise.geocoding.manager import GeocodingManager, get_manager
from routewise.geocoding.models import AutocompleteSuggestion, GeocodeResult
from routewise.middleware.error_handler import error_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/geocode", tags=["Geocoding"])

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


# Response models
class InfoConfig(BaseModel):
    """Public view of the geocoding configuration. Never carries the key itself."""

    current_provider: str = Field(..., description="Active provider identifier")
    has_google_maps_key: bool = Field(..., description="Whether a Google Maps key is configured")
    fallback_to_mock: bool = Field(..., description="Whether mock fallback is enabled")

    model_config = _CAMEL


class InfoCapabilities(BaseModel):
    """Capabilities of the active provider."""

    reverse_geocoding: bool
    forward_geocoding: bool
    autocomplete: bool
    real_time_search: bool

    model_config = _CAMEL


class GeocodingInfoResponse(BaseModel):
    """Geocoding configuration and provider catalog."""

    success: bool = True
    config: InfoConfig
    providers: Dict[str, Dict[str, Any]] = Field(..., description="Registry keyed by provider identifier")
    capabilities: InfoCapabilities


class GeocodeResponse(BaseModel):
    """Single geocoding result."""

    success: bool = True
    result: GeocodeResult


class AutocompleteResponse(BaseModel):
    """Ranked autocomplete suggestions."""

    success: bool = True
    suggestions: List[AutocompleteSuggestion]


class StatsResponse(BaseModel):
    """Provider usage statistics."""

    success: bool = True
    stats: Dict[str, Any]


def get_geocoding_manager() -> GeocodingManager:
    """FastAPI dependency returning the process-wide geocoding manager."""
    return get_manager()


@router.get("/info", response_model=GeocodingInfoResponse)
async def get_geocoding_info(
    manager: GeocodingManager = Depends(get_geocoding_manager),
):
    """
    Get information about the active geocoding provider and all known providers.

    Reads configuration and the registry only; no provider is called.
    """
    try:
        config = manager.get_config()
        capabilities = manager.get_provider_info()[config.provider].capabilities

        return GeocodingInfoResponse(
            config=InfoConfig(
                current_provider=config.provider.value,
                has_google_maps_key=config.has_google_maps_key,
                fallback_to_mock=config.fallback_to_mock,
            ),
            providers=registry.describe_providers(),
            capabilities=InfoCapabilities(
                reverse_geocoding=capabilities.supports_reverse_geocode,
                forward_geocoding=capabilities.supports_forward_geocode,
                autocomplete=capabilities.supports_autocomplete,
                real_time_search=capabilities.is_real_time,
            ),
        )
    except Exception:
        logger.exception("Error getting geocoding info")
        return error_response(500, "Failed to get geocoding information")


@router.get("/forward", response_model=GeocodeResponse)
async def forward_geocode(
    address: Optional[str] = Query(None, description="Address to geocode"),
    manager: GeocodingManager = Depends(get_geocoding_manager),
):
    """Convert an address to coordinates using the best available provider."""
    result = await manager.forward_geocode(address)
    logger.info(f"🔍 Forward geocoding '{address}' → {result.formatted_address} [{result.provider_used.value}]")
    return GeocodeResponse(result=result)


@router.get("/reverse", response_model=GeocodeResponse)
async def reverse_geocode(
    lat: Optional[float] = Query(None, description="Latitude (-90 to 90)"),
    lng: Optional[float] = Query(None, description="Longitude (-180 to 180)"),
    manager: GeocodingManager = Depends(get_geocoding_manager),
):
    """Convert coordinates to an address using the best available provider."""
    result = await manager.reverse_geocode(lat, lng)
    logger.info(f"🌍 Reverse geocoding ({lat}, {lng}) → {result.formatted_address} [{result.provider_used.value}]")
    return GeocodeResponse(result=result)


@router.get("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete(
    q: Optional[str] = Query(None, description="Partial address text"),
    manager: GeocodingManager = Depends(get_geocoding_manager),
):
    """Suggest addresses for partial input."""
    suggestions = await manager.autocomplete(q)
    return AutocompleteResponse(suggestions=suggestions)


@router.get("/stats", response_model=StatsResponse)
async def get_geocoding_stats(
    manager: GeocodingManager = Depends(get_geocoding_manager),
):
    """Usage counters per provider since process start."""
    return StatsResponse(stats=manager.get_stats())
