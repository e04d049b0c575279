"""
Static catalog of known geocoding providers.

The registry declares what each provider supports; it never geocodes.
Adding a provider means adding an entry here and registering its class
with the manager.
"""

from typing import Dict

from .models import GeocodingOperation, ProviderCapabilities, ProviderInfo, ProviderType

_PROVIDERS: Dict[ProviderType, ProviderInfo] = {
    ProviderType.MOCK: ProviderInfo(
        capabilities=ProviderCapabilities(
            supports_forward_geocode=True,
            supports_reverse_geocode=True,
            supports_autocomplete=True,
            is_real_time=False,
        ),
        description="Deterministic offline fallback with fixed sample data",
        requires_api_key=False,
    ),
    ProviderType.GOOGLE_MAPS: ProviderInfo(
        capabilities=ProviderCapabilities(
            supports_forward_geocode=True,
            supports_reverse_geocode=True,
            supports_autocomplete=True,
            is_real_time=True,
        ),
        description="Google Maps Geocoding and Places Autocomplete: most accurate, has usage limits",
        requires_api_key=True,
    ),
    ProviderType.NOMINATIM: ProviderInfo(
        # Nominatim's usage policy forbids autocomplete against the public instance
        capabilities=ProviderCapabilities(
            supports_forward_geocode=True,
            supports_reverse_geocode=True,
            supports_autocomplete=False,
            is_real_time=True,
        ),
        description="OpenStreetMap Nominatim: free, good coverage, no API key needed",
        requires_api_key=False,
    ),
}


def get_provider_info() -> Dict[ProviderType, ProviderInfo]:
    """Return the full catalog of known providers."""
    return dict(_PROVIDERS)


def get_capabilities(provider_type: ProviderType) -> ProviderCapabilities:
    """Return the declared capabilities of a provider."""
    return _PROVIDERS[provider_type].capabilities


def supports(provider_type: ProviderType, operation: GeocodingOperation) -> bool:
    """Whether a provider is registered for an operation."""
    return get_capabilities(provider_type).supports(operation)


def describe_providers() -> Dict[str, dict]:
    """Catalog keyed by provider identifier, serialized with camelCase keys."""
    return {
        provider_type.value: info.model_dump(by_alias=True)
        for provider_type, info in _PROVIDERS.items()
    }
