"""
Multi-provider geocoding abstraction layer.

This package presents one contract for forward geocoding, reverse geocoding
and autocomplete over interchangeable backends (Google Maps, Nominatim and a
deterministic mock).

The architecture follows the Strategy pattern: the manager picks the active
provider from configuration and falls back to the mock provider under an
explicit policy, while business code only talks to the manager.
"""

from .base import GeocodingProvider
from .errors import (
    GeocodingError,
    GeocodingErrorKind,
    InternalFailureError,
    InvalidInputError,
    NoMatchError,
    ProviderUnavailableError,
    UnsupportedOperationError,
)
from .manager import GeocodingManager, get_manager
from .models import (
    AutocompleteSuggestion,
    GeocodeResult,
    GeoPoint,
    ProviderCapabilities,
    ProviderInfo,
    ProviderType,
)
from .settings import GeocodingConfig, get_config, reload_config

__all__ = [
    'GeocodingProvider',
    'GeocodingError',
    'GeocodingErrorKind',
    'InternalFailureError',
    'InvalidInputError',
    'NoMatchError',
    'ProviderUnavailableError',
    'UnsupportedOperationError',
    'GeocodingManager',
    'get_manager',
    'AutocompleteSuggestion',
    'GeocodeResult',
    'GeoPoint',
    'ProviderCapabilities',
    'ProviderInfo',
    'ProviderType',
    'GeocodingConfig',
    'get_config',
    'reload_config',
]
