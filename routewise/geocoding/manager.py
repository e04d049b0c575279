"""
Geocoding manager: the single entry point for geocoding operations.

The manager resolves the active provider from configuration, checks that the
provider is registered for the requested operation, delegates the call and
applies the fallback-to-mock policy. Callers never pick a provider.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from . import registry
from .base import GeocodingProvider
from .errors import (
    GeocodingError,
    NoMatchError,
    ProviderUnavailableError,
    UnsupportedOperationError,
)
from .models import (
    AutocompleteSuggestion,
    GeocodeResult,
    GeocodingOperation,
    GeoPoint,
    ProviderInfo,
    ProviderStats,
    ProviderType,
    normalize_address,
)
from .settings import GeocodingConfig, get_config

logger = logging.getLogger(__name__)

ProviderCall = Callable[[GeocodingProvider], Awaitable[Any]]


class GeocodingManager:
    """
    Manages geocoding provider instances, selection and fallback.

    Per call, the active provider is attempted once. Only a
    ProviderUnavailableError (or a misconfigured active provider) triggers the
    single fallback attempt against the mock provider, and only when
    ``fallback_to_mock`` is enabled. The two attempts never overlap.
    """

    def __init__(self, config_loader: Callable[[], GeocodingConfig] = get_config):
        """
        Initialize the geocoding manager.

        Args:
            config_loader: Callable returning the current resolved config
        """
        self._config_loader = config_loader
        self._providers: Dict[ProviderType, GeocodingProvider] = {}
        self._provider_classes: Dict[ProviderType, Type[GeocodingProvider]] = {}
        self._providers_config: Optional[GeocodingConfig] = None
        self._stats: Dict[ProviderType, ProviderStats] = {}

    def register_provider(self, provider_type: ProviderType, provider_class: Type[GeocodingProvider]):
        """
        Register a provider class for a given provider type.

        Args:
            provider_type: The provider type identifier
            provider_class: The provider class to register
        """
        self._provider_classes[provider_type] = provider_class
        logger.info(f"Registered provider class for {provider_type.value}")

    def get_provider(self, provider_type: ProviderType, config: GeocodingConfig) -> GeocodingProvider:
        """
        Get a provider instance for the specified type.

        Instances are cached until the resolved config changes.

        Raises:
            ProviderUnavailableError: If the provider is not registered or cannot be built
        """
        if config is not self._providers_config:
            self._providers = {}
            self._providers_config = config

        if provider_type in self._providers:
            return self._providers[provider_type]

        if provider_type not in self._provider_classes:
            raise ProviderUnavailableError(f"Provider type {provider_type.value} is not registered")

        provider_instance = self._provider_classes[provider_type](config=config)
        self._providers[provider_type] = provider_instance

        logger.info(f"Created new provider instance: {provider_type.value}")
        return provider_instance

    def get_config(self) -> GeocodingConfig:
        """Current resolved configuration. Never calls a provider."""
        return self._config_loader()

    def get_provider_info(self) -> Dict[ProviderType, ProviderInfo]:
        """Registry catalog. Never calls a provider."""
        return registry.get_provider_info()

    async def forward_geocode(self, address: str) -> GeocodeResult:
        """
        Convert an address to coordinates using the active provider.

        Raises:
            InvalidInputError: If the address is empty or whitespace-only
            NoMatchError: If the provider found nothing
            ProviderUnavailableError: If no provider could serve the request
            UnsupportedOperationError: If the active provider lacks the capability
        """
        address = normalize_address(address)
        return await self._execute(
            GeocodingOperation.FORWARD_GEOCODE,
            lambda provider: provider.forward_geocode(address),
        )

    async def reverse_geocode(self, latitude: float, longitude: float) -> GeocodeResult:
        """
        Convert coordinates to an address using the active provider.

        Raises:
            InvalidInputError: If the coordinates are out of range
            NoMatchError: If the provider found nothing
            ProviderUnavailableError: If no provider could serve the request
            UnsupportedOperationError: If the active provider lacks the capability
        """
        point = GeoPoint.from_coordinates(latitude, longitude)
        return await self._execute(
            GeocodingOperation.REVERSE_GEOCODE,
            lambda provider: provider.reverse_geocode(point),
        )

    async def autocomplete(self, partial_text: str) -> List[AutocompleteSuggestion]:
        """
        Suggest addresses for partial input, most relevant first.

        Blank input yields an empty list once the capability check passes.
        """
        config = self.get_config()
        self._require_capability(config.provider, GeocodingOperation.AUTOCOMPLETE)
        if partial_text is None or not partial_text.strip():
            return []
        text = partial_text.strip()
        return await self._execute(
            GeocodingOperation.AUTOCOMPLETE,
            lambda provider: provider.autocomplete(text),
            config=config,
        )

    def _require_capability(self, provider_type: ProviderType, operation: GeocodingOperation):
        if not registry.supports(provider_type, operation):
            logger.warning(f"Provider {provider_type.value} does not support {operation.value}")
            raise UnsupportedOperationError(
                f"Provider {provider_type.value} is not registered for {operation.value}"
            )

    async def _execute(
        self,
        operation: GeocodingOperation,
        call: ProviderCall,
        config: Optional[GeocodingConfig] = None,
    ):
        if config is None:
            config = self.get_config()
        active = config.provider
        self._require_capability(active, operation)

        if not config.is_provider_configured:
            logger.warning(f"⚠️ Provider {active.value} is not configured: {config.deficiency}")
            failure = ProviderUnavailableError(config.deficiency)
        else:
            try:
                return await self._attempt(active, config, call)
            except ProviderUnavailableError as e:
                failure = e

        # A configured mock has already made its one attempt
        mock_attempted = active == ProviderType.MOCK and config.is_provider_configured
        if not config.fallback_to_mock or mock_attempted:
            raise failure
        if not registry.supports(ProviderType.MOCK, operation):
            raise failure

        logger.warning(
            f"🔄 {operation.value}: {active.value} unavailable ({failure.message}), "
            f"falling back to mock"
        )
        self._stats_for(active).fallbacks += 1
        try:
            return await self._attempt(ProviderType.MOCK, config, call)
        except GeocodingError as mock_error:
            logger.error(f"❌ Mock fallback failed for {operation.value}: {mock_error.message}")
            raise failure from mock_error

    async def _attempt(self, provider_type: ProviderType, config: GeocodingConfig, call: ProviderCall):
        stats = self._stats_for(provider_type)
        stats.total_requests += 1
        try:
            provider = self.get_provider(provider_type, config)
            result = await asyncio.wait_for(call(provider), timeout=config.request_timeout)
        except asyncio.TimeoutError:
            stats.failed_requests += 1
            logger.warning(f"⏱️ {provider_type.value} timed out after {config.request_timeout}s")
            raise ProviderUnavailableError(
                f"{provider_type.value} timed out after {config.request_timeout}s"
            )
        except NoMatchError:
            stats.successful_requests += 1
            raise
        except GeocodingError:
            stats.failed_requests += 1
            raise

        stats.successful_requests += 1
        if isinstance(result, GeocodeResult) and result.provider_used != provider_type:
            result = result.tagged(provider_type)
        return result

    def _stats_for(self, provider_type: ProviderType) -> ProviderStats:
        if provider_type not in self._stats:
            self._stats[provider_type] = ProviderStats(provider_type=provider_type.value)
        return self._stats[provider_type]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics for all registered providers.

        Returns:
            Dictionary with provider statistics
        """
        return {
            "active_provider": self.get_config().provider.value,
            "registered_providers": [p.value for p in self._provider_classes],
            "instantiated_providers": [p.value for p in self._providers],
            "providers": {
                provider_type.value: {**stats.model_dump(), "success_rate": stats.success_rate}
                for provider_type, stats in self._stats.items()
            },
        }


# Global manager instance
_global_manager: Optional[GeocodingManager] = None


def get_manager() -> GeocodingManager:
    """
    Get the global geocoding manager instance.

    Returns:
        Global GeocodingManager with the built-in providers registered
    """
    global _global_manager
    if _global_manager is None:
        _global_manager = GeocodingManager()
        _register_built_in_providers(_global_manager)
    return _global_manager


def reset_manager() -> None:
    """Drop the global manager (useful for testing)."""
    global _global_manager
    _global_manager = None


def _register_built_in_providers(manager: GeocodingManager):
    """
    Register all built-in provider classes.

    Args:
        manager: Manager instance to register providers with
    """
    # Import providers here to avoid circular imports
    from .google.provider import GoogleMapsProvider
    from .mock.provider import MockProvider
    from .nominatim.provider import NominatimProvider

    manager.register_provider(ProviderType.MOCK, MockProvider)
    manager.register_provider(ProviderType.GOOGLE_MAPS, GoogleMapsProvider)
    manager.register_provider(ProviderType.NOMINATIM, NominatimProvider)

    logger.info("Finished registering built-in providers")
