"""
Base interfaces and abstract classes for geocoding providers.

This module defines the contract that every geocoding provider implements,
so the manager can switch providers without callers noticing.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from .errors import GeocodingError, InternalFailureError
from .models import (
    AutocompleteSuggestion,
    GeocodeResult,
    GeoPoint,
    ProviderType,
    ensure_valid_point,
    normalize_address,
)

logger = logging.getLogger(__name__)


class GeocodingProvider(ABC):
    """
    Abstract base class for geocoding providers.

    The public methods validate input at the provider boundary and normalize
    unexpected exceptions; subclasses implement the underscored hooks and
    raise only ``GeocodingError`` subclasses for expected failures.
    """

    async def forward_geocode(self, address: str) -> GeocodeResult:
        """
        Convert an address to coordinates.

        Args:
            address: Free-form address text (e.g., "Rynek Główny 1, Kraków")

        Returns:
            GeocodeResult tagged with this provider

        Raises:
            InvalidInputError: If the address is empty or whitespace-only
            NoMatchError: If the backend reports zero results
            ProviderUnavailableError: If the backend cannot be reached or used
        """
        address = normalize_address(address)
        return await self._guarded("forward_geocode", self._forward_geocode(address))

    async def reverse_geocode(self, point: GeoPoint) -> GeocodeResult:
        """
        Convert coordinates to an address.

        Raises:
            InvalidInputError: If the coordinates are out of range
            NoMatchError: If the backend reports zero results
            ProviderUnavailableError: If the backend cannot be reached or used
        """
        ensure_valid_point(point)
        return await self._guarded("reverse_geocode", self._reverse_geocode(point))

    async def autocomplete(self, partial_text: str) -> List[AutocompleteSuggestion]:
        """
        Suggest addresses for partial input, most relevant first.

        An empty list is a valid result for unmatched or blank input.
        """
        if partial_text is None or not partial_text.strip():
            return []
        return await self._guarded("autocomplete", self._autocomplete(partial_text.strip()))

    async def _guarded(self, operation: str, call):
        try:
            return await call
        except GeocodingError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in {self.provider_type.value}.{operation}")
            raise InternalFailureError(
                f"{self.provider_type.value}.{operation} failed: {e.__class__.__name__}"
            ) from e

    @abstractmethod
    async def _forward_geocode(self, address: str) -> GeocodeResult:
        pass

    @abstractmethod
    async def _reverse_geocode(self, point: GeoPoint) -> GeocodeResult:
        pass

    @abstractmethod
    async def _autocomplete(self, partial_text: str) -> List[AutocompleteSuggestion]:
        pass

    @property
    @abstractmethod
    def provider_type(self) -> ProviderType:
        """Return the provider type identifier."""
        pass
