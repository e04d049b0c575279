"""Google Maps geocoding provider."""

from .provider import GoogleMapsProvider

__all__ = ["GoogleMapsProvider"]
