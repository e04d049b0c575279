"""
OpenStreetMap Nominatim provider.
"""

from .provider import NominatimProvider

__all__ = ['NominatimProvider']
