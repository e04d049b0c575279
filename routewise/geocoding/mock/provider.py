"""
Mock geocoding provider.

Serves fixed sample data with no I/O. Output depends only on the input, so
the same address or point always yields the same result. Used as the
fallback provider and in tests.
"""

import hashlib
import logging
import re
from typing import List, Optional, Tuple

from ..base import GeocodingProvider
from ..models import AutocompleteSuggestion, GeocodeResult, GeoPoint, ProviderType

logger = logging.getLogger(__name__)

# (match tokens, formatted address, (lat, lng), street suggestions)
_KNOWN_PLACES = [
    (
        ("krakow", "kraków", "cracow"),
        "Kraków, Poland",
        (50.0647, 19.9450),
        [
            "ul. Floriańska, Kraków, Poland",
            "Rynek Główny, Kraków, Poland",
            "ul. Grodzka, Kraków, Poland",
        ],
    ),
    (
        ("warsaw", "warszawa"),
        "Warsaw, Poland",
        (52.2297, 21.0122),
        [
            "ul. Marszałkowska, Warsaw, Poland",
            "Palace of Culture, Warsaw, Poland",
            "Old Town, Warsaw, Poland",
        ],
    ),
    (
        ("new york", "nyc"),
        "New York, NY, USA",
        (40.7128, -74.0060),
        [
            "Broadway, New York, NY, USA",
            "Fifth Avenue, New York, NY, USA",
            "Times Square, New York, NY, USA",
        ],
    ),
]

_KRAKOW_STREETS = [
    "ul. Floriańska 12, 31-021 Kraków, Poland",
    "ul. Grodzka 25, 31-001 Kraków, Poland",
    "ul. Szewska 8, 31-009 Kraków, Poland",
    "ul. Starowiślna 17, 31-038 Kraków, Poland",
    "Rynek Główny 1, 31-042 Kraków, Poland",
]

# Bounding boxes as (min_lat, max_lat, min_lng, max_lng)
_KRAKOW_BOX = (49.5, 50.5, 19.0, 21.0)
_NYC_BOX = (40.4, 41.0, -74.5, -73.5)

# Unknown addresses land inside this box
_SYNTHETIC_ORIGIN = (49.8, 19.5)
_SYNTHETIC_SPAN = (0.4, 0.8)


# Tokens match whole words only, so "Krakowska" or "Sunnycrest" stay unknown
_PLACE_PATTERNS = [
    (re.compile(r"\b(?:" + "|".join(re.escape(token) for token in place[0]) + r")\b"), place)
    for place in _KNOWN_PLACES
]


def _digest(text: str) -> int:
    """Stable integer digest of a string (independent of PYTHONHASHSEED)."""
    return int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")


def _in_box(point: GeoPoint, box: Tuple[float, float, float, float]) -> bool:
    min_lat, max_lat, min_lng, max_lng = box
    return min_lat <= point.latitude <= max_lat and min_lng <= point.longitude <= max_lng


class MockProvider(GeocodingProvider):
    """
    Deterministic mock geocoding provider.

    Known cities (Kraków, Warsaw, New York) resolve to their real centers.
    Any other address resolves to a stable synthetic point derived from a
    SHA-256 digest of the normalized text.
    """

    def __init__(self, config=None):
        # Accepts the resolved config for constructor parity with real providers
        self._config = config

    def _match_known_place(self, text: str) -> Optional[tuple]:
        lowered = text.lower()
        for pattern, place in _PLACE_PATTERNS:
            if pattern.search(lowered):
                return place
        return None

    async def _forward_geocode(self, address: str) -> GeocodeResult:
        place = self._match_known_place(address)
        if place:
            _, formatted, (lat, lng), _ = place
            return GeocodeResult(
                point=GeoPoint(latitude=lat, longitude=lng),
                formatted_address=formatted,
                provider_used=ProviderType.MOCK,
                confidence=0.9,
            )

        digest = _digest(" ".join(address.lower().split()))
        lat_fraction = (digest & 0xFFFFFFFF) / 0xFFFFFFFF
        lng_fraction = (digest >> 32) / 0xFFFFFFFF
        lat = round(_SYNTHETIC_ORIGIN[0] + lat_fraction * _SYNTHETIC_SPAN[0], 6)
        lng = round(_SYNTHETIC_ORIGIN[1] + lng_fraction * _SYNTHETIC_SPAN[1], 6)

        logger.debug(f"🧪 Mock geocoded '{address}' to synthetic point {lat}, {lng}")
        return GeocodeResult(
            point=GeoPoint(latitude=lat, longitude=lng),
            formatted_address=address,
            provider_used=ProviderType.MOCK,
            confidence=None,
        )

    async def _reverse_geocode(self, point: GeoPoint) -> GeocodeResult:
        if _in_box(point, _KRAKOW_BOX):
            key = f"{point.latitude:.4f},{point.longitude:.4f}"
            address = _KRAKOW_STREETS[_digest(key) % len(_KRAKOW_STREETS)]
        elif _in_box(point, _NYC_BOX):
            address = "123 Broadway, New York, NY 10013, USA"
        else:
            address = f"Approximate location ({point.latitude:.4f}, {point.longitude:.4f})"

        return GeocodeResult(
            point=point,
            formatted_address=address,
            provider_used=ProviderType.MOCK,
            confidence=None,
        )

    async def _autocomplete(self, partial_text: str) -> List[AutocompleteSuggestion]:
        place = self._match_known_place(partial_text)
        if place:
            return [AutocompleteSuggestion(text=text) for text in place[3]]
        return [
            AutocompleteSuggestion(text=f"{partial_text} {suffix}")
            for suffix in ("Street", "Avenue", "Plaza")
        ]

    @property
    def provider_type(self) -> ProviderType:
        return ProviderType.MOCK
