"""
Tests for the Nominatim provider.

The geopy geolocator is replaced with a Mock; no request leaves the process.
"""

import time
from unittest.mock import Mock

import pytest
from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeocoderUnavailable

from routewise.geocoding.errors import (
    InternalFailureError,
    InvalidInputError,
    NoMatchError,
    ProviderUnavailableError,
    UnsupportedOperationError,
)
from routewise.geocoding.models import GeoPoint, ProviderType
from routewise.geocoding.nominatim import NominatimProvider


def make_location(lat=50.0614, lng=19.9366, address="Rynek Główny, Kraków, Poland", importance=0.72):
    location = Mock()
    location.latitude = lat
    location.longitude = lng
    location.address = address
    location.raw = {"importance": importance}
    return location


@pytest.fixture
def nominatim_provider(config_factory):
    """Create a Nominatim provider without rate limiting delays."""
    config = config_factory(
        provider=ProviderType.NOMINATIM,
        nominatim_user_agent="routewise-tests",
    )
    provider = NominatimProvider(config=config)
    provider._query_delay = 0
    provider.geolocator = Mock()
    return provider


class TestNominatimProviderBasics:
    """Test construction and identification."""

    def test_provider_type_identification(self, nominatim_provider):
        assert nominatim_provider.provider_type == ProviderType.NOMINATIM

    def test_geolocator_uses_configured_user_agent(self, config_factory):
        config = config_factory(
            provider=ProviderType.NOMINATIM,
            nominatim_user_agent="routewise-tests",
            nominatim_domain="nominatim.example.org",
        )
        provider = NominatimProvider(config=config)

        assert provider.geolocator.headers["User-Agent"] == "routewise-tests"
        assert provider.geolocator.domain == "nominatim.example.org"


class TestNominatimForwardGeocode:
    """Test forward geocoding."""

    @pytest.mark.asyncio
    async def test_successful_geocode(self, nominatim_provider):
        nominatim_provider.geolocator.geocode.return_value = make_location()

        result = await nominatim_provider.forward_geocode(" Rynek Główny, Kraków ")

        assert result.point == GeoPoint(latitude=50.0614, longitude=19.9366)
        assert result.formatted_address == "Rynek Główny, Kraków, Poland"
        assert result.provider_used == ProviderType.NOMINATIM
        assert result.confidence == 0.72
        nominatim_provider.geolocator.geocode.assert_called_once_with(
            "Rynek Główny, Kraków", exactly_one=True
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("importance,expected", [(1.4, 1.0), (-0.2, 0.0), (None, None), ("high", None)])
    async def test_confidence_is_clamped(self, nominatim_provider, importance, expected):
        nominatim_provider.geolocator.geocode.return_value = make_location(importance=importance)

        result = await nominatim_provider.forward_geocode("Kraków")

        assert result.confidence == expected

    @pytest.mark.asyncio
    async def test_no_result_is_no_match(self, nominatim_provider):
        nominatim_provider.geolocator.geocode.return_value = None

        with pytest.raises(NoMatchError):
            await nominatim_provider.forward_geocode("nowhere at all")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        GeocoderTimedOut("timed out"),
        GeocoderUnavailable("down"),
        GeocoderServiceError("HTTP 500"),
    ])
    async def test_geopy_errors_are_unavailable(self, nominatim_provider, error):
        nominatim_provider.geolocator.geocode.side_effect = error

        with pytest.raises(ProviderUnavailableError):
            await nominatim_provider.forward_geocode("Kraków")

    @pytest.mark.asyncio
    async def test_unexpected_error_is_internal_failure(self, nominatim_provider):
        nominatim_provider.geolocator.geocode.side_effect = RuntimeError("boom")

        with pytest.raises(InternalFailureError):
            await nominatim_provider.forward_geocode("Kraków")

    @pytest.mark.asyncio
    async def test_blank_address_makes_no_request(self, nominatim_provider):
        with pytest.raises(InvalidInputError):
            await nominatim_provider.forward_geocode("")

        nominatim_provider.geolocator.geocode.assert_not_called()


class TestNominatimReverseGeocode:
    """Test reverse geocoding."""

    @pytest.mark.asyncio
    async def test_reverse_returns_queried_point(self, nominatim_provider, sample_points):
        point = sample_points['krakow']
        nominatim_provider.geolocator.reverse.return_value = make_location(lat=50.06, lng=19.93)

        result = await nominatim_provider.reverse_geocode(point)

        assert result.point == point
        assert result.formatted_address == "Rynek Główny, Kraków, Poland"
        nominatim_provider.geolocator.reverse.assert_called_once_with(
            (50.0614, 19.9366), exactly_one=True
        )

    @pytest.mark.asyncio
    async def test_no_result_is_no_match(self, nominatim_provider, sample_points):
        nominatim_provider.geolocator.reverse.return_value = None

        with pytest.raises(NoMatchError):
            await nominatim_provider.reverse_geocode(sample_points['sao_paulo'])


class TestNominatimRateLimiting:
    """Test the one-request-per-second policy."""

    @pytest.mark.asyncio
    async def test_consecutive_requests_are_spaced(self, nominatim_provider):
        nominatim_provider._query_delay = 0.2
        nominatim_provider.geolocator.geocode.return_value = make_location()

        start = time.monotonic()
        await nominatim_provider.forward_geocode("Kraków")
        await nominatim_provider.forward_geocode("Kraków")
        elapsed = time.monotonic() - start

        assert elapsed >= 0.18


class TestNominatimAutocomplete:
    """Nominatim does not offer autocomplete."""

    @pytest.mark.asyncio
    async def test_autocomplete_is_unsupported(self, nominatim_provider):
        with pytest.raises(UnsupportedOperationError):
            await nominatim_provider.autocomplete("Kra")
