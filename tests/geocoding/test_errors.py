"""
Tests for the geocoding error taxonomy.
"""

import pytest

from routewise.geocoding.errors import (
    GeocodingError,
    GeocodingErrorKind,
    InternalFailureError,
    InvalidInputError,
    NoMatchError,
    ProviderUnavailableError,
    UnsupportedOperationError,
)


class TestGeocodingErrors:
    """Test kinds, status codes and messages."""

    @pytest.mark.parametrize("error_class,kind,status_code", [
        (InvalidInputError, GeocodingErrorKind.INVALID_INPUT, 400),
        (NoMatchError, GeocodingErrorKind.NO_MATCH, 404),
        (UnsupportedOperationError, GeocodingErrorKind.UNSUPPORTED_OPERATION, 501),
        (ProviderUnavailableError, GeocodingErrorKind.PROVIDER_UNAVAILABLE, 503),
        (InternalFailureError, GeocodingErrorKind.INTERNAL_FAILURE, 500),
    ])
    def test_kind_and_status(self, error_class, kind, status_code):
        error = error_class("details")

        assert isinstance(error, GeocodingError)
        assert error.kind == kind
        assert error.status_code == status_code

    def test_message_defaults_to_public_message(self):
        error = ProviderUnavailableError()

        assert error.message == "Geocoding provider unavailable"
        assert str(error) == error.public_message

    def test_detailed_message_stays_out_of_public_message(self):
        error = NoMatchError("No results for address 'Floriańska 1'")

        assert error.message == "No results for address 'Floriańska 1'"
        assert error.public_message == "No results found"
