"""
Error taxonomy for the geocoding layer.

Providers normalize every failure into one of these exceptions before it
reaches the manager. The manager decides fallback eligibility from the
exception class alone, never from the message text.
"""

from enum import Enum
from typing import Optional


class GeocodingErrorKind(Enum):
    """Normalized failure kinds."""
    INVALID_INPUT = "invalid_input"
    NO_MATCH = "no_match"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    UNSUPPORTED_OPERATION = "unsupported_operation"
    INTERNAL_FAILURE = "internal_failure"


class GeocodingError(Exception):
    """
    Base class for geocoding failures.

    ``message`` is meant for logs. ``public_message`` is the fixed text that
    may be returned to API callers; it never contains upstream error bodies
    or credentials.
    """

    kind: GeocodingErrorKind = GeocodingErrorKind.INTERNAL_FAILURE
    status_code: int = 500
    public_message: str = "Geocoding failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.public_message
        super().__init__(self.message)


class InvalidInputError(GeocodingError):
    """Caller-supplied data violates a precondition."""
    kind = GeocodingErrorKind.INVALID_INPUT
    status_code = 400
    public_message = "Invalid geocoding input"


class NoMatchError(GeocodingError):
    """The backend understood the request but found nothing."""
    kind = GeocodingErrorKind.NO_MATCH
    status_code = 404
    public_message = "No results found"


class ProviderUnavailableError(GeocodingError):
    """The backend could not be reached or used (transient or misconfigured)."""
    kind = GeocodingErrorKind.PROVIDER_UNAVAILABLE
    status_code = 503
    public_message = "Geocoding provider unavailable"


class UnsupportedOperationError(GeocodingError):
    """The active provider is not registered for the requested capability."""
    kind = GeocodingErrorKind.UNSUPPORTED_OPERATION
    status_code = 501
    public_message = "Operation not supported by the current geocoding provider"


class InternalFailureError(GeocodingError):
    """Anything unexpected that could not be normalized to another kind."""
    kind = GeocodingErrorKind.INTERNAL_FAILURE
    status_code = 500
    public_message = "Geocoding failed"
