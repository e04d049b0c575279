"""
Pytest configuration and shared fixtures.

Every test runs with the geocoding environment variables cleared and the
settings, resolved config and global manager reset, so no test observes
another test's configuration.
"""

import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest
from pydantic import SecretStr

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from routewise.config.settings import reset_app_settings
from routewise.geocoding.manager import reset_manager
from routewise.geocoding.models import GeoPoint, ProviderType
from routewise.geocoding.settings import GeocodingConfig, reset_settings

MANAGED_ENV_VARS = [
    "GEOCODING_PROVIDER",
    "GOOGLE_MAPS_API_KEY",
    "GEOCODING_FALLBACK_TO_MOCK",
    "GEOCODING_REQUEST_TIMEOUT",
    "NOMINATIM_USER_AGENT",
    "NOMINATIM_DOMAIN",
    "JWT_SECRET_KEY",
    "JWT_ALGORITHM",
    "AGENT_DRIVER_ID",
    "ROUTEWISE_HOST",
    "ROUTEWISE_PORT",
]


@pytest.fixture(autouse=True)
def isolated_environment():
    """Clear managed env vars and reset global state around each test."""
    with patch.dict(os.environ, {}):
        for key in MANAGED_ENV_VARS:
            os.environ.pop(key, None)
        reset_settings()
        reset_app_settings()
        reset_manager()
        yield
    reset_settings()
    reset_app_settings()
    reset_manager()


@pytest.fixture
def set_env():
    """Set environment variables and reset settings to pick them up."""

    def _set(**values):
        for key, value in values.items():
            os.environ[key] = value
        reset_settings()
        reset_app_settings()
        reset_manager()

    return _set


def make_config(**overrides) -> GeocodingConfig:
    """Build a resolved config directly, bypassing the environment."""
    values = {
        "provider": ProviderType.MOCK,
        "google_maps_api_key": None,
        "fallback_to_mock": True,
        "request_timeout": 5.0,
        "deficiency": None,
    }
    values.update(overrides)
    key = values.get("google_maps_api_key")
    if isinstance(key, str):
        values["google_maps_api_key"] = SecretStr(key)
    return GeocodingConfig(**values)


@pytest.fixture
def sample_points():
    """Provide sample points for testing."""
    return {
        'krakow': GeoPoint(latitude=50.0614, longitude=19.9366),
        'new_york': GeoPoint(latitude=40.7128, longitude=-74.0060),
        'sao_paulo': GeoPoint(latitude=-23.5505, longitude=-46.6333),
    }


class AsyncContextManagerMock:
    """Helper for mocking async context managers."""

    def __init__(self, mock_obj):
        self.mock_obj = mock_obj

    async def __aenter__(self):
        return self.mock_obj

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass


def make_http_client(payload=None, json_side_effect=None, raise_for_status=None, get_side_effect=None):
    """Mock httpx.AsyncClient whose get() returns a canned response."""
    mock_response = Mock()
    mock_response.status_code = 200
    mock_response.raise_for_status = Mock(side_effect=raise_for_status)
    if json_side_effect is not None:
        mock_response.json = Mock(side_effect=json_side_effect)
    else:
        mock_response.json = Mock(return_value=payload)

    mock_client = AsyncMock()
    if get_side_effect is not None:
        mock_client.get = AsyncMock(side_effect=get_side_effect)
    else:
        mock_client.get = AsyncMock(return_value=mock_response)
    return mock_client


@pytest.fixture
def config_factory():
    """Provide make_config to tests."""
    return make_config


@pytest.fixture
def http_client_factory():
    """Provide make_http_client to tests."""
    return make_http_client


@pytest.fixture
def patch_http_client():
    """Patch a provider's _get_http_client to yield the given mock client."""

    def _patch(provider, mock_client):
        return patch.object(
            provider, '_get_http_client', return_value=AsyncContextManagerMock(mock_client)
        )

    return _patch
