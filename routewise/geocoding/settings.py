"""
Configuration for the geocoding layer using Pydantic Settings.

``GeocodingSettings`` reads raw values from the environment (and ``.env``).
``get_config()`` resolves them once into an immutable ``GeocodingConfig``
that every request in the process observes; ``reload_config()`` replaces it
with a single reference swap.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, SecretStr, ValidationError
from pydantic_settings import BaseSettings

from .models import ProviderType

logger = logging.getLogger(__name__)

# Names accepted in GEOCODING_PROVIDER besides the canonical enum values
_PROVIDER_ALIASES = {
    "google": ProviderType.GOOGLE_MAPS,
    "google_maps": ProviderType.GOOGLE_MAPS,
    "googlemaps": ProviderType.GOOGLE_MAPS,
    "osm": ProviderType.NOMINATIM,
}


class GeocodingSettings(BaseSettings):
    """
    Raw geocoding settings.

    Uses Pydantic Settings to load and validate configuration from
    environment variables with proper type checking and defaults.
    """

    # Geocoding provider configuration
    geocoding_provider: Optional[str] = Field(
        default=None,
        alias="GEOCODING_PROVIDER",
        description="Active geocoding provider (mock, google-maps, nominatim). "
                    "Defaults to google-maps when a key is present, else nominatim"
    )
    google_maps_api_key: Optional[SecretStr] = Field(
        default=None,
        alias="GOOGLE_MAPS_API_KEY",
        description="Google Maps API key (required when using the google-maps provider)"
    )
    geocoding_fallback_to_mock: bool = Field(
        default=True,
        alias="GEOCODING_FALLBACK_TO_MOCK",
        description="Substitute the mock provider when the active one is unavailable"
    )
    geocoding_request_timeout: float = Field(
        default=10.0,
        gt=0,
        alias="GEOCODING_REQUEST_TIMEOUT",
        description="Upper bound in seconds for a single provider call"
    )

    # Nominatim settings
    nominatim_user_agent: str = Field(
        default="routewise-api/1.0",
        alias="NOMINATIM_USER_AGENT",
        description="User agent for Nominatim requests (required by its usage policy)"
    )
    nominatim_domain: str = Field(
        default="nominatim.openstreetmap.org",
        alias="NOMINATIM_DOMAIN",
        description="Nominatim host"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "",
        "extra": "ignore",
        "populate_by_name": True,
    }


class GeocodingConfig(BaseModel):
    """
    Resolved, immutable geocoding configuration.

    ``deficiency`` is set when the active provider lacks a prerequisite
    (e.g. a missing API key). Resolution never fails; the manager applies
    the fallback policy instead.
    """
    provider: ProviderType
    google_maps_api_key: Optional[SecretStr] = None
    fallback_to_mock: bool = True
    request_timeout: float = 10.0
    nominatim_user_agent: str = "routewise-api/1.0"
    nominatim_domain: str = "nominatim.openstreetmap.org"
    deficiency: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def has_google_maps_key(self) -> bool:
        """Whether a non-empty Google Maps key is configured."""
        if self.google_maps_api_key is None:
            return False
        return bool(self.google_maps_api_key.get_secret_value().strip())

    @property
    def is_provider_configured(self) -> bool:
        """Whether the active provider has everything it needs."""
        return self.deficiency is None


def _parse_provider(name: str) -> Optional[ProviderType]:
    normalized = name.strip().lower()
    if normalized in _PROVIDER_ALIASES:
        return _PROVIDER_ALIASES[normalized]
    try:
        return ProviderType(normalized)
    except ValueError:
        return None


_FALLBACK_VARIABLE = "GEOCODING_FALLBACK_TO_MOCK"


def resolve_config(settings: GeocodingSettings, invalid_variables: Sequence[str] = ()) -> GeocodingConfig:
    """
    Turn raw settings into a GeocodingConfig.

    Args:
        settings: Raw settings instance
        invalid_variables: Environment variables that failed validation and
            were replaced by their defaults

    Returns:
        Resolved configuration, possibly carrying a deficiency
    """
    key = settings.google_maps_api_key
    has_key = key is not None and bool(key.get_secret_value().strip())
    deficiency = None

    # An unreadable fallback flag never permits mock data
    fallback_to_mock = settings.geocoding_fallback_to_mock and _FALLBACK_VARIABLE not in invalid_variables

    if settings.geocoding_provider and settings.geocoding_provider.strip():
        provider = _parse_provider(settings.geocoding_provider)
        if provider is None:
            available = ", ".join(p.value for p in ProviderType)
            logger.error(
                f"Invalid geocoding provider '{settings.geocoding_provider}'. "
                f"Available providers: {available}"
            )
            provider = ProviderType.MOCK
            if not fallback_to_mock:
                deficiency = f"Unknown geocoding provider '{settings.geocoding_provider}'"
    else:
        provider = ProviderType.GOOGLE_MAPS if has_key else ProviderType.NOMINATIM

    if provider == ProviderType.GOOGLE_MAPS and not has_key:
        deficiency = "GOOGLE_MAPS_API_KEY is required for the google-maps provider"

    if invalid_variables:
        deficiency = f"Invalid geocoding settings: {', '.join(invalid_variables)}"

    if deficiency:
        logger.warning(f"⚠️ Geocoding provider '{provider.value}' is not usable: {deficiency}")

    return GeocodingConfig(
        provider=provider,
        google_maps_api_key=key if has_key else None,
        fallback_to_mock=fallback_to_mock,
        request_timeout=settings.geocoding_request_timeout,
        nominatim_user_agent=settings.nominatim_user_agent,
        nominatim_domain=settings.nominatim_domain,
        deficiency=deficiency,
    )


def _invalid_variables(error: ValidationError) -> List[str]:
    """Environment variable names of the fields that failed validation."""
    by_key = {}
    for name, field in GeocodingSettings.model_fields.items():
        by_key[name.lower()] = field.alias
        by_key[field.alias.lower()] = field.alias

    invalid = []
    for detail in error.errors():
        location = detail.get("loc") or ()
        variable = by_key.get(str(location[0]).lower()) if location else None
        if variable and variable not in invalid:
            invalid.append(variable)
    return invalid


def _read_settings() -> Tuple[GeocodingSettings, List[str]]:
    """
    Read settings from the environment without raising.

    Invalid values are replaced by their field defaults and reported by
    variable name only, since a value may be the API key.
    """
    try:
        return GeocodingSettings(), []
    except ValidationError as e:
        invalid = _invalid_variables(e)

    all_variables = [field.alias for field in GeocodingSettings.model_fields.values()]
    if invalid:
        overrides = {
            field.alias: field.default
            for field in GeocodingSettings.model_fields.values()
            if field.alias in invalid
        }
        try:
            settings = GeocodingSettings(**overrides)
        except ValidationError:
            settings, invalid = GeocodingSettings.model_construct(), all_variables
    else:
        settings, invalid = GeocodingSettings.model_construct(), all_variables

    logger.error(f"Invalid geocoding settings, using defaults for: {', '.join(invalid)}")
    return settings, invalid


# Global settings instance
_settings: Optional[GeocodingSettings] = None

# Global resolved configuration; replaced only by whole-object assignment
_config: Optional[GeocodingConfig] = None


def get_settings() -> GeocodingSettings:
    """
    Get global settings instance (singleton pattern).

    Returns:
        GeocodingSettings instance, with defaults in place of invalid values
    """
    global _settings
    if _settings is None:
        _settings, _ = _read_settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings and the resolved config (useful for testing)."""
    global _settings, _config
    _settings = None
    _config = None


def _load_config() -> GeocodingConfig:
    settings, invalid = _read_settings()
    config = resolve_config(settings, invalid)
    logger.info(
        f"Geocoding configured: provider={config.provider.value}, "
        f"has_google_maps_key={config.has_google_maps_key}, "
        f"fallback_to_mock={config.fallback_to_mock}, "
        f"configured={config.is_provider_configured}"
    )
    return config


def get_config() -> GeocodingConfig:
    """
    Get the process-wide geocoding configuration.

    The environment is read on first access only; later calls return the
    same object. Never raises.
    """
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def reload_config() -> GeocodingConfig:
    """Re-read the environment and atomically replace the configuration."""
    global _config
    new_config = _load_config()
    _config = new_config
    return new_config


def reset_config() -> None:
    """Drop the cached configuration (useful for testing)."""
    global _config
    _config = None
