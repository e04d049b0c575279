"""
Application settings outside the geocoding layer.

Authentication, agent and server values live here so that a malformed
value in one of them never changes how geocoding is configured.
"""

from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """
    API-level settings loaded from environment variables and ``.env``.
    """

    # Authentication
    jwt_secret_key: SecretStr = Field(
        default=SecretStr("dev-secret-change-me"),
        alias="JWT_SECRET_KEY",
        description="Secret used to verify bearer tokens"
    )
    jwt_algorithm: str = Field(
        default="HS256",
        alias="JWT_ALGORITHM",
        description="JWT signing algorithm"
    )

    # Agent
    agent_driver_id: str = Field(
        default="driver-123",
        alias="AGENT_DRIVER_ID",
        description="Driver identity used by the agent test endpoint"
    )

    # Server configuration
    routewise_host: str = Field(
        default="127.0.0.1",
        alias="ROUTEWISE_HOST",
        description="API server host"
    )
    routewise_port: int = Field(
        default=8000,
        alias="ROUTEWISE_PORT",
        description="API server port"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "env_prefix": "",
        "extra": "ignore",
        "populate_by_name": True,
    }


# Global settings instance
_app_settings: Optional[AppSettings] = None


def get_app_settings() -> AppSettings:
    """
    Get global application settings instance (singleton pattern).

    Returns:
        Validated AppSettings instance
    """
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def reset_app_settings() -> None:
    """Reset global application settings (useful for testing)."""
    global _app_settings
    _app_settings = None
