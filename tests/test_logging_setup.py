"""
Tests for the YAML logging configuration.
"""

import logging
from pathlib import Path

import yaml

from routewise.config import logging_setup
from routewise.config.logging_setup import get_logger, setup_logging

CONFIG_PATH = Path(logging_setup.__file__).parent / "logging_config.yaml"


class TestLoggingConfig:
    """Test the shipped configuration file."""

    def test_config_file_is_valid_yaml(self):
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        assert config["version"] == 1
        assert "request_id" in config["filters"]
        assert "routewise" in config["loggers"]

    def test_httpx_is_kept_quiet(self):
        """Request URLs carry the Maps API key, so httpx must not log them at INFO."""
        with open(CONFIG_PATH, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        assert config["loggers"]["httpx"]["level"] == "WARNING"


class TestSetupLogging:
    """Test setup_logging fallbacks."""

    def test_missing_file_falls_back_to_basic_config(self, tmp_path):
        setup_logging(config_path=str(tmp_path / "missing.yaml"))

    def test_get_logger_returns_named_logger(self):
        logger = get_logger("routewise.test")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "routewise.test"
