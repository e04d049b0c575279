import uvicorn

from routewise.config.logging_setup import get_logger, setup_logging
from routewise.config.settings import get_app_settings

setup_logging()

logger = get_logger(__name__)


def main():
    """Start the API server locally."""
    settings = get_app_settings()
    host = settings.routewise_host
    port = settings.routewise_port

    logger.info(f"Starting API on http://{host}:{port}")

    uvicorn.run(
        "routewise.main:app",
        host=host,
        port=port,
        log_config=None  # Keep the configuration set up above
    )


if __name__ == "__main__":
    main()
