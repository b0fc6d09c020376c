"""Basic logging configuration."""

import logging


def configure_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application."""
    # Uvicorn keeps its own config for access logs
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
