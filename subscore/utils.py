"""Shared utility functions for Subscore API."""

import logging
from datetime import datetime, UTC


def now_utc() -> datetime:
    """Get current UTC time (timezone-aware)."""
    return datetime.now(UTC)


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level name used when not verbose.
        verbose: If True, force DEBUG level.
    """
    resolved = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
