"""
Logging utilities for the broker application.

Provides a consistent logging format and configuration.
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    # uvicorn logs every request on its own; the request pipeline already does.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
