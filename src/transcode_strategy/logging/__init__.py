"""Logging setup with text and JSON output and file rotation."""

from transcode_strategy.logging.config import configure_logging
from transcode_strategy.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
