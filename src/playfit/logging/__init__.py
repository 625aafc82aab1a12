"""Structured logging module for playfit.

Provides configurable logging with JSON format support and file rotation.
"""

from playfit.logging.config import configure_logging
from playfit.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "configure_logging",
]
