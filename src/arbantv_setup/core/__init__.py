"""Core setup utilities.

This module exports configuration and logging helpers for use throughout the package.
"""

from arbantv_setup.core.config import Settings, get_settings
from arbantv_setup.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
]
