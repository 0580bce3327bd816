"""
Configuration management for the Code128 codec.
"""

from feather_code.config.logging_setup import configure_logging
from feather_code.config.settings import Settings, get_settings

__all__ = ["Settings", "configure_logging", "get_settings"]
