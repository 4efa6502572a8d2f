"""
Configuration management for the Plessey decoder.
"""

from plessey.config.logging import configure_logging
from plessey.config.settings import DecoderSettings, get_settings

__all__ = ["DecoderSettings", "configure_logging", "get_settings"]
