"""Configuration module for scengrid."""

from scengrid.config.loader import configure_logging, load_config
from scengrid.config.schema import Config
from scengrid.config.validator import ConfigValidator

__all__ = ["Config", "ConfigValidator", "configure_logging", "load_config"]
