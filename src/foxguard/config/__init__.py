"""Configuration for foxguard."""

from .config_loader import ConfigError, ConfigLoader, ConfigParsingError
from .config_schema import AppConfigSchema, CheckSchema

__all__ = ["AppConfigSchema", "CheckSchema", "ConfigError", "ConfigLoader", "ConfigParsingError"]
