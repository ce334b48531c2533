"""
Configuration management for the identity engine.

Fast-fail typed configuration loaded from a JSON config file, with
ORGMATCH_* environment variable overrides.

Usage:
    from orgmatch.config import ConfigLoader, ConfigError

    # Initialize at process startup
    ConfigLoader.initialize(config_path="orgmatch.json")

    # Get singleton instance
    config = ConfigLoader.get_instance()

    # Typed accessors
    threshold = config.get_int("matching.auto_accept_threshold")
    domain = config.get_str("identity.domain")
"""

from __future__ import annotations

from .errors import (
    ConfigError,
    ConfigFileError,
    MissingKeyError,
    UnknownKeyError,
    ValidationError,
)
from .loader import ConfigLoader
from .schema import CONFIG_SCHEMA, get_all_required_keys, validate_key
from .types import ConfigKey, ConfigType

__all__ = [
    # Main loader
    "ConfigLoader",
    # Error classes
    "ConfigError",
    "ConfigFileError",
    "MissingKeyError",
    "ValidationError",
    "UnknownKeyError",
    # Schema
    "CONFIG_SCHEMA",
    "ConfigKey",
    "ConfigType",
    "get_all_required_keys",
    "validate_key",
]
