"""
ConfigLoader - Unified fast-fail configuration management.

Loads configuration from a JSON config file with environment variable
overrides. No silent fallbacks for required keys - fails immediately on
missing/invalid config. Optional keys fall back to their schema default.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any, cast

from .errors import (
    ConfigError,
    ConfigFileError,
    MissingKeyError,
    UnknownKeyError,
    ValidationError,
)
from .schema import CONFIG_SCHEMA, get_all_required_keys
from .types import ConfigType

logger = logging.getLogger(__name__)

ENV_PREFIX = "ORGMATCH_"


class ConfigLoader:
    """
    Unified configuration loader with fast-fail behavior.

    Usage:
        # Initialize at process startup (validates all keys)
        ConfigLoader.initialize(config_path="orgmatch.json")

        # Get singleton instance
        loader = ConfigLoader.get_instance()

        # Typed accessors
        threshold = loader.get_int("matching.auto_accept_threshold")
        labels = loader.get_json("directory.department_labels")

        # Test substitution
        with ConfigLoader.use(ConfigLoader({"identity.domain": "x.com"})):
            pass
    """

    _instance: ConfigLoader | None = None
    _initialized: bool = False

    def __init__(self, values: Mapping[str, Any] | None = None, source: str = "<memory>"):
        """
        Initialize the config loader.

        Args:
            values: Flat mapping of dot-notation keys to raw values.
            source: Where the values came from, for error messages.

        Raises:
            UnknownKeyError: If any supplied key is not in the schema
        """
        raw = dict(values or {})
        unknown = sorted(key for key in raw if key not in CONFIG_SCHEMA)
        if unknown:
            raise UnknownKeyError(f"Unknown config keys in {source}: {unknown}")

        self._raw = raw
        self._source = source
        self._cache: dict[str, Any] = {}
        self._validated = False

    @classmethod
    def from_file(cls, path: str | Path) -> ConfigLoader:
        """
        Build a loader from a JSON config file.

        The file holds either a flat object of dot-notation keys or nested
        objects ({"matching": {"ambiguity_margin": 10}}); both are flattened.

        Raises:
            ConfigFileError: If the file is missing or not valid JSON
        """
        config_path = Path(path)
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ConfigFileError(f"Config file not found: {config_path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigFileError(f"Could not read config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigFileError(f"Config file {config_path} must contain a JSON object")

        return cls(_flatten(data), source=str(config_path))

    @classmethod
    def initialize(
        cls,
        config_path: str | Path | None = None,
        validate_on_init: bool = True,
    ) -> ConfigLoader:
        """
        Initialize the singleton ConfigLoader.

        Args:
            config_path: JSON config file (defaults to Settings.config_path)
            validate_on_init: If True, validates every key up front

        Returns:
            The initialized ConfigLoader instance

        Raises:
            ConfigFileError: If the config file cannot be read
            ConfigError: If required keys are missing or values invalid
        """
        if cls._initialized:
            logger.debug("ConfigLoader already initialized, returning existing instance")
            return cls._instance  # type: ignore

        if config_path is None:
            from ..settings import get_settings

            config_path = get_settings().config_path

        instance = cls.from_file(config_path) if config_path else cls()

        if validate_on_init:
            instance.validate_all()

        cls._instance = instance
        cls._initialized = True
        logger.info(f"ConfigLoader initialized from {instance._source}")
        return instance

    @classmethod
    def get_instance(cls) -> ConfigLoader:
        """
        Get the singleton instance.

        Raises:
            ConfigError: If not initialized
        """
        if not cls._initialized or cls._instance is None:
            raise ConfigError("ConfigLoader not initialized - call ConfigLoader.initialize() first")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset singleton state. For testing only."""
        cls._instance = None
        cls._initialized = False

    @classmethod
    @contextmanager
    def use(cls, loader: ConfigLoader) -> Iterator[None]:
        """
        Temporarily replace the singleton with a custom loader.

        Useful for testing.

        Args:
            loader: The loader to use temporarily.
        """
        original = cls._instance
        original_initialized = cls._initialized
        cls._instance = loader
        cls._initialized = True
        try:
            yield
        finally:
            cls._instance = original
            cls._initialized = original_initialized

    def validate_all(self) -> None:
        """
        Validate every schema key: required keys present, all values valid.

        Raises:
            ConfigError: If any required keys are missing or invalid
        """
        missing_keys: list[str] = []
        invalid_values: list[str] = []

        for key in get_all_required_keys():
            if self._raw_value(key) is None:
                missing_keys.append(key)

        for key in CONFIG_SCHEMA:
            if key in missing_keys:
                continue
            try:
                self.get(key)
            except MissingKeyError:
                missing_keys.append(key)
            except ValidationError as e:
                invalid_values.append(str(e))

        if missing_keys or invalid_values:
            error_parts = []
            if missing_keys:
                error_parts.append(f"Missing required keys ({len(missing_keys)}): {missing_keys}")
            if invalid_values:
                error_parts.append(f"Invalid values ({len(invalid_values)}): {invalid_values}")

            raise ConfigError("Configuration validation failed.\n" + "\n".join(error_parts))

        self._validated = True
        logger.debug(f"Validated {len(CONFIG_SCHEMA)} config keys from {self._source}")

    def _get_env_key(self, key: str) -> str:
        """Convert dot notation to environment variable name."""
        # matching.ambiguity_margin -> ORGMATCH_MATCHING_AMBIGUITY_MARGIN
        return ENV_PREFIX + key.upper().replace(".", "_")

    def _raw_value(self, key: str) -> Any | None:
        env_value = os.environ.get(self._get_env_key(key))
        if env_value is not None:
            return env_value
        return self._raw.get(key)

    def get(self, key: str) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (e.g., "matching.auto_accept_threshold")

        Returns:
            The typed configuration value

        Raises:
            UnknownKeyError: If key is not in schema
            MissingKeyError: If a required key is absent
            ValidationError: If value fails validation
        """
        if key not in CONFIG_SCHEMA:
            raise UnknownKeyError(f"Unknown config key: '{key}'")

        if key in self._cache:
            return self._cache[key]

        schema = CONFIG_SCHEMA[key]
        raw_value = self._raw_value(key)

        if raw_value is None:
            if schema.required:
                raise MissingKeyError(f"Required config key '{key}' not found in {self._source}")
            typed_value = schema.default
        else:
            try:
                typed_value = self._convert_type(raw_value, schema.config_type)
            except (ValueError, TypeError) as e:
                raise ValidationError(f"Config key '{key}' has invalid type: {e}") from e

        error = schema.validate(typed_value)
        if error:
            raise ValidationError(f"Config key '{key}': {error}")

        self._cache[key] = typed_value
        return typed_value

    def get_int(self, key: str, default: int | None = None) -> int:
        """Get an integer config value."""
        try:
            return cast(int, self.get(key))
        except (MissingKeyError, UnknownKeyError):
            if default is not None:
                return default
            raise

    def get_str(self, key: str, default: str | None = None) -> str:
        """Get a string config value."""
        try:
            return cast(str, self.get(key))
        except (MissingKeyError, UnknownKeyError):
            if default is not None:
                return default
            raise

    def get_json(self, key: str) -> Any:
        """Get a JSON (dict/list) config value."""
        return self.get(key)

    def _convert_type(self, value: Any, config_type: ConfigType) -> Any:
        """Convert a raw value to the specified type."""
        if config_type == ConfigType.INT:
            if isinstance(value, bool):
                raise TypeError(f"expected int, got bool {value!r}")
            return int(value)
        elif config_type == ConfigType.STRING:
            return str(value)
        elif config_type == ConfigType.JSON:
            # Environment overrides arrive as JSON text
            if isinstance(value, str):
                return json.loads(value)
            return value
        else:
            return value

    def invalidate_cache(self, key: str | None = None) -> None:
        """
        Invalidate cached values.

        Args:
            key: Specific key to invalidate, or None for all
        """
        if key is None:
            self._cache.clear()
        elif key in self._cache:
            del self._cache[key]


def _flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested config objects into dot-notation keys.

    Nesting stops at schema keys so JSON-typed values (label tables) stay intact.
    """
    flat: dict[str, Any] = {}
    for name, value in data.items():
        key = f"{prefix}{name}"
        if isinstance(value, dict) and key not in CONFIG_SCHEMA:
            flat.update(_flatten(value, prefix=f"{key}."))
        else:
            flat[key] = value
    return flat
