"""Typed configuration key definitions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConfigType(Enum):
    """Value types a config key may declare."""

    INT = "int"
    STRING = "string"
    JSON = "json"


@dataclass(frozen=True)
class ConfigKey:
    """
    One entry of the config schema.

    Attributes:
        key: Dot-notation name, e.g. "matching.ambiguity_margin"
        config_type: Type the raw value is converted to
        required: Required keys have no default and must be supplied
        default: Value for an absent optional key
        description: What the key controls
        min_value: Lower bound for numeric keys
        max_value: Upper bound for numeric keys
        validator: Extra predicate the converted value must satisfy
    """

    key: str
    config_type: ConfigType
    required: bool = True
    default: Any = None
    description: str = ""
    min_value: float | None = None
    max_value: float | None = None
    validator: Callable[[Any], bool] | None = None

    def validate(self, value: Any) -> str | None:
        """Check a converted value, returning an error message or None."""
        if self.config_type is ConfigType.INT:
            if self.min_value is not None and value < self.min_value:
                return f"must be >= {self.min_value:g}, got {value}"
            if self.max_value is not None and value > self.max_value:
                return f"must be <= {self.max_value:g}, got {value}"

        if self.validator is not None and not self.validator(value):
            return f"{value!r} is not a valid {self.config_type.value} for this key"

        return None
