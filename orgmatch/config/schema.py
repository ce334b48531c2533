"""Configuration schema registry.

Defines all valid configuration keys with their types and validation rules.
This is the single source of truth for configuration structure.
"""

from __future__ import annotations

from typing import Any

from .types import ConfigKey, ConfigType


def _is_label_table(value: Any) -> bool:
    """Department label tables map leader names to department labels."""
    return isinstance(value, dict) and all(isinstance(k, str) and isinstance(v, str) for k, v in value.items())


def _is_domain(value: Any) -> bool:
    return isinstance(value, str) and bool(value) and "@" not in value and " " not in value


# =============================================================================
# CONFIGURATION SCHEMA REGISTRY
#
# All configuration keys must be defined here. Unknown keys will be rejected.
# Required keys must exist in the config file - there are no hardcoded defaults.
# =============================================================================

CONFIG_SCHEMA: dict[str, ConfigKey] = {
    # =========================================================================
    # IDENTITY
    # =========================================================================
    "identity.domain": ConfigKey(
        key="identity.domain",
        config_type=ConfigType.STRING,
        required=True,
        description="Email domain appended to generated canonical identifiers",
        validator=_is_domain,
    ),
    # =========================================================================
    # MATCHING - Resolver thresholds
    # =========================================================================
    "matching.auto_accept_threshold": ConfigKey(
        key="matching.auto_accept_threshold",
        config_type=ConfigType.INT,
        required=False,
        default=80,
        description="Minimum fuzzy similarity for auto-matching without review",
        min_value=0,
        max_value=100,
    ),
    "matching.ambiguity_margin": ConfigKey(
        key="matching.ambiguity_margin",
        config_type=ConfigType.INT,
        required=False,
        default=10,
        description="Points the top fuzzy candidate must lead the runner-up by",
        min_value=0,
        max_value=100,
    ),
    "matching.candidate_floor": ConfigKey(
        key="matching.candidate_floor",
        config_type=ConfigType.INT,
        required=False,
        default=50,
        description="Minimum similarity for a directory entry to be listed as a candidate",
        min_value=0,
        max_value=100,
    ),
    "matching.max_candidates": ConfigKey(
        key="matching.max_candidates",
        config_type=ConfigType.INT,
        required=False,
        default=5,
        description="Candidates attached to a needs-resolution result",
        min_value=1,
    ),
    "matching.variant_similarity": ConfigKey(
        key="matching.variant_similarity",
        config_type=ConfigType.INT,
        required=False,
        default=95,
        description="Similarity reported for generated-variant matches",
        min_value=0,
        max_value=100,
    ),
    # =========================================================================
    # DIRECTORY - Department attribution
    # =========================================================================
    "directory.root_department": ConfigKey(
        key="directory.root_department",
        config_type=ConfigType.STRING,
        required=False,
        default="Executive",
        description="Department label given to the organization lead",
    ),
    "directory.department_labels": ConfigKey(
        key="directory.department_labels",
        config_type=ConfigType.JSON,
        required=False,
        default={},
        description=(
            "Leader name -> department label. Covers departments named after a person, "
            "co-run departments and headless departments where a deputy stands in. "
            "Entries go stale silently when the named people leave."
        ),
        validator=_is_label_table,
    ),
}


def get_all_required_keys() -> list[str]:
    """Get list of all required config keys."""
    return [key for key, schema in CONFIG_SCHEMA.items() if schema.required]


def validate_key(key: str, value: Any) -> str | None:
    """
    Validate a value for a config key.

    Args:
        key: The config key
        value: The value to validate

    Returns:
        None if valid, error message if invalid
    """
    schema = CONFIG_SCHEMA.get(key)
    if schema is None:
        return f"Unknown config key: {key}"
    return schema.validate(value)
