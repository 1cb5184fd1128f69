"""
ulidkit config package public API.

Loads ``ulidkit.toml`` plus ``ULIDKIT_`` env overrides and validates the result,
failing with every issue listed at once.
"""

from ulidkit.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_FIELDS,
    ENV_PREFIX,
    ConfigLoadError,
    dump_effective_config,
    env_overrides,
    env_var_name,
    load_config,
)
from ulidkit.config.schema import (
    CLOCK_CHOICES,
    CONTEXT_CHOICES,
    DEFAULT_CONFIG,
    LOG_LEVELS,
    ConfigSchemaVersion,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    UlidkitConfig,
    assert_valid_config,
    default_config,
    merge_config,
    migration_guidance,
    validate_config,
)

__all__ = [
    "CLOCK_CHOICES",
    "CONTEXT_CHOICES",
    "ConfigLoadError",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_FIELDS",
    "ENV_PREFIX",
    "LOG_LEVELS",
    "UlidkitConfig",
    "assert_valid_config",
    "default_config",
    "dump_effective_config",
    "env_overrides",
    "env_var_name",
    "load_config",
    "merge_config",
    "migration_guidance",
    "validate_config",
]
