"""
ulidkit — configuration schema.

``ulidkit.toml`` has three fixed tables. Each known field is described once in
``_FIELDS``; validation walks that table and collects every problem as a
``ConfigValidationIssue`` instead of stopping at the first one.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, Literal, TypedDict

from ulidkit.constants import CONFIG_SCHEMA_VERSION

ConfigSchemaVersion: Final[int] = CONFIG_SCHEMA_VERSION

CLOCK_CHOICES: Final[tuple[str, ...]] = ("wall", "anchored_monotonic")
CONTEXT_CHOICES: Final[tuple[str, ...]] = ("thread_local", "locked", "single")
LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


class MetaConfig(TypedDict):
    schema_version: int


class GeneratorConfig(TypedDict):
    clock: Literal["wall", "anchored_monotonic"]
    context: Literal["thread_local", "locked", "single"]


class ObservabilityConfig(TypedDict):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"]
    log_dir: str
    log_to_stdout: bool
    metrics_enabled: bool


class UlidkitConfig(TypedDict):
    meta: MetaConfig
    generator: GeneratorConfig
    observability: ObservabilityConfig


DEFAULT_CONFIG: Final[UlidkitConfig] = {
    "meta": {"schema_version": ConfigSchemaVersion},
    "generator": {"clock": "wall", "context": "thread_local"},
    "observability": {
        "log_level": "INFO",
        "log_dir": "logs/",
        "log_to_stdout": False,
        "metrics_enabled": True,
    },
}


@dataclass(frozen=True, slots=True)
class _Field:
    kind: type
    choices: tuple[str, ...] = ()
    fold_case: bool = False


_FIELDS: Final[dict[str, dict[str, _Field]]] = {
    "meta": {"schema_version": _Field(int)},
    "generator": {
        "clock": _Field(str, CLOCK_CHOICES),
        "context": _Field(str, CONTEXT_CHOICES),
    },
    "observability": {
        "log_level": _Field(str, LOG_LEVELS, fold_case=True),
        "log_dir": _Field(str),
        "log_to_stdout": _Field(bool),
        "metrics_enabled": _Field(bool),
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Normalized config (``None`` when invalid) plus every issue found."""

    config: dict[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return not self.issues


class ConfigValidationError(ValueError):
    """Raised by :func:`assert_valid_config`; ``issues`` holds the details."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        lines = [f"  {issue.path}: {issue.message}" for issue in self.issues]
        super().__init__("\n".join([f"{len(self.issues)} config issue(s):", *lines]))


def default_config() -> UlidkitConfig:
    return copy.deepcopy(DEFAULT_CONFIG)


def migration_guidance(found_version: int) -> str:
    """Explain what to upgrade when ``schema_version`` is not the supported one."""
    if found_version < ConfigSchemaVersion:
        return (
            f"schema_version {found_version} predates {ConfigSchemaVersion}; "
            "rewrite ulidkit.toml for the current layout"
        )
    if found_version > ConfigSchemaVersion:
        return (
            f"schema_version {found_version} is newer than {ConfigSchemaVersion}; "
            "install a newer ulidkit"
        )
    return "schema_version is current"


def merge_config(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new nested dict with ``overlay`` tables merged into ``base`` tables."""
    merged: dict[str, Any] = {}
    for key, value in base.items():
        merged[key] = merge_config(value, {}) if isinstance(value, Mapping) else value
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(value, Mapping):
            merged[key] = merge_config(current if isinstance(current, Mapping) else {}, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def validate_config(config: object) -> ConfigValidationResult:
    issues: list[ConfigValidationIssue] = []

    def report(path: str, message: str) -> None:
        issues.append(ConfigValidationIssue(path, message))

    if not isinstance(config, Mapping):
        report("<root>", f"expected a table, got {type(config).__name__}")
        return ConfigValidationResult(None, tuple(issues))

    normalized: dict[str, Any] = {}
    for section in sorted(set(config) - set(_FIELDS), key=str):
        report(str(section), "unknown field")
    for section, fields in _FIELDS.items():
        if section not in config:
            report(section, "missing required field")
            continue
        table = config[section]
        if not isinstance(table, Mapping):
            report(section, f"expected a table, got {type(table).__name__}")
            continue
        for key in sorted(set(table) - set(fields), key=str):
            report(f"{section}.{key}", "unknown field")
        out: dict[str, Any] = {}
        for key, field in fields.items():
            path = f"{section}.{key}"
            if key not in table:
                report(path, "missing required field")
                continue
            value, problem = _check(table[key], field)
            if problem is not None:
                report(path, problem)
            else:
                out[key] = value
        normalized[section] = out

    version = normalized.get("meta", {}).get("schema_version")
    if version is not None and version != ConfigSchemaVersion:
        report("meta.schema_version", migration_guidance(version))

    if issues:
        return ConfigValidationResult(None, tuple(issues))
    return ConfigValidationResult(normalized, ())


def assert_valid_config(config: object) -> dict[str, Any]:
    result = validate_config(config)
    if result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


def _check(value: object, field: _Field) -> tuple[object, str | None]:
    # bool is an int subclass; an int field must not accept true/false.
    if not isinstance(value, field.kind) or (field.kind is int and isinstance(value, bool)):
        return None, f"expected {field.kind.__name__}, got {type(value).__name__}"
    if not isinstance(value, str):
        return value, None
    text = value.strip().upper() if field.fold_case else value.strip()
    if not text:
        return None, "must not be empty"
    if field.choices and text not in field.choices:
        return None, f"must be one of {', '.join(field.choices)}; got {text!r}"
    return text, None


__all__ = [
    "CLOCK_CHOICES",
    "CONTEXT_CHOICES",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "GeneratorConfig",
    "LOG_LEVELS",
    "MetaConfig",
    "ObservabilityConfig",
    "UlidkitConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "migration_guidance",
    "validate_config",
]
