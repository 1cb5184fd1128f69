"""
ulidkit — runtime config loader.

Layers, lowest first: built-in defaults, ``ulidkit.toml``, ``ULIDKIT_*``
environment variables, explicit overrides. The result is validated and
``observability.log_dir`` is resolved against the config file's directory.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from ulidkit.config.schema import assert_valid_config, default_config, merge_config

DEFAULT_CONFIG_FILE: Final[str] = "ulidkit.toml"
ENV_PREFIX: Final[str] = "ULIDKIT_"

# (section, key, type) for every field that may come from the environment.
ENV_FIELDS: Final[tuple[tuple[str, str, type], ...]] = (
    ("generator", "clock", str),
    ("generator", "context", str),
    ("observability", "log_level", str),
    ("observability", "log_dir", str),
    ("observability", "log_to_stdout", bool),
    ("observability", "metrics_enabled", bool),
)

_TRUE_WORDS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


class ConfigLoadError(ValueError):
    """The config file is unreadable, or an env value / override is malformed."""


def load_config(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the validated effective config.

    Without ``config_path``, ``./ulidkit.toml`` is read if present. ``overrides``
    takes ``"section.key"`` names or whole ``{"section": {...}}`` tables.
    """
    if config_path is None:
        path = Path.cwd().resolve() / DEFAULT_CONFIG_FILE
        from_file = _read_toml(path) if path.is_file() else {}
    else:
        path = Path(config_path).expanduser().resolve()
        if not path.is_file():
            raise ConfigLoadError(f"config file not found: {path}")
        from_file = _read_toml(path)

    env = os.environ if environ is None else environ
    config = merge_config(default_config(), from_file)
    config = merge_config(config, env_overrides(env))
    config = merge_config(config, _override_tables(overrides or {}))
    config = assert_valid_config(config)

    observability = config["observability"]
    observability["log_dir"] = _resolve_dir(observability["log_dir"], path.parent)
    return config


def env_var_name(section: str, key: str) -> str:
    return f"{ENV_PREFIX}{section}_{key}".upper()


def env_overrides(environ: Mapping[str, str]) -> dict[str, dict[str, object]]:
    """Collect the ``ENV_FIELDS`` present in ``environ`` as config tables."""
    tables: dict[str, dict[str, object]] = {}
    for section, key, kind in ENV_FIELDS:
        name = env_var_name(section, key)
        raw = environ.get(name)
        if raw is None:
            continue
        tables.setdefault(section, {})[key] = _parse_bool(name, raw) if kind is bool else raw
    return tables


def dump_effective_config(config: Mapping[str, object]) -> str:
    return json.dumps(config, sort_keys=True, separators=(",", ":"))


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"{path} is not valid TOML: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"cannot read {path}: {exc}") from exc


def _parse_bool(name: str, raw: str) -> bool:
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ConfigLoadError(f"{name}={raw!r} is not a boolean (use true/false, yes/no, on/off, 1/0)")


def _override_tables(overrides: Mapping[str, object]) -> dict[str, Any]:
    tables: dict[str, Any] = {}
    for name, value in overrides.items():
        section, dot, key = name.partition(".")
        if not dot:
            if not isinstance(value, Mapping):
                raise ConfigLoadError(f"override {name!r} must be 'section.key' or a table")
            tables = merge_config(tables, {section: value})
        elif section and key and "." not in key:
            tables = merge_config(tables, {section: {key: value}})
        else:
            raise ConfigLoadError(f"override {name!r} must be 'section.key' or a table")
    return tables


def _resolve_dir(raw: str, base_dir: Path) -> str:
    candidate = Path(os.path.expandvars(raw)).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return Path(os.path.normpath(candidate)).as_posix()


__all__ = [
    "ConfigLoadError",
    "DEFAULT_CONFIG_FILE",
    "ENV_FIELDS",
    "ENV_PREFIX",
    "dump_effective_config",
    "env_overrides",
    "env_var_name",
    "load_config",
]
