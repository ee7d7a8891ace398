"""
beadtree.config - Configuration loading and defaults

Configuration is layered: built-in defaults, then the nearest
.beadtree.toml, then BEADTREE_<SECTION>_<KEY> environment variables.
Command-line flags are applied on top by the commands themselves.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from beadtree.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX


class ConfigError(ValueError):
    """Raised when a configuration file cannot be read or parsed."""


def find_config_file(start: Path) -> Path | None:
    """Find the nearest configuration file walking up from start.

    The search stops at a directory containing .git, or at the
    filesystem root.

    Args:
        start: Directory to start searching from

    Returns:
        Path to .beadtree.toml, or None if not found
    """
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (current / ".git").exists() or current.parent == current:
            return None
        current = current.parent


def parse_toml_document(text: str) -> tomlkit.TOMLDocument:
    """Parse TOML text, preserving formatting for round-trip edits.

    Raises:
        ConfigError: If the text is not valid TOML
    """
    try:
        return tomlkit.parse(text)
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested dicts are merged key by key; any other value in override
    replaces the base value.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Parse an environment value into a typed Python value.

    JSON arrays/objects and integers are decoded, "true"/"false" become
    booleans (case-insensitive), anything else stays a string.
    Malformed JSON falls back to the raw string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False

    if value[:1] in ("[", "{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value

    try:
        return int(value)
    except ValueError:
        return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply BEADTREE_<SECTION>_<KEY> environment variables.

    The first underscore-separated word after the prefix names the
    section; the rest, lowercased, is the key.
    e.g. BEADTREE_DISPLAY_SHORTEN_IDS=false -> display.shorten_ids = False
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            continue
        section, key = parts
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw)
    return config


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration.

    Args:
        path: Config file to read; None means defaults only

    Returns:
        Plain dict with defaults, file values and env overrides applied

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is not None:
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {path}: {e.strerror or e}") from e
        document = parse_toml_document(text)
        config = merge_configs(config, document.unwrap())

    return _apply_env_overrides(config)


def get_display_settings(config: dict[str, Any]) -> dict[str, Any]:
    """Return the [display] section with checked types.

    Values come from user files and environment variables, so they are
    validated here rather than failing deep inside rendering.

    Returns:
        Dict with int "width" (>= 0) and bool "shorten_ids"/"show_depth"

    Raises:
        ConfigError: If a value has the wrong type or width is negative
    """
    section = config.get("display", {})
    if not isinstance(section, dict):
        raise ConfigError("display: expected a table")
    settings = merge_configs(DEFAULT_CONFIG["display"], section)

    width = settings["width"]
    if isinstance(width, bool) or not isinstance(width, int) or width < 0:
        raise ConfigError(f"display.width: expected a non-negative integer, got {width!r}")
    for key in ("shorten_ids", "show_depth"):
        if not isinstance(settings[key], bool):
            raise ConfigError(f"display.{key}: expected true or false, got {settings[key]!r}")

    return settings


__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_display_settings",
    "load_config",
    "merge_configs",
    "parse_toml_document",
]
