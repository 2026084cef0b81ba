# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Settings file loading and merging."""

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from coursesync.exceptions import ConfigLoadError

# Environment variables and the settings keys they populate.
ENV_KEYS: Final[dict[str, tuple[str, ...]]] = {
    "COURSESYNC_PROJECT_ROOT": ("project_root",),
    "COURSESYNC_CONFIG_FILE": ("config_file",),
    "COURSESYNC_CONTENT_DIR": ("content_dir",),
    "COURSESYNC_REMOTE": ("remote",),
    "COURSESYNC_GIT_EXECUTABLE": ("git_executable",),
    "COURSESYNC_GIT_TIMEOUT_MS": ("git_timeout_ms",),
    "COURSESYNC_HISTORY_LIMIT": ("history_limit",),
    "COURSESYNC_LOG_LEVEL": ("logging", "level"),
    "COURSESYNC_LOG_FORMAT": ("logging", "format"),
    "COURSESYNC_LOG_FILE": ("logging", "file"),
}


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(msg, path=path) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key in set(base.keys()) | set(override.keys()):
        if key not in override:
            result[key] = _copy_value(base[key])
        elif key not in base:
            result[key] = _copy_value(override[key])
        else:
            base_val = base[key]
            override_val = override[key]

            if isinstance(base_val, dict) and isinstance(override_val, dict):
                result[key] = deep_merge(base_val, override_val)
            else:
                result[key] = _copy_value(override_val)

    return result


def _copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Copy nested dicts and lists so merged results share no state."""
    if isinstance(value, dict):
        return {k: _copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy_value(v) for v in value]
    return value


def set_nested_key(
    data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    keys: tuple[str, ...],
    value: object,
) -> None:
    """Set a value in a nested dictionary, creating sections as needed.

    Args:
        data: Dictionary to modify in place.
        keys: Key path, outermost first.
        value: Value to store at the final key.
    """
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def read_env_overrides(
    environ: Mapping[str, str],
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect settings values from ``COURSESYNC_*`` environment variables.

    Empty values are ignored. Values are passed through as strings; type
    coercion is left to model validation.

    Args:
        environ: Environment mapping to read.

    Returns:
        Nested dictionary of settings values.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    for env_name, keys in ENV_KEYS.items():
        value = environ.get(env_name, "").strip()
        if not value:
            continue
        if keys in {("logging", "level"), ("logging", "format")}:
            value = value.lower()
        set_nested_key(result, keys, value)
    return result
