import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from coursesync.exceptions import ConfigError, ConfigValidationError

from ._loader import deep_merge, read_env_overrides, read_toml_file
from ._models import Settings

SETTINGS_FILE_NAME: Final = "coursesync.toml"


def load_settings(
    *,
    project_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> Settings:
    """Load engine settings from defaults, file, environment and overrides.

    Precedence, lowest to highest: built-in defaults, ``coursesync.toml`` at
    the project root, ``COURSESYNC_*`` environment variables, ``overrides``.

    Args:
        project_root: Project root. Defaults to ``COURSESYNC_PROJECT_ROOT``
            or the current working directory.
        environ: Environment mapping (defaults to ``os.environ``).
        overrides: Explicit values, e.g. from CLI flags.

    Returns:
        Validated Settings.

    Raises:
        ConfigLoadError: If the settings file cannot be parsed.
        ConfigValidationError: If a value fails validation.
    """
    env_values = read_env_overrides(os.environ if environ is None else environ)
    env_root = env_values.pop("project_root", None)
    root = Path(project_root or env_root or Path.cwd()).resolve()

    data: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
    settings_file = root / SETTINGS_FILE_NAME
    if settings_file.is_file():
        data = deep_merge(data, read_toml_file(settings_file))
    data = deep_merge(data, env_values)
    if overrides:
        data = deep_merge(data, overrides)
    data["project_root"] = root

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        msg = f"Invalid setting '{key}': {first['msg']}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=first.get("input"),
            expected=first["msg"],
        ) from e


def safe_load_settings(
    *,
    project_root: Path | None = None,
    overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> tuple[Settings, str | None]:
    """Load settings with error handling.

    Handles errors based on the COURSESYNC_STRICT_CONFIG environment variable:
    - If unset or "0": warn to stderr and return default settings
    - If "1": fail fast with sys.exit(1)

    Args:
        project_root: Project root directory override.
        overrides: Explicit overrides to pass to load_settings().

    Returns:
        Tuple of (Settings, error_message). On success, error_message is None.
        On failure (non-strict mode), returns default Settings rooted at
        ``project_root`` (or the current directory) with the error message.
    """
    strict_mode = os.environ.get("COURSESYNC_STRICT_CONFIG", "0") == "1"

    try:
        settings = load_settings(project_root=project_root, overrides=overrides)
    except (ConfigError, OSError) as e:
        error_msg = str(e)
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(  # noqa: T201
            f"Warning: Failed to load settings: {error_msg}", file=sys.stderr
        )
        root = (project_root or Path.cwd()).resolve()
        return Settings(project_root=root), error_msg
    else:
        return settings, None
