"""coursesync configuration.

Two layers are exposed here: the engine ``Settings`` (defaults, an optional
``coursesync.toml`` and ``COURSESYNC_*`` environment variables) and the
committed sync configuration artifact read by ``SyncConfigLoader``.

Example:
    >>> from coursesync.config import SyncConfigLoader, load_settings
    >>> settings = load_settings()
    >>> SyncConfigLoader.from_settings(settings).load().branch
    'main'
"""

from coursesync.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigurationMissingError,
    ConfigValidationError,
)

from ._load import SETTINGS_FILE_NAME, load_settings, safe_load_settings
from ._loader import (
    ENV_KEYS,
    deep_merge,
    read_env_overrides,
    read_toml_file,
    set_nested_key,
)
from ._models import DEFAULT_VIEW_URL_TEMPLATE, LoggingConfig, Settings, SyncConfig
from ._sync_config import SyncConfigLoader

__all__ = [
    "DEFAULT_VIEW_URL_TEMPLATE",
    "ENV_KEYS",
    "SETTINGS_FILE_NAME",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigurationMissingError",
    "LoggingConfig",
    "Settings",
    "SyncConfig",
    "SyncConfigLoader",
    "deep_merge",
    "load_settings",
    "read_env_overrides",
    "read_toml_file",
    "safe_load_settings",
    "set_nested_key",
]
