"""Utilities shared across coursesync."""

from ._exec import (
    DEFAULT_TIMEOUT_MS,
    CommandConfig,
    CommandResult,
    run_command,
    truncate_output,
)
from ._git import (
    AuthorInfo,
    RepositoryInfo,
    get_author_info,
    get_repository_info,
)
from ._json import load_json, load_json_file
from ._logging import (
    create_cli_logger,
    create_null_logger,
    create_sync_logger,
)
from ._paths import is_within, normalize_relative_path, relative_to_scope

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "AuthorInfo",
    "CommandConfig",
    "CommandResult",
    "RepositoryInfo",
    "create_cli_logger",
    "create_null_logger",
    "create_sync_logger",
    "get_author_info",
    "get_repository_info",
    "is_within",
    "load_json",
    "load_json_file",
    "normalize_relative_path",
    "relative_to_scope",
    "run_command",
    "truncate_output",
]
