"""Shared enumerations."""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Classification of a failed sync operation."""

    CONFIGURATION_MISSING = "configuration_missing"
    REPOSITORY_UNINITIALIZED = "repository_uninitialized"
    REMOTE_UNAVAILABLE = "remote_unavailable"
    NON_FAST_FORWARD = "non_fast_forward"
    INDEX_LOCKED = "index_locked"
    TIMEOUT = "timeout"
    GIT_ERROR = "git_error"
    FILESYSTEM = "filesystem"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"


class SyncAction(StrEnum):
    """Actions accepted by the sync endpoint."""

    PULL = "pull"
    PUSH = "push"
    SYNC = "sync"


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"
