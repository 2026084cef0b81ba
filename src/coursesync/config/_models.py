"""Configuration models.

This module defines the engine settings and the sync configuration artifact
as frozen Pydantic models.
"""

from pathlib import Path
from typing import ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from coursesync.enums import LogFormat, LogLevel
from coursesync.utils._paths import normalize_relative_path

DEFAULT_VIEW_URL_TEMPLATE: Final = (
    "https://github.com/{repository}/blob/{branch}/{content_path}/{path}"
)


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file, relative to the project root (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class Settings(BaseModel):
    """Engine settings.

    Attributes:
        project_root: Root of the working tree the engine operates on.
        config_file: Location of the sync configuration artifact, relative to
            the project root.
        content_dir: Content root, relative to the project root, used when
            no sync configuration can be loaded.
        remote: Name of the git remote to fetch from and push to.
        git_executable: Program used to run git.
        git_timeout_ms: Upper bound for every git invocation, in milliseconds.
        history_limit: Default number of commits returned by history reads.
        logging: Logging section.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    project_root: Path = Field(default_factory=Path.cwd)
    config_file: str = "content/config.json"
    content_dir: str = "content/courses"
    remote: str = Field(default="origin", min_length=1)
    git_executable: str = Field(default="git", min_length=1)
    git_timeout_ms: int = Field(default=30000, gt=0)
    history_limit: int = Field(default=10, ge=1, le=100)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def config_path(self) -> Path:
        """Absolute path of the sync configuration artifact."""
        return self.project_root / self.config_file


class SyncConfig(BaseModel):
    """The committed sync configuration artifact.

    Field aliases match the JSON keys of the ``git`` section of the artifact.

    Attributes:
        repository_identifier: Remote repository identifier (``owner/name``).
        branch: Branch that is pulled from and pushed to.
        content_sub_path: Repository-relative directory every sync operation
            is scoped to.
        edit_url_template: Template or base URL for human-facing edit links.
        view_url_template: Template for human-facing view links.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    repository_identifier: str = Field(alias="repository", min_length=1)
    branch: str = Field(min_length=1)
    content_sub_path: str = Field(alias="contentPath", min_length=1)
    edit_url_template: str = Field(alias="editUrl")
    view_url_template: str = Field(
        alias="viewUrl", default=DEFAULT_VIEW_URL_TEMPLATE, min_length=1
    )

    @field_validator("content_sub_path")
    @classmethod
    def _normalize_content_sub_path(cls, value: str) -> str:
        normalized = normalize_relative_path(value.strip("/"))
        if normalized is None:
            msg = f"contentPath must be a relative path in the repository: {value!r}"
            raise ValueError(msg)
        return normalized

    @field_validator("branch")
    @classmethod
    def _reject_option_like_branch(cls, value: str) -> str:
        if value.startswith("-") or ".." in value or " " in value:
            msg = f"Invalid branch name: {value!r}"
            raise ValueError(msg)
        return value
