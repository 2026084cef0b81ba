"""Pydantic request and response models for the HTTP API.

JSON bodies use camelCase keys.
"""

from datetime import datetime
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coursesync.config import SyncConfig
from coursesync.content import ContentFile
from coursesync.enums import ErrorKind, SyncAction
from coursesync.sync import (
    ChangeSet,
    CommitRecord,
    FileLinks,
    FileStatus,
    SyncResult,
    SyncStatus,
)


class _ApiModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )


class HealthResponse(_ApiModel):
    status: str


class ChangeSetResponse(_ApiModel):
    """Local content changes, paths relative to the content sub-path."""

    staged: list[str]
    unstaged: list[str]
    untracked: list[str]
    total_changes: int

    @classmethod
    def from_change_set(cls, change_set: ChangeSet) -> Self:
        return cls(
            staged=sorted(change_set.staged),
            unstaged=sorted(change_set.unstaged),
            untracked=sorted(change_set.untracked),
            total_changes=change_set.total_changes,
        )


class FileStatusResponse(_ApiModel):
    relative_path: str
    has_changes: bool
    is_new: bool

    @classmethod
    def from_status(cls, status: FileStatus) -> Self:
        return cls(
            relative_path=status.relative_path,
            has_changes=status.has_changes,
            is_new=status.is_new,
        )


class FileContentResponse(_ApiModel):
    """A content file with its human-facing links.

    Links are None when the sync configuration is missing.
    """

    relative_path: str
    content: str
    edit_url: str | None = None
    view_url: str | None = None

    @classmethod
    def from_file(cls, file: ContentFile, links: FileLinks | None) -> Self:
        return cls(
            relative_path=file.relative_path,
            content=file.content,
            edit_url=links.edit_url if links else None,
            view_url=links.view_url if links else None,
        )


class SaveFileRequest(_ApiModel):
    """Create or update a content file; omitted content is scaffolded."""

    relative_path: str = Field(min_length=1)
    content: str | None = None


class SyncRequest(_ApiModel):
    action: SyncAction
    commit_message: str | None = None


class SyncResultResponse(_ApiModel):
    success: bool
    message: str
    files_changed: list[str] = Field(default_factory=list)
    commit_hash: str | None = None
    error_detail: str | None = None
    error_kind: ErrorKind | None = None

    @classmethod
    def from_result(cls, result: SyncResult) -> Self:
        return cls(
            success=result.success,
            message=result.message,
            files_changed=list(result.files_changed),
            commit_hash=result.commit_hash,
            error_detail=result.error_detail,
            error_kind=result.error_kind,
        )


class CommitRecordResponse(_ApiModel):
    sha: str = Field(alias="hash")
    author: str
    date: datetime
    message: str
    files_changed_count: int

    @classmethod
    def from_record(cls, record: CommitRecord) -> Self:
        return cls(
            sha=record.sha,
            author=record.author,
            date=record.date,
            message=record.message,
            files_changed_count=record.files_changed_count,
        )


class SyncConfigResponse(_ApiModel):
    repository_identifier: str
    branch: str
    content_sub_path: str
    edit_url_template: str
    view_url_template: str

    @classmethod
    def from_config(cls, config: SyncConfig) -> Self:
        return cls(
            repository_identifier=config.repository_identifier,
            branch=config.branch,
            content_sub_path=config.content_sub_path,
            edit_url_template=config.edit_url_template,
            view_url_template=config.view_url_template,
        )


class ConfigStatusResponse(_ApiModel):
    config: SyncConfigResponse | None
    initialized: bool
    branch: str | None = None
    remote_url: str | None = None
    remote_branch: str | None = None
    error: str | None = None

    @classmethod
    def from_status(cls, status: SyncStatus) -> Self:
        return cls(
            config=(
                SyncConfigResponse.from_config(status.config)
                if status.config is not None
                else None
            ),
            initialized=status.initialized,
            branch=status.branch,
            remote_url=status.remote_url,
            remote_branch=status.remote_branch,
            error=status.config_error,
        )
