"""Sync configuration artifact loading.

The artifact is a JSON document committed next to the content tree. Only its
``git`` section is read. It is re-read on every call so that edits made
outside the engine are picked up without a restart.
"""

from pathlib import Path
from typing import Self

from pydantic import ValidationError

from coursesync.exceptions import ConfigurationMissingError
from coursesync.utils._json import load_json_file

from ._models import Settings, SyncConfig

SYNC_SECTION = "git"


class SyncConfigLoader:
    """Loads the SyncConfig from a fixed artifact location.

    Attributes:
        path: Absolute path of the configuration artifact.
    """

    __slots__: tuple[str, ...] = ("path",)

    path: Path

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def from_settings(cls, settings: Settings) -> Self:
        """Create a loader for the artifact named by ``settings``."""
        return cls(settings.config_path)

    def load(self) -> SyncConfig:
        """Read and validate the configuration artifact.

        Returns:
            The validated SyncConfig.

        Raises:
            ConfigurationMissingError: If the artifact is absent, unreadable,
                not JSON, lacks a ``git`` section, or fails validation.
        """
        if not self.path.is_file():
            msg = f"Sync configuration not found at {self.path}"
            raise ConfigurationMissingError(msg, path=self.path)

        try:
            data = load_json_file(self.path)
        except OSError as e:
            msg = f"Sync configuration could not be read: {self.path}"
            raise ConfigurationMissingError(msg, path=self.path, detail=str(e)) from e

        if not isinstance(data, dict):
            msg = f"Sync configuration is not a JSON object: {self.path}"
            raise ConfigurationMissingError(msg, path=self.path)

        section = data.get(SYNC_SECTION)
        if not isinstance(section, dict):
            msg = f"Sync configuration has no '{SYNC_SECTION}' section: {self.path}"
            raise ConfigurationMissingError(msg, path=self.path)

        try:
            return SyncConfig.model_validate(section)
        except ValidationError as e:
            first = e.errors()[0]
            key = ".".join(str(part) for part in first["loc"])
            msg = f"Sync configuration is invalid ({key}: {first['msg']})"
            raise ConfigurationMissingError(msg, path=self.path, detail=str(e)) from e

    def load_or_none(self) -> SyncConfig | None:
        """Load the configuration, returning None when it is missing."""
        try:
            return self.load()
        except ConfigurationMissingError:
            return None
