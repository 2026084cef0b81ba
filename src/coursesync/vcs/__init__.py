"""Version-control collaborator.

The sync engine talks to version control only through
``VersionControlProtocol``. ``GitCli`` runs the git executable;
``FakeVersionControl`` keeps everything in memory for tests.
"""

from ._fake import FakeCommit, FakeVersionControl
from ._git import BASE_ENV, GitCli, classify_git_error, parse_log, parse_porcelain
from ._models import EMPTY_TREE, LogEntry, StatusEntry
from ._protocol import VersionControlProtocol

__all__ = [
    "BASE_ENV",
    "EMPTY_TREE",
    "FakeCommit",
    "FakeVersionControl",
    "GitCli",
    "LogEntry",
    "StatusEntry",
    "VersionControlProtocol",
    "classify_git_error",
    "parse_log",
    "parse_porcelain",
]
