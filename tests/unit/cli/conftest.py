from collections.abc import Callable
from pathlib import Path

import pytest

from coursesync.cli import create_app
from coursesync.sync import SyncFacade


@pytest.fixture
def coursesync_cli(tmp_path: Path, facade: SyncFacade) -> Callable[..., int]:
    """Return a callable that runs the CLI against ``facade``.

    Global options are applied through the meta app. The callable returns the
    exit code (0 if no SystemExit was raised).
    """
    app = create_app(exit_on_error=False, facade=facade)

    def _run(*args: str) -> int:
        try:
            app.meta(["--project-root", str(tmp_path), *args])
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
