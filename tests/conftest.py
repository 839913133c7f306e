import logging
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog

from catipedia.config import get_settings

_ENV_KEYS = (
    "APP_ENV",
    "LOG_LEVEL",
    "NODE_ENV",
    "CATIPEDIA_ROOT",
    "CATIPEDIA_DIST_DIR",
    "CATIPEDIA_PAGES_PROJECT",
    "NODE_BIN",
    "NPM_BIN",
    "NPX_BIN",
    "GIT_BIN",
    "NODE_MIN_MAJOR",
    "COMMAND_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def test_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CATIPEDIA_ROOT", str(tmp_path))
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


def completed(
    returncode: int = 0, stdout: str = "", stderr: str = ""
) -> subprocess.CompletedProcess[str]:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class FakeCommands:
    """Stand-in for subprocess.run keyed on the joined command line."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.responses: dict[str, subprocess.CompletedProcess[str]] = {}

    def respond(self, command: str, returncode: int = 0, stdout: str = "") -> None:
        self.responses[command] = completed(returncode, stdout=stdout)

    def __call__(self, command: list[str], **_kwargs: object) -> subprocess.CompletedProcess[str]:
        self.calls.append(list(command))
        return self.responses.get(" ".join(command), completed(0))

    def ran(self, prefix: str) -> bool:
        return any(" ".join(call).startswith(prefix) for call in self.calls)


@pytest.fixture
def fake_commands(monkeypatch: pytest.MonkeyPatch) -> FakeCommands:
    fake = FakeCommands()
    monkeypatch.setattr("catipedia.shell.subprocess.run", fake)
    return fake


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    def _write(relative: str, content: str = "") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
