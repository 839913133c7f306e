from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from catipedia.cli.main import cli


@pytest.fixture(autouse=True)
def tools_on_path(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("catipedia.setup.checks.shutil.which", lambda name: f"/usr/bin/{name}")


def test_setup_prepares_project(tmp_path: Path, fake_commands) -> None:
    (tmp_path / "package.json").write_text('{"scripts": {"build": "x"}}')
    (tmp_path / "index.html").write_text("<html>")
    fake_commands.respond("node --version", stdout="v20.0.0\n")

    result = CliRunner().invoke(cli, ["setup", "--dev"])

    assert result.exit_code == 0, result.output
    assert fake_commands.ran("npm ci --omit=dev")
    for relative in ("dist", "temp", "logs", "assets/images", "assets/icons"):
        assert (tmp_path / relative).is_dir()
    assert (tmp_path / ".env").is_file()
    assert "Setup completed successfully" in result.output
    assert "Next steps" in result.output


def test_setup_fails_on_old_node(tmp_path: Path, fake_commands) -> None:
    fake_commands.respond("node --version", stdout="v12.22.0\n")
    result = CliRunner().invoke(cli, ["setup", "--skip-install"])
    assert result.exit_code == 1
    assert not fake_commands.ran("npm")


def test_setup_fails_without_index(tmp_path: Path, fake_commands) -> None:
    (tmp_path / "package.json").write_text("{}")
    fake_commands.respond("node --version", stdout="v18.0.0\n")
    result = CliRunner().invoke(cli, ["setup", "--skip-install"])
    assert result.exit_code == 1
    assert "index.html" in result.output
