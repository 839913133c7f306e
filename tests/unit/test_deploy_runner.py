"""Tests for the deployment orchestrator."""

from __future__ import annotations

from pathlib import Path

import pytest

from catipedia.config import get_settings
from catipedia.deploy.runner import DeploymentManager
from catipedia.deploy.targets import DeployTarget
from catipedia.errors import CommandError, ConfigError, StepError
from catipedia.shell import CommandRunner


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text('{"scripts": {"build": "x", "test": "y"}}')
    (tmp_path / "dist").mkdir()
    return tmp_path


def _manager(root: Path, environment: str, *, dry_run: bool = False) -> DeploymentManager:
    settings = get_settings()
    target = DeployTarget.for_environment(environment)
    return DeploymentManager(target, settings, CommandRunner(root, dry_run=dry_run), root=root)


def test_full_run_with_wrangler(project: Path, fake_commands) -> None:
    (project / "wrangler.toml").write_text('name = "catipedia"\n')
    fake_commands.respond("git branch --show-current", stdout="main\n")

    report = _manager(project, "production").run()

    commands = [" ".join(c) for c in fake_commands.calls]
    assert commands == [
        "git branch --show-current",
        "git status --porcelain",
        "npm ci",
        "npm run build",
        "npm test",
        "npx wrangler pages deploy ./dist --project-name=catipedia",
    ]
    assert report.warnings == []
    assert [o.name for o in report.outcomes] == [
        "pre-deployment checks",
        "build",
        "tests",
        "deploy",
        "post-deployment",
    ]


def test_non_production_project_name(project: Path, fake_commands) -> None:
    (project / "wrangler.toml").write_text("")
    report = _manager(project, "staging").run()
    assert report.deploy_command is not None
    assert report.deploy_command[-1] == "--project-name=catipedia-staging"


def test_without_wrangler_only_logs_target(project: Path, fake_commands) -> None:
    report = _manager(project, "development").run()
    assert report.deploy_command is None
    assert not fake_commands.ran("npx")


def test_missing_package_json_aborts(tmp_path: Path, fake_commands) -> None:
    with pytest.raises(StepError) as excinfo:
        _manager(tmp_path, "development").run()
    assert excinfo.value.step == "pre-deployment checks"
    assert isinstance(excinfo.value.cause, ConfigError)
    assert not fake_commands.ran("npm")


def test_build_failure_stops_before_tests(project: Path, fake_commands) -> None:
    fake_commands.respond("npm run build", returncode=1)
    with pytest.raises(StepError) as excinfo:
        _manager(project, "staging").run()
    assert excinfo.value.step == "build"
    assert isinstance(excinfo.value.cause, CommandError)
    assert not fake_commands.ran("npm test")


def test_missing_build_dir_after_build(tmp_path: Path, fake_commands) -> None:
    (tmp_path / "package.json").write_text("{}")
    with pytest.raises(StepError, match="build directory"):
        _manager(tmp_path, "development").run()


def test_failing_tests_block_production_deploy(project: Path, fake_commands) -> None:
    (project / "wrangler.toml").write_text("")
    fake_commands.respond("npm test", returncode=1)
    with pytest.raises(StepError) as excinfo:
        _manager(project, "production").run()
    assert excinfo.value.step == "tests"
    assert not fake_commands.ran("npx wrangler")


def test_failing_tests_only_warn_outside_production(project: Path, fake_commands) -> None:
    (project / "wrangler.toml").write_text("")
    fake_commands.respond("npm test", returncode=1)
    report = _manager(project, "staging").run()
    assert fake_commands.ran("npx wrangler pages deploy")
    tests = next(o for o in report.outcomes if o.name == "tests")
    assert tests.passed is False


def test_dry_run_spawns_nothing(tmp_path: Path, fake_commands) -> None:
    (tmp_path / "package.json").write_text("{}")
    (tmp_path / "wrangler.toml").write_text("")
    report = _manager(tmp_path, "production", dry_run=True).run()
    assert fake_commands.calls == []
    assert report.deploy_command is not None
