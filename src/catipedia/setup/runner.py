"""Setup stage: prepare a fresh checkout for building and deploying."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from catipedia import console
from catipedia.config import Settings
from catipedia.errors import BuildValidationError, ConfigError, RequirementError
from catipedia.pipeline import Pipeline, StepOutcome
from catipedia.setup.checks import (
    CheckResult,
    check_file,
    check_node_version,
    check_package_scripts,
    check_tool_exists,
)
from catipedia.setup.scaffold import (
    create_directories,
    git_dir,
    install_pre_commit_hook,
    write_config_files,
)
from catipedia.shell import CommandRunner

logger = logging.getLogger(__name__)

HEALTH_FILES: tuple[tuple[str, bool], ...] = (
    ("package.json", True),
    ("index.html", True),
    ("css/style.css", False),
    ("js/main.js", False),
    ("wrangler.toml", False),
)


@dataclass(frozen=True, slots=True)
class SetupOptions:
    skip_install: bool = False
    dev: bool = False
    verbose: bool = False


@dataclass(slots=True)
class SetupReport:
    requirements: list[CheckResult] = field(default_factory=list)
    health: list[CheckResult] = field(default_factory=list)
    created: list[Path] = field(default_factory=list)
    hook: Path | None = None
    outcomes: list[StepOutcome] = field(default_factory=list)
    seconds: float = 0.0


def print_checks(title: str, results: list[CheckResult]) -> None:
    console.section(title)
    for result in results:
        icon = console.mark(result.passed, optional=not result.required)
        print(f"  {icon} {result.name}: {result.message}")
        if not result.passed and result.fix_hint:
            print(f"    Fix: {result.fix_hint}")


class SetupManager:
    def __init__(
        self,
        settings: Settings,
        runner: CommandRunner,
        options: SetupOptions,
        *,
        root: Path | None = None,
    ) -> None:
        self.settings = settings
        self.runner = runner
        self.options = options
        self.root = root or settings.root_path()
        self.report = SetupReport()

    def check_system_requirements(self) -> None:
        logger.info("checking system requirements")
        results = [
            check_node_version(
                self.runner, self.settings.node_min_major, self.settings.node_bin
            ),
            check_tool_exists(self.settings.npm_bin),
            check_tool_exists(self.settings.git_bin, required=False),
        ]
        self.report.requirements = results
        for result in results:
            logger.debug("%s: %s", result.name, result.message)
        failed = [r for r in results if r.required and not r.passed]
        for result in results:
            if not result.required and not result.passed:
                logger.warning("%s - some features may not work", result.message)
        if failed:
            raise RequirementError("; ".join(f"{r.name}: {r.message}" for r in failed))

    def create_directories(self) -> None:
        logger.info("creating project directories")
        self.report.created.extend(create_directories(self.root))

    def install_dependencies(self) -> None:
        if self.options.skip_install:
            logger.debug("skipping dependency installation")
            return
        if not (self.root / "package.json").is_file():
            raise ConfigError(f"package.json not found in {self.root}")
        npm = self.settings.npm_bin
        capture = not self.options.verbose
        logger.info("installing production dependencies")
        self.runner.check([npm, "ci", "--omit=dev"], capture=capture)
        if self.options.dev:
            logger.info("installing development dependencies")
            self.runner.check([npm, "ci"], capture=capture)

    def install_git_hooks(self) -> None:
        directory = git_dir(self.runner, self.root, self.settings.git_bin)
        if directory is None:
            logger.debug("skipping git hooks setup (not a git repository)")
            return
        logger.info("installing git pre-commit hook")
        self.report.hook = install_pre_commit_hook(directory)

    def create_config_files(self) -> None:
        logger.info("creating configuration files")
        self.report.created.extend(write_config_files(self.root, dev=self.options.dev))

    def run_health_checks(self) -> None:
        logger.info("running health checks")
        files = [check_file(self.root, name, required=req) for name, req in HEALTH_FILES]
        scripts = check_package_scripts(self.root)
        self.report.health = [*files, scripts]
        print_checks("Health Check Results", self.report.health)
        missing = [r.name for r in files if r.required and not r.passed]
        if missing:
            raise BuildValidationError(
                f"required files missing: {', '.join(missing)}", missing=missing
            )
        if scripts.required and not scripts.passed:
            raise ConfigError(scripts.message)

    def pipeline(self) -> Pipeline:
        return (
            Pipeline(stage="setup")
            .add("system requirements", self.check_system_requirements)
            .add("create directories", self.create_directories)
            .add("install dependencies", self.install_dependencies)
            .add("git hooks", self.install_git_hooks, fatal=False)
            .add("configuration files", self.create_config_files)
            .add("health checks", self.run_health_checks)
        )

    def run(self) -> SetupReport:
        started = time.monotonic()
        pipeline = self.pipeline()
        failure = pipeline.run()
        self.report.outcomes = list(pipeline.outcomes)
        self.report.seconds = round(time.monotonic() - started, 2)
        if failure is not None:
            raise failure
        return self.report


NEXT_STEPS = """\
Next steps:
  1. Review the .env file and adjust settings if needed
  2. Run `catipedia build` to build the project
  3. Run `npm start` to start the development server (if available)
  4. Run `catipedia deploy` to deploy to your hosting platform

Useful commands:
  make help     - Show available Makefile commands
  make build    - Build the project
  make deploy   - Deploy the project
  make test     - Run tests"""
