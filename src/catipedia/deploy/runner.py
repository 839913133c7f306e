"""Deploy stage: verify, build, test, then hand the output to the deploy CLI."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from catipedia.config import Settings
from catipedia.deploy.git import check_git_state
from catipedia.deploy.targets import DeployTarget
from catipedia.errors import BuildValidationError, ConfigError
from catipedia.pipeline import Pipeline, StepOutcome
from catipedia.shell import CommandRunner

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeployReport:
    target: DeployTarget
    warnings: list[str] = field(default_factory=list)
    deploy_command: list[str] | None = None
    outcomes: list[StepOutcome] = field(default_factory=list)
    seconds: float = 0.0


class DeploymentManager:
    def __init__(
        self,
        target: DeployTarget,
        settings: Settings,
        runner: CommandRunner,
        *,
        root: Path | None = None,
    ) -> None:
        self.target = target
        self.settings = settings
        self.runner = runner
        self.root = root or settings.root_path()
        self.report = DeployReport(target=target)

    @property
    def build_dir(self) -> Path:
        return self.root / self.target.build_dir

    def pre_deployment_checks(self) -> None:
        logger.info("running pre-deployment checks")
        self.report.warnings.extend(
            check_git_state(self.runner, self.target, self.settings.git_bin)
        )
        if not (self.root / "package.json").is_file():
            raise ConfigError(f"package.json not found in {self.root}")

    def build_project(self) -> None:
        npm = self.settings.npm_bin
        logger.info("installing dependencies")
        self.runner.check([npm, "ci"], capture=False)
        logger.info("building project")
        self.runner.check([npm, "run", "build"], capture=False)
        if self.runner.dry_run:
            return
        if not self.build_dir.is_dir():
            raise BuildValidationError(f"build directory {self.build_dir} not found")

    def run_tests(self) -> None:
        logger.info("running tests")
        self.runner.check([self.settings.npm_bin, "test"], capture=False)

    def deploy_command(self) -> list[str] | None:
        """The Wrangler Pages command, or None when no deploy CLI is configured."""
        if not (self.root / "wrangler.toml").is_file():
            return None
        project = self.target.pages_project(self.settings.pages_project)
        return [
            self.settings.npx_bin,
            "wrangler",
            "pages",
            "deploy",
            f"./{self.target.build_dir}",
            f"--project-name={project}",
        ]

    def deploy(self) -> None:
        logger.info("deploying to %s", self.target.environment.value)
        command = self.deploy_command()
        self.report.deploy_command = command
        if command is None:
            # No deploy CLI configured for this checkout; nothing is uploaded.
            logger.warning("no wrangler.toml found, target is %s", self.target.host)
            return
        self.runner.check(command, capture=False)

    def post_deployment(self) -> None:
        logger.info("running post-deployment tasks for %s", self.target.host)

    def pipeline(self) -> Pipeline:
        return (
            Pipeline(stage="deploy")
            .add("pre-deployment checks", self.pre_deployment_checks)
            .add("build", self.build_project)
            .add("tests", self.run_tests, fatal=self.target.is_production)
            .add("deploy", self.deploy)
            .add("post-deployment", self.post_deployment, fatal=False)
        )

    def run(self) -> DeployReport:
        started = time.monotonic()
        pipeline = self.pipeline()
        failure = pipeline.run()
        self.report.outcomes = list(pipeline.outcomes)
        self.report.seconds = round(time.monotonic() - started, 2)
        if failure is not None:
            raise failure
        return self.report
