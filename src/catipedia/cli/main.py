"""Click CLI group: setup, build and deploy commands."""

from __future__ import annotations

import logging
import sys

import click
from pydantic import ValidationError

from catipedia import console
from catipedia.build import BuildLayout, BuildOptions, run_build
from catipedia.config import Settings, get_settings, validate_settings_for_env
from catipedia.deploy import DEFAULT_ENVIRONMENT, DeploymentManager, DeployTarget
from catipedia.errors import CatipediaError, ConfigError
from catipedia.logging import clear_context, configure_logging
from catipedia.setup import SetupManager, SetupOptions
from catipedia.setup.runner import NEXT_STEPS
from catipedia.shell import CommandRunner

logger = logging.getLogger(__name__)


def _load_settings(verbose: bool) -> Settings:
    try:
        settings = get_settings()
    except ValidationError as exc:
        configure_logging("DEBUG" if verbose else "INFO")
        raise ConfigError(f"invalid configuration: {exc}") from exc
    configure_logging(
        "DEBUG" if verbose else settings.log_level, json_output=settings.json_logs
    )
    validate_settings_for_env(settings)
    return settings


def _fail(exc: CatipediaError, stage: str) -> None:
    logger.error("%s failed: %s", stage, exc)
    console.failure(f"\n{stage.capitalize()} failed: {exc}")
    clear_context()
    sys.exit(1)


@click.group()
def cli() -> None:
    """Catipedia site tooling."""


@cli.command()
@click.option("--verbose", "-v", is_flag=True, help="Log every step in detail.")
@click.option("--skip-install", is_flag=True, help="Do not run npm ci.")
@click.option("--dev", "-d", is_flag=True, help="Also install dev dependencies and write .env.")
def setup(verbose: bool, skip_install: bool, dev: bool) -> None:
    """Check the toolchain and prepare the project for development."""
    try:
        settings = _load_settings(verbose)
        runner = CommandRunner(
            settings.root_path(),
            timeout_s=settings.command_timeout_seconds,
            capture=not verbose,
        )
        options = SetupOptions(skip_install=skip_install, dev=dev, verbose=verbose)
        report = SetupManager(settings, runner, options).run()
    except CatipediaError as exc:
        _fail(exc, "setup")
        return

    console.success("\nSetup completed successfully!")
    print(f"\n{NEXT_STEPS}")
    print(f"\nSetup completed in {report.seconds}s")


@cli.command()
@click.option("--production", "-p", is_flag=True, help="Minify CSS/JS and write hashes.json.")
@click.option("--verbose", "-v", is_flag=True, help="Log every copied file.")
@click.option("--no-clean", is_flag=True, help="Keep the existing output directory.")
def build(production: bool, verbose: bool, no_clean: bool) -> None:
    """Build the site into the output directory."""
    try:
        settings = _load_settings(verbose)
        production = production or settings.production_node_env
        layout = BuildLayout.from_settings(settings)
        mode = "production" if production else "development"
        logger.info("building %s in %s mode", layout.root, mode)
        report = run_build(layout, BuildOptions(production=production, clean=not no_clean))
    except CatipediaError as exc:
        _fail(exc, "build")
        return

    console.section("Build")
    console.print_outcomes(report.outcomes)
    console.success(f"\nBuild completed successfully in {report.seconds}s")
    print(f"Output directory: {report.out_dir}")
    print(f"Environment: {'Production' if report.production else 'Development'}")
    if report.hashes:
        print(f"Hashed assets: {len(report.hashes)}")


@cli.command()
@click.argument("environment", required=False, default=DEFAULT_ENVIRONMENT.value)
@click.option("--verbose", "-v", is_flag=True, help="Log every step in detail.")
@click.option("--dry-run", is_flag=True, help="Print external commands instead of running them.")
def deploy(environment: str, verbose: bool, dry_run: bool) -> None:
    """Build, test and deploy to ENVIRONMENT (development, staging or production)."""
    try:
        settings = _load_settings(verbose)
        target = DeployTarget.for_environment(environment, build_dir=settings.dist_dir)
        logger.info("deploying to %s (%s)", target.environment.value, target.host)
        runner = CommandRunner(
            settings.root_path(),
            timeout_s=settings.command_timeout_seconds,
            dry_run=dry_run,
        )
        report = DeploymentManager(target, settings, runner).run()
    except CatipediaError as exc:
        _fail(exc, "deployment")
        return

    console.section("Deploy")
    console.print_outcomes(report.outcomes)
    for message in report.warnings:
        console.warning(f"  warning: {message}")
    console.success(f"\nDeployment completed successfully in {report.seconds}s")
    print(f"Environment: {report.target.environment.value}")
    print(f"Target: {report.target.host}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
