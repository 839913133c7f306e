"""Source-control checks run before a deploy. They only ever warn."""

from __future__ import annotations

import logging

from catipedia.deploy.targets import DeployTarget
from catipedia.shell import CommandRunner

logger = logging.getLogger(__name__)


def current_branch(runner: CommandRunner, git_bin: str = "git") -> str | None:
    result = runner.run([git_bin, "branch", "--show-current"], capture=True)
    if not result.ok:
        logger.warning("failed to check git branch: %s", result.detail() or result.exit_code)
        return None
    return result.stdout.strip()


def working_tree_changes(runner: CommandRunner, git_bin: str = "git") -> list[str] | None:
    result = runner.run([git_bin, "status", "--porcelain"], capture=True)
    if not result.ok:
        logger.warning("failed to check git status: %s", result.detail() or result.exit_code)
        return None
    return [line for line in result.stdout.splitlines() if line.strip()]


def check_git_state(runner: CommandRunner, target: DeployTarget, git_bin: str = "git") -> list[str]:
    """Return human-readable warnings about branch mismatch or uncommitted work."""
    warnings: list[str] = []
    if runner.dry_run:
        return warnings

    branch = current_branch(runner, git_bin)
    if branch is not None and branch != target.branch:
        warnings.append(
            f"current branch {branch!r} doesn't match target branch {target.branch!r}"
        )

    changes = working_tree_changes(runner, git_bin)
    if changes:
        warnings.append(f"{len(changes)} uncommitted change(s) in the working tree")
        for line in changes:
            logger.debug("uncommitted: %s", line)

    for message in warnings:
        logger.warning(message)
    return warnings
