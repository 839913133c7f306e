"""Files and directories laid down by `catipedia setup`."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from catipedia.errors import FilesystemError
from catipedia.shell import CommandRunner

logger = logging.getLogger(__name__)

DIRECTORIES: tuple[str, ...] = (
    "dist",
    "temp",
    "logs",
    "assets/images",
    "assets/icons",
)

ENV_EXAMPLE = """\
# Catipedia Environment Variables
NODE_ENV=development
PORT=3000
API_BASE_URL=https://api.catipedia.com
ENABLE_DEBUG=true
"""

MAKEFILE = """\
# Catipedia Makefile
.PHONY: help build deploy test clean setup

help:
\t@echo "Available commands:"
\t@echo "  make setup    - Run setup"
\t@echo "  make build    - Build the project"
\t@echo "  make deploy   - Deploy the project"
\t@echo "  make test     - Run tests"
\t@echo "  make clean    - Clean build files"

setup:
\tcatipedia setup --dev

build:
\tcatipedia build

deploy:
\tcatipedia deploy

test:
\tnpm test

clean:
\trm -rf dist temp logs
"""

PRE_COMMIT_HOOK = """\
#!/bin/sh
# Catipedia pre-commit hook
echo "Running pre-commit checks..."

if [ -f "package.json" ] && npm run lint --silent 2>/dev/null; then
  echo "Running linter..."
  npm run lint
fi

echo "Pre-commit checks completed"
"""


def create_directories(root: Path, directories: tuple[str, ...] = DIRECTORIES) -> list[Path]:
    """Create each directory under *root*; return the ones that were new."""
    created: list[Path] = []
    for relative in directories:
        path = root / relative
        if path.is_dir():
            logger.debug("directory already exists: %s", relative)
            continue
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(f"failed to create directory {relative}", exc) from exc
        logger.debug("created directory: %s", relative)
        created.append(path)
    return created


def _write_if_missing(path: Path, content: str) -> bool:
    if path.exists():
        return False
    try:
        path.write_text(content)
    except OSError as exc:
        raise FilesystemError(f"failed to write {path.name}", exc) from exc
    logger.debug("created %s", path.name)
    return True


def write_config_files(root: Path, *, dev: bool) -> list[Path]:
    """Write .env.example, .env (dev only) and Makefile unless they already exist."""
    written: list[Path] = []
    targets = [(root / ".env.example", ENV_EXAMPLE), (root / "Makefile", MAKEFILE)]
    if dev:
        targets.insert(1, (root / ".env", ENV_EXAMPLE))
    for path, content in targets:
        if _write_if_missing(path, content):
            written.append(path)
    return written


def git_dir(runner: CommandRunner, root: Path, git_bin: str = "git") -> Path | None:
    """Resolve the repository's git directory, or None outside a repository."""
    result = runner.run([git_bin, "rev-parse", "--git-dir"], capture=True)
    if not result.ok or not result.stdout.strip():
        return None
    path = Path(result.stdout.strip())
    return path if path.is_absolute() else root / path


def install_pre_commit_hook(git_directory: Path) -> Path:
    hooks = git_directory / "hooks"
    hook = hooks / "pre-commit"
    try:
        hooks.mkdir(parents=True, exist_ok=True)
        hook.write_text(PRE_COMMIT_HOOK)
        if os.name != "nt":
            mode = hook.stat().st_mode
            hook.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    except OSError as exc:
        raise FilesystemError("failed to install pre-commit hook", exc) from exc
    return hook
