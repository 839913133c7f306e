"""Output directory preparation, locking and validation."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path
from types import TracebackType

from catipedia.errors import BuildLockedError, BuildValidationError, FilesystemError

logger = logging.getLogger(__name__)


def prepare_output_dir(path: Path) -> None:
    """Remove *path* recursively (if present) and recreate it empty."""
    try:
        shutil.rmtree(path)
        logger.debug("removed %s", path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise FilesystemError(f"failed to clean build directory {path}", exc) from exc
    ensure_output_dir(path)


def ensure_output_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"failed to create build directory {path}", exc) from exc


def validate_output(path: Path, required: Iterable[str]) -> None:
    """Fail unless every required file exists in *path* and it is non-empty."""
    missing = [name for name in required if not (path / name).is_file()]
    if missing:
        raise BuildValidationError(
            f"missing required files: {', '.join(missing)}", missing=missing
        )
    try:
        empty = next(path.iterdir(), None) is None
    except OSError as exc:
        raise FilesystemError(f"failed to read build directory {path}", exc) from exc
    if empty:
        raise BuildValidationError("build directory is empty")


class BuildLock:
    """Exclusive lock file guarding an output directory for one build.

    The lock is a sibling file created with O_EXCL; a second build against
    the same output directory fails instead of racing the first one.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._held = False

    def acquire(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError as exc:
            raise BuildLockedError(
                f"another build holds {self.path}; remove it if no build is running"
            ) from exc
        except OSError as exc:
            raise FilesystemError(f"failed to create lock file {self.path}", exc) from exc
        with os.fdopen(fd, "w") as handle:
            handle.write(f"{os.getpid()}\n")
        self._held = True

    def release(self) -> None:
        if not self._held:
            return
        self.path.unlink(missing_ok=True)
        self._held = False

    def __enter__(self) -> BuildLock:
        self.acquire()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
