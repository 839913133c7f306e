"""Synchronous external command execution."""

from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

from catipedia.errors import CommandError

logger = logging.getLogger(__name__)

_MAX_CAPTURE_CHARS = 4000
_EXIT_TIMEOUT = 124
_EXIT_NOT_FOUND = 127


def _truncate(text: str, max_chars: int = _MAX_CAPTURE_CHARS) -> str:
    if len(text) <= max_chars:
        return text
    return f"{text[:max_chars]}...[truncated]"


@dataclass(slots=True)
class CommandResult:
    command: list[str]
    exit_code: int
    stdout: str
    stderr: str
    duration_ms: int
    timed_out: bool = False
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def detail(self) -> str:
        return (self.stderr or self.stdout).strip()


class CommandRunner:
    """Runs external commands one at a time; exit status is the only signal.

    With ``capture=False`` the child inherits stdout/stderr so tools like
    npm can stream their progress. ``dry_run`` logs each command and reports
    success without starting a process.
    """

    def __init__(
        self,
        cwd: Path,
        *,
        timeout_s: int = 900,
        capture: bool = True,
        dry_run: bool = False,
    ) -> None:
        self.cwd = cwd
        self.timeout_s = max(1, timeout_s)
        self.capture = capture
        self.dry_run = dry_run

    def run(self, command: list[str], *, capture: bool | None = None) -> CommandResult:
        capture_output = self.capture if capture is None else capture
        if self.dry_run:
            logger.info("dry run: %s", " ".join(command))
            return CommandResult(
                command=command, exit_code=0, stdout="", stderr="", duration_ms=0, skipped=True
            )

        logger.debug("running %s (cwd=%s)", " ".join(command), self.cwd)
        started = time.monotonic()
        try:
            proc = subprocess.run(
                command,
                cwd=str(self.cwd),
                capture_output=capture_output,
                text=True,
                timeout=self.timeout_s,
                check=False,
            )
        except FileNotFoundError as exc:
            return CommandResult(
                command=command,
                exit_code=_EXIT_NOT_FOUND,
                stdout="",
                stderr=str(exc),
                duration_ms=int((time.monotonic() - started) * 1000),
            )
        except subprocess.TimeoutExpired as exc:
            out = exc.stdout if isinstance(exc.stdout, str) else ""
            err = exc.stderr if isinstance(exc.stderr, str) else ""
            return CommandResult(
                command=command,
                exit_code=_EXIT_TIMEOUT,
                stdout=_truncate(out),
                stderr=_truncate(err) or f"timed out after {self.timeout_s}s",
                duration_ms=int((time.monotonic() - started) * 1000),
                timed_out=True,
            )

        return CommandResult(
            command=command,
            exit_code=int(proc.returncode),
            stdout=_truncate(proc.stdout or ""),
            stderr=_truncate(proc.stderr or ""),
            duration_ms=int((time.monotonic() - started) * 1000),
        )

    def check(self, command: list[str], *, capture: bool | None = None) -> CommandResult:
        """Run *command* and raise CommandError unless it exits 0."""
        result = self.run(command, capture=capture)
        if not result.ok:
            raise CommandError(command, result.exit_code, result.detail())
        return result
