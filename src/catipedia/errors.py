"""Catipedia tooling exception hierarchy.

All stage failures inherit from CatipediaError so the CLI layer can
report them uniformly and exit non-zero.
"""


class CatipediaError(Exception):
    """Base exception for all Catipedia tooling errors."""


class ConfigError(CatipediaError):
    """Invalid or missing configuration (unknown environment, bad settings)."""


class RequirementError(CatipediaError):
    """A required external tool is missing or too old."""


class FilesystemError(CatipediaError):
    """A filesystem operation failed; the message names the operation."""

    def __init__(self, operation: str, cause: BaseException | str) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation


class CommandError(CatipediaError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, command: list[str], exit_code: int, detail: str = "") -> None:
        shown = " ".join(command)
        message = f"`{shown}` exited with status {exit_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code


class BuildValidationError(CatipediaError):
    """Build output is missing required files or is empty."""

    def __init__(self, message: str, *, missing: list[str] | None = None) -> None:
        super().__init__(message)
        self.missing = list(missing or [])


class BuildLockedError(CatipediaError):
    """Another build currently holds the output directory lock."""


class StepError(CatipediaError):
    """A pipeline step failed; wraps the underlying cause."""

    def __init__(self, step: str, cause: BaseException) -> None:
        super().__init__(f"{step} failed: {cause}")
        self.step = step
        self.cause = cause
