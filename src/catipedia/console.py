"""Colour helpers for the human-facing reports printed by each stage."""

from __future__ import annotations

from catipedia.pipeline import StepOutcome


def _green(text: str) -> str:
    return f"\033[32m{text}\033[0m"


def _red(text: str) -> str:
    return f"\033[31m{text}\033[0m"


def _yellow(text: str) -> str:
    return f"\033[33m{text}\033[0m"


def _bold(text: str) -> str:
    return f"\033[1m{text}\033[0m"


def section(title: str) -> None:
    print(f"\n{_bold(title)}")


def success(message: str) -> None:
    print(_green(message))


def failure(message: str) -> None:
    print(_red(message))


def warning(message: str) -> None:
    print(_yellow(message))


def mark(passed: bool, *, optional: bool = False) -> str:
    if passed:
        return _green("✓")
    return _yellow("⚠") if optional else _red("✗")


def print_outcomes(outcomes: list[StepOutcome]) -> None:
    for outcome in outcomes:
        line = f"  {mark(outcome.passed)} {outcome.name} ({outcome.seconds}s)"
        if not outcome.passed and outcome.error:
            line = f"{line}: {outcome.error}"
        print(line)
