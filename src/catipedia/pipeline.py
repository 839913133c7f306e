"""Ordered step execution: run each step in turn, stop at the first failure."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from catipedia.errors import CatipediaError, StepError
from catipedia.logging import bind_context, unbind_context

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Step:
    name: str
    fn: Callable[[], object]
    # A non-fatal step logs its failure as a warning and the pipeline goes on.
    fatal: bool = True


@dataclass(slots=True)
class StepOutcome:
    name: str
    passed: bool
    seconds: float
    error: str = ""


@dataclass(slots=True)
class Pipeline:
    stage: str
    steps: list[Step] = field(default_factory=list)
    outcomes: list[StepOutcome] = field(default_factory=list)

    def add(self, name: str, fn: Callable[[], object], *, fatal: bool = True) -> Pipeline:
        self.steps.append(Step(name=name, fn=fn, fatal=fatal))
        return self

    def run(self) -> StepError | None:
        """Execute the steps in order and return the first fatal failure, if any."""
        self.outcomes.clear()
        bind_context(stage=self.stage)
        try:
            for step in self.steps:
                failure = self._run_step(step)
                if failure is not None:
                    return failure
        finally:
            unbind_context("stage")
        return None

    def _run_step(self, step: Step) -> StepError | None:
        bind_context(step=step.name)
        started = time.monotonic()
        try:
            step.fn()
        except (CatipediaError, OSError) as exc:
            elapsed = round(time.monotonic() - started, 2)
            self.outcomes.append(
                StepOutcome(name=step.name, passed=False, seconds=elapsed, error=str(exc))
            )
            if not step.fatal:
                logger.warning("%s failed, continuing: %s", step.name, exc)
                return None
            return exc if isinstance(exc, StepError) else StepError(step.name, exc)
        finally:
            unbind_context("step")

        elapsed = round(time.monotonic() - started, 2)
        self.outcomes.append(StepOutcome(name=step.name, passed=True, seconds=elapsed))
        logger.debug("%s done in %.2fs", step.name, elapsed)
        return None

    @property
    def passed(self) -> bool:
        return all(outcome.passed for outcome in self.outcomes)
