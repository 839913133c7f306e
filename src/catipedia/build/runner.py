"""Build stage: turn the site sources into a deployable output directory."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

from catipedia.build.copier import copy_static_files, copy_tree
from catipedia.build.hashes import generate_hashes, write_hash_manifest
from catipedia.build.layout import BuildLayout
from catipedia.build.minify import AssetKind, process_assets
from catipedia.build.output import (
    BuildLock,
    ensure_output_dir,
    prepare_output_dir,
    validate_output,
)
from catipedia.errors import FilesystemError
from catipedia.pipeline import Pipeline, StepOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildOptions:
    production: bool = False
    clean: bool = True


@dataclass(slots=True)
class BuildReport:
    out_dir: Path
    production: bool
    hashes: dict[str, str] = field(default_factory=dict)
    copied: list[Path] = field(default_factory=list)
    outcomes: list[StepOutcome] = field(default_factory=list)
    seconds: float = 0.0


class BuildManager:
    def __init__(self, layout: BuildLayout, options: BuildOptions) -> None:
        self.layout = layout
        self.options = options
        self.report = BuildReport(out_dir=layout.out_dir, production=options.production)

    def clean_output(self) -> None:
        if not self.options.clean:
            logger.debug("skipping clean step")
            ensure_output_dir(self.layout.out_dir)
            return
        logger.info("cleaning build directory %s", self.layout.out_dir)
        prepare_output_dir(self.layout.out_dir)

    def copy_static(self) -> None:
        logger.info("copying static files")
        copied = copy_static_files(self.layout.static_pairs(), self.layout.out_dir)
        self.report.copied.extend(copied)

    def process_css(self) -> None:
        self._process(AssetKind.CSS, self.layout.css)

    def process_js(self) -> None:
        self._process(AssetKind.JS, self.layout.js)

    def _process(self, kind: AssetKind, relative: str) -> None:
        logger.info("processing %s files", kind.value.upper())
        written = process_assets(
            self.layout.source(relative),
            self.layout.out_dir / relative,
            kind,
            production=self.options.production,
        )
        self.report.copied.extend(written)

    def process_sources(self) -> None:
        src = self.layout.source(self.layout.src)
        if not src.is_dir():
            logger.debug("no src directory found, skipping")
            return
        logger.info("copying source tree")
        try:
            copy_tree(src, self.layout.out_dir / self.layout.src)
        except OSError as exc:
            raise FilesystemError("failed to process source files", exc) from exc

    def write_hashes(self) -> None:
        if not self.options.production:
            logger.debug("skipping hash generation outside production")
            return
        logger.info("generating file hashes")
        hashes = generate_hashes(self.layout.out_dir)
        write_hash_manifest(self.layout.out_dir, hashes)
        self.report.hashes = hashes

    def validate(self) -> None:
        logger.info("validating build output")
        validate_output(self.layout.out_dir, self.layout.required_files)

    def pipeline(self) -> Pipeline:
        return (
            Pipeline(stage="build")
            .add("clean build directory", self.clean_output)
            .add("copy static files", self.copy_static)
            .add("process CSS", self.process_css)
            .add("process JavaScript", self.process_js)
            .add("process source files", self.process_sources)
            .add("generate hashes", self.write_hashes)
            .add("validate build", self.validate)
        )

    def build(self) -> BuildReport:
        """Run every build step under the output lock; raise the first failure."""
        started = time.monotonic()
        pipeline = self.pipeline()
        with BuildLock(self.layout.lock_path):
            failure = pipeline.run()
        self.report.outcomes = list(pipeline.outcomes)
        self.report.seconds = round(time.monotonic() - started, 2)
        if failure is not None:
            raise failure
        return self.report


def run_build(layout: BuildLayout, options: BuildOptions) -> BuildReport:
    return BuildManager(layout, options).build()
