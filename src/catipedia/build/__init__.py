"""Static site build stage."""

from catipedia.build.layout import BuildLayout
from catipedia.build.runner import BuildManager, BuildOptions, BuildReport, run_build

__all__ = ["BuildLayout", "BuildManager", "BuildOptions", "BuildReport", "run_build"]
