"""Where the build reads its inputs from and writes its output to."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from catipedia.config import Settings

STATIC_FILES: tuple[str, ...] = (
    "index.html",
    "article.html",
    "compare.html",
    "favicon.svg",
    "manifest.json",
    "robots.txt",
    "sitemap.xml",
)
REQUIRED_OUTPUT_FILES: tuple[str, ...] = ("index.html",)


@dataclass(frozen=True, slots=True)
class BuildLayout:
    root: Path
    dist: str = "dist"
    src: str = "src"
    css: str = "css"
    js: str = "js"
    static_files: tuple[str, ...] = STATIC_FILES
    required_files: tuple[str, ...] = REQUIRED_OUTPUT_FILES

    @classmethod
    def from_settings(cls, settings: Settings) -> BuildLayout:
        return cls(root=settings.root_path(), dist=settings.dist_dir)

    @property
    def out_dir(self) -> Path:
        return self.root / self.dist

    @property
    def lock_path(self) -> Path:
        out = self.out_dir
        return out.with_name(f"{out.name}.lock")

    def source(self, relative: str) -> Path:
        return self.root / relative

    def static_pairs(self) -> list[tuple[Path, Path]]:
        """(source, destination-relative-to-output) for each static file."""
        return [(self.root / name, Path(name)) for name in self.static_files]
