"""CSS/JS compaction for production builds.

Both minifiers strip comments and collapse whitespace. They work on the
token level rather than a full grammar, so treat the output as cosmetic
compaction: unusual constructs can still come out changed.
"""

from __future__ import annotations

import logging
import shutil
from enum import StrEnum
from pathlib import Path

import rcssmin
import rjsmin

from catipedia.errors import FilesystemError

logger = logging.getLogger(__name__)


class AssetKind(StrEnum):
    CSS = "css"
    JS = "js"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


def minify(text: str, kind: AssetKind) -> str:
    if kind is AssetKind.CSS:
        return rcssmin.cssmin(text).strip()
    if kind is AssetKind.JS:
        return rjsmin.jsmin(text).strip()
    raise ValueError(f"unsupported asset kind: {kind!r}")


def process_assets(
    src_dir: Path, dest_dir: Path, kind: AssetKind, *, production: bool
) -> list[Path]:
    """Copy every top-level ``*.css``/``*.js`` file of *src_dir* into *dest_dir*.

    Files are minified only for production builds; otherwise they are copied
    byte for byte. A missing *src_dir* is not an error.
    """
    if not src_dir.is_dir():
        logger.warning("no %s directory found at %s, skipping", kind.value.upper(), src_dir)
        return []

    written: list[Path] = []
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        for src in sorted(src_dir.iterdir()):
            if not src.is_file() or src.suffix != kind.suffix:
                continue
            dest = dest_dir / src.name
            if production:
                # Undecodable bytes become U+FFFD instead of aborting the build.
                original = src.read_text(encoding="utf-8", errors="replace")
                compact = minify(original, kind)
                dest.write_text(compact, encoding="utf-8")
                logger.debug(
                    "minified %s (%d -> %d chars)", src.name, len(original), len(compact)
                )
            else:
                shutil.copyfile(src, dest)
                logger.debug("copied %s", src.name)
            written.append(dest)
    except OSError as exc:
        raise FilesystemError(f"failed to process {kind.value.upper()} files", exc) from exc
    return written
