"""Verbatim copies into the output tree."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from catipedia.errors import FilesystemError

logger = logging.getLogger(__name__)


def copy_static_files(pairs: Iterable[tuple[Path, Path]], out_dir: Path) -> list[Path]:
    """Copy each existing source to ``out_dir / dest``; absent sources are skipped."""
    copied: list[Path] = []
    for src, dest in pairs:
        if not src.is_file():
            logger.debug("skipping missing static file %s", src)
            continue
        target = out_dir / dest
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, target)
        except OSError as exc:
            raise FilesystemError(f"failed to copy {src}", exc) from exc
        logger.debug("copied %s -> %s", src, dest)
        copied.append(target)
    return copied


def copy_tree(src: Path, dest: Path) -> None:
    """Recursively copy *src* into *dest*.

    Symlinked files are copied as regular files; symlinked directories are
    skipped so a link cycle cannot recurse forever.
    """
    if not src.exists():
        return
    dest.mkdir(parents=True, exist_ok=True)
    for entry in sorted(src.iterdir()):
        target = dest / entry.name
        if entry.is_symlink() and entry.is_dir():
            logger.debug("skipping symlinked directory %s", entry)
            continue
        if entry.is_dir():
            copy_tree(entry, target)
        else:
            shutil.copyfile(entry, target)
