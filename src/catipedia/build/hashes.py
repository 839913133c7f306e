"""Cache-busting content hashes for built CSS/JS assets."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

from catipedia.errors import FilesystemError

logger = logging.getLogger(__name__)

HASH_MANIFEST = "hashes.json"
HASHED_SUFFIXES = frozenset({".css", ".js"})
_DIGEST_CHARS = 8


def content_hash(data: bytes) -> str:
    """First eight lowercase hex characters of the MD5 digest of *data*."""
    return hashlib.md5(data, usedforsecurity=False).hexdigest()[:_DIGEST_CHARS]


def generate_hashes(out_dir: Path) -> dict[str, str]:
    """Map each CSS/JS file under *out_dir* (POSIX relative path) to its hash."""
    hashes: dict[str, str] = {}
    if not out_dir.is_dir():
        return hashes
    try:
        for path in sorted(out_dir.rglob("*")):
            if not path.is_file() or path.suffix not in HASHED_SUFFIXES:
                continue
            relative = path.relative_to(out_dir).as_posix()
            hashes[relative] = content_hash(path.read_bytes())
            logger.debug("hash for %s: %s", relative, hashes[relative])
    except OSError as exc:
        raise FilesystemError("failed to generate hashes", exc) from exc
    return hashes


def write_hash_manifest(out_dir: Path, hashes: dict[str, str]) -> Path:
    path = out_dir / HASH_MANIFEST
    try:
        path.write_text(json.dumps(hashes, indent=2, sort_keys=True))
    except OSError as exc:
        raise FilesystemError(f"failed to write {path}", exc) from exc
    return path
