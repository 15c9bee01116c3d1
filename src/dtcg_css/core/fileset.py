"""File discovery and writing for build output."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def discover_css_files(root: Path, exclude: str = "index.css") -> list[str]:
    """
    Find every ``.css`` file below *root*.

    Returns POSIX paths relative to *root*, sorted. A missing directory is
    not an error: it is logged and treated as empty.
    """
    if not root.is_dir():
        logger.info("Note: Could not read directory %s", root)
        return []
    files = [
        p.relative_to(root).as_posix()
        for p in root.rglob("*.css")
        if p.is_file() and p.name != exclude
    ]
    return sorted(set(files))


def atomic_write(path: Path, text: str) -> None:
    """Write *text* to *path* via a temp file so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
