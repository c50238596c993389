"""Filesystem path helpers shared across common modules."""

from __future__ import annotations

import os
from pathlib import Path


def ensure_dir(path: Path | str) -> Path:
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p


def normalize_path(path: Path | str) -> Path:
    """Absolute, lexically normalized path (no symlink resolution, no trailing separator)."""
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))
