"""File I/O helpers with the lister's encoding defaults."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import yaml


DEFAULT_ENCODING = "utf-8"


def to_path(path: Path | str) -> Path:
    return Path(path).expanduser()


@contextmanager
def open_text(
    path: Path | str,
    mode: str = "r",
    *,
    encoding: str = DEFAULT_ENCODING,
    newline: Optional[str] = None,
) -> Iterator[Any]:
    if "b" in mode:
        raise ValueError("open_text only supports text modes")
    with open(to_path(path), mode, encoding=encoding, newline=newline) as handle:
        yield handle


def read_yaml(path: Path | str) -> Mapping[str, Any] | list[Any]:
    """Load a YAML document; an empty file reads as an empty mapping."""
    with open_text(path, "r") as handle:
        data = yaml.safe_load(handle)
    return data if data is not None else {}

