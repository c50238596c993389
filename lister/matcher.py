"""
lister.matcher

Extension predicate compiled from a set of literal suffixes.

Every extension is escaped before it joins the combined pattern, so
``"c++"`` or ``"tar.gz"`` match literally instead of being read as regex.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import ConfigError

_FORBIDDEN_CHARS = {"/", "\0", os.sep} | ({os.altsep} if os.altsep else set())


@dataclass(frozen=True)
class ExtensionMatcher:
    """Immutable, case-sensitive "name ends in .<ext>" predicate."""

    extensions: Tuple[str, ...]
    pattern: re.Pattern[str]

    def matches(self, file_name: str) -> bool:
        return self.pattern.fullmatch(file_name) is not None

    __call__ = matches


def _normalize_extension(value: object) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Extension must be a string, got {type(value).__name__}: {value!r}")
    ext = value[1:] if value.startswith(".") else value
    if not ext or not ext.strip():
        raise ConfigError(f"Extension must not be empty: {value!r}")
    if ext != ext.strip():
        raise ConfigError(f"Extension must not carry surrounding whitespace: {value!r}")
    bad = sorted(ch for ch in _FORBIDDEN_CHARS if ch in ext)
    if bad:
        raise ConfigError(f"Extension {value!r} contains forbidden characters: {bad!r}")
    return ext


def build_matcher(extensions: Iterable[str]) -> ExtensionMatcher:
    """
    Build a matcher for file names ending in ``.`` plus one of ``extensions``.

    Args:
        extensions: Non-empty ordered collection of bare extensions
            (``["jpg", "txt"]``). A single leading dot is tolerated.

    Raises:
        ConfigError: If the collection is empty, is a bare string, or holds
            an element that is not a usable extension.
    """
    if isinstance(extensions, (str, bytes)):
        raise ConfigError(f"Expected a collection of extensions, got a single string: {extensions!r}")

    normalized: list[str] = []
    for value in extensions:
        ext = _normalize_extension(value)
        if ext not in normalized:
            normalized.append(ext)
    if not normalized:
        raise ConfigError("Extension set must contain at least one extension")

    alternatives = "|".join(re.escape(ext) for ext in normalized)
    pattern = re.compile(rf"^.*\.(?:{alternatives})$", re.DOTALL)
    return ExtensionMatcher(extensions=tuple(normalized), pattern=pattern)
