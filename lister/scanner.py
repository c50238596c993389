"""
lister.scanner

Lazy directory-tree listing. ``scan`` yields one ``Entry`` per filesystem
node below (and including) the root; ``iter_files`` and ``list_names``
narrow that stream down to regular files, optionally at a single depth and
with one of a set of extensions.

Walk order is depth-first pre-order: the root first, then each child in
the order ``os.walk`` lists it (subdirectories before files), with every
subdirectory followed directly by its whole subtree. Symlinked
directories are reported but never followed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from common.base.fs import normalize_path
from common.base.logging import get_logger

from .errors import ConfigError, NotFoundError, RootNotDirectoryError, ScanPermissionError
from .matcher import ExtensionMatcher, build_matcher

log = get_logger(__name__)

PathLike = Union[str, "os.PathLike[str]"]
ExtensionFilter = Union[ExtensionMatcher, Iterable[str], None]


@dataclass(frozen=True)
class Entry:
    """One filesystem node met during a scan."""

    path: Path
    is_file: bool
    depth: int

    @property
    def name(self) -> str:
        return self.path.name


def _validate_root(root: PathLike) -> Path:
    base = normalize_path(root)
    if not base.exists():
        raise NotFoundError(f"Root directory not found: {base}")
    if not base.is_dir():
        raise RootNotDirectoryError(f"Root path is not a directory: {base}")
    return base


def _validate_depth(depth: Optional[int]) -> Optional[int]:
    if depth is None:
        return None
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
        raise ConfigError(f"Depth must be a non-negative integer, got {depth!r}")
    return depth


def _coerce_matcher(extensions: ExtensionFilter) -> Optional[ExtensionMatcher]:
    if extensions is None or isinstance(extensions, ExtensionMatcher):
        return extensions
    return build_matcher(extensions)


class DirectoryScanner:
    """
    Walks directory trees and filters the resulting entries.

    Args:
        skip_unreadable: When False (default) a directory that cannot be
            listed aborts the scan with ``ScanPermissionError`` (or the
            original ``OSError``). When True the directory is logged,
            recorded in ``skipped`` and the rest of the tree is still listed.
    """

    def __init__(self, skip_unreadable: bool = False) -> None:
        self.skip_unreadable = skip_unreadable
        self.skipped: List[Path] = []

    # ------------------------------------------------------------------
    # TRAVERSAL
    # ------------------------------------------------------------------

    def scan(self, root: PathLike) -> Iterator[Entry]:
        """
        Return a lazy iterator over every entry below ``root``, root first.

        The root is checked immediately, so a missing root raises
        ``NotFoundError`` before any entry is produced. Each call gets a
        fresh ``skipped`` list; ``self.skipped`` points at the list of the
        most recent call, and lists from earlier calls keep filling in as
        their iterators advance.
        """
        base = _validate_root(root)
        skipped: List[Path] = []
        self.skipped = skipped
        return self._walk(base, skipped)

    def _walk(self, base: Path, skipped: List[Path]) -> Iterator[Entry]:
        log.debug("Scanning directory: %s", base)
        yield Entry(path=base, is_file=False, depth=0)

        produced = 1
        pending = [self._children(base, 1, skipped)]
        while pending:
            item = next(pending[-1], None)
            if item is None:
                pending.pop()
                continue
            entry, descend = item
            produced += 1
            yield entry
            if descend:
                pending.append(self._children(entry.path, entry.depth + 1, skipped))

        log.debug("Scan of %s finished: %d entries, %d skipped", base, produced, len(skipped))

    def _children(self, directory: Path, depth: int, skipped: List[Path]) -> Iterator[tuple]:
        """Yield ``(entry, descend)`` for the direct children of ``directory``."""

        def on_error(error: OSError) -> None:
            self._on_walk_error(error, skipped)

        # Only the top level of os.walk is consumed; descent is driven by _walk.
        listing = next(os.walk(directory, onerror=on_error), None)
        if listing is None:
            return
        _, dirnames, filenames = listing
        for dirname in dirnames:
            path = directory / dirname
            yield Entry(path=path, is_file=False, depth=depth), not os.path.islink(path)
        for filename in filenames:
            path = directory / filename
            yield Entry(path=path, is_file=os.path.isfile(path), depth=depth), False

    def _on_walk_error(self, error: OSError, skipped: List[Path]) -> None:
        path = Path(error.filename) if error.filename else None
        if self.skip_unreadable:
            log.warning("⚠️ Skipping unreadable directory %s: %s", path, error.strerror or error)
            if path is not None:
                skipped.append(path)
            return
        if isinstance(error, PermissionError):
            raise ScanPermissionError(
                error.errno, f"Cannot read directory: {error.strerror}", error.filename
            ) from error
        raise error

    # ------------------------------------------------------------------
    # FILTERED VIEWS
    # ------------------------------------------------------------------

    def iter_files(
        self,
        root: PathLike,
        depth: Optional[int] = None,
        extensions: ExtensionFilter = None,
    ) -> Iterator[Entry]:
        """
        Yield regular-file entries, optionally filtered by depth and extension.

        Args:
            root: Directory to scan.
            depth: Number of directories strictly between ``root`` and the
                file. ``0`` keeps files directly inside ``root``.
            extensions: Bare extensions (``["jpg", "txt"]``) or a prebuilt
                ``ExtensionMatcher``.
        """
        wanted_depth = _validate_depth(depth)
        matcher = _coerce_matcher(extensions)
        return self._filter(self.scan(root), wanted_depth, matcher)

    @staticmethod
    def _filter(
        entries: Iterator[Entry],
        depth: Optional[int],
        matcher: Optional[ExtensionMatcher],
    ) -> Iterator[Entry]:
        for entry in entries:
            if depth is not None and entry.depth - 1 != depth:
                continue
            if not is_regular_file(entry):
                continue
            if matcher is not None and not matcher.matches(entry.name):
                continue
            yield entry

    def list_names(
        self,
        root: PathLike,
        depth: Optional[int] = None,
        extensions: ExtensionFilter = None,
    ) -> Iterator[str]:
        """Base names of the files ``iter_files`` would yield, in the same order."""
        return (entry.name for entry in self.iter_files(root, depth=depth, extensions=extensions))


# ----------------------------------------------------------------------
# PREDICATES
# ----------------------------------------------------------------------

def is_regular_file(entry: Entry) -> bool:
    return entry.is_file


def depth_of(entry: Union[Entry, PathLike], root: PathLike) -> int:
    """
    Count the path segments between ``root`` and ``entry``.

    Both sides are normalized first, so ``"data"``, ``"./data/"`` and the
    absolute spelling of the same directory give the same answer.
    ``depth_of(root, root) == 0``; a direct child is ``1``.

    Raises:
        ValueError: If ``entry`` does not live under ``root``.
    """
    target = normalize_path(entry.path if isinstance(entry, Entry) else entry)
    base = normalize_path(root)
    try:
        relative = target.relative_to(base)
    except ValueError as exc:
        raise ValueError(f"{target} is not inside {base}") from exc
    return len(relative.parts)


# ----------------------------------------------------------------------
# MODULE-LEVEL SHORTCUTS
# ----------------------------------------------------------------------

def scan(root: PathLike, *, skip_unreadable: bool = False) -> Iterator[Entry]:
    return DirectoryScanner(skip_unreadable=skip_unreadable).scan(root)


def iter_files(
    root: PathLike,
    depth: Optional[int] = None,
    extensions: ExtensionFilter = None,
    *,
    skip_unreadable: bool = False,
) -> Iterator[Entry]:
    return DirectoryScanner(skip_unreadable=skip_unreadable).iter_files(
        root, depth=depth, extensions=extensions
    )


def list_names(
    root: PathLike,
    depth: Optional[int] = None,
    extensions: ExtensionFilter = None,
    *,
    skip_unreadable: bool = False,
) -> Iterator[str]:
    return DirectoryScanner(skip_unreadable=skip_unreadable).list_names(
        root, depth=depth, extensions=extensions
    )
