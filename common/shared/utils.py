"""
common.shared.utils

Progress helper shared by the command-line tools.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from tqdm import tqdm


class Progress:
    """
    Thin wrapper around a tqdm counter that closes itself on completion
    or interruption. The total is unknown for lazy walks, so tqdm shows a
    running count instead of a bar.
    """

    def __init__(self, iterable: Iterable[Any], desc: str = "Processing", disable: bool = False):
        self._tqdm = tqdm(iterable, desc=desc, unit="entry", leave=False, dynamic_ncols=True, disable=disable)

    def __iter__(self) -> Iterator[Any]:
        try:
            yield from self._tqdm
        finally:
            self._tqdm.close()
