"""
lister.report

CSV export of listed entries. Each row carries the full path, the base
name and the entry depth below the scan root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from common.base.logging import get_logger
from common.shared.report import ColumnSpec, write_csv_batches

from .scanner import Entry

log = get_logger(__name__)

LISTING_COLUMNS: List[ColumnSpec] = [
    ColumnSpec("path", "path"),
    ColumnSpec("name", "name"),
    ColumnSpec("depth", "depth"),
]


def entry_row(entry: Entry) -> dict:
    return {"path": str(entry.path), "name": entry.name, "depth": entry.depth}


def write_listing(
    entries: Iterable[Entry],
    base_name: str = "file_list",
    output_dir: Optional[Path] = None,
    batch_size: Optional[int] = None,
) -> List[Path]:
    """
    Drain ``entries`` and write them as CSV.

    Args:
        entries: Entries to export, typically from ``iter_files``.
        base_name: Base name for the generated files (timestamp is appended).
        output_dir: Destination directory (defaults to cwd).
        batch_size: Split into ``_partNN`` files of at most this many rows.

    Returns:
        Written CSV paths, one per chunk.
    """
    rows = [entry_row(entry) for entry in entries]
    paths = write_csv_batches(rows, base_name, LISTING_COLUMNS, output_dir=output_dir, batch_size=batch_size)
    for path in paths:
        log.info("📄 CSV written to: %s", path)
    return paths
