"""
common.shared.report

CSV reporting helpers:
 - timestamped report filenames
 - single and batched CSV writers
 - human-readable summary blocks
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from common.base.file_io import open_text
from common.base.fs import ensure_dir
from common.base.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ColumnSpec:
    key: str
    header: str


# ----------------------------------------------------------------------
# TIMESTAMPED FILENAMES
# ----------------------------------------------------------------------

def timestamped_filename(base_name: str, ext: str = "csv", output_dir: Optional[Path] = None) -> Path:
    """
    Generate a timestamped output filename (e.g., file_list_2025-10-06_103000.csv)
    """
    ts = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    output_dir = ensure_dir(output_dir or Path.cwd())
    return output_dir / f"{base_name}_{ts}.{ext}"


# ----------------------------------------------------------------------
# CSV WRITERS
# ----------------------------------------------------------------------

def write_csv(
    rows: Sequence[Mapping[str, Any]],
    output_path: Path,
    columns: Sequence[ColumnSpec],
) -> Path:
    """Write ``rows`` to ``output_path`` with one header line built from ``columns``."""
    ensure_dir(output_path.parent)
    with open_text(output_path, "w", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow([column.header for column in columns])
        for row in rows:
            writer.writerow([row.get(column.key, "") for column in columns])
    log.debug("📊 CSV report saved → %s", output_path)
    return output_path


def write_csv_batches(
    rows: Sequence[Mapping[str, Any]],
    base_name: str,
    columns: Sequence[ColumnSpec],
    output_dir: Optional[Path] = None,
    batch_size: Optional[int] = None,
) -> List[Path]:
    """
    Write rows to one CSV, or to ``_partNN`` chunks when ``batch_size`` is positive
    and smaller than the row count. An empty row set still yields one
    header-only file.
    """
    base_path = timestamped_filename(base_name, "csv", output_dir)

    if not batch_size or batch_size <= 0 or len(rows) <= batch_size:
        return [write_csv(rows, base_path, columns)]

    stem = base_path.stem
    suffix = base_path.suffix
    paths: List[Path] = []
    for index, start in enumerate(range(0, len(rows), batch_size), start=1):
        chunk = rows[start : start + batch_size]
        chunk_path = base_path.with_name(f"{stem}_part{index:02d}{suffix}")
        paths.append(write_csv(chunk, chunk_path, columns))
    return paths


# ----------------------------------------------------------------------
# HUMAN-READABLE SUMMARY
# ----------------------------------------------------------------------

def summarize_counts(title: str, summary: Dict[str, int]) -> str:
    """
    Return a formatted, human-readable summary string.
    Example:
        summarize_counts("Listing Summary", {"Files": 12, "Skipped dirs": 1})
    """
    lines = [f"===== {title.upper()} ====="]
    for key, val in summary.items():
        lines.append(f"{key}: {val}")
    lines.append("=" * len(lines[0]))
    return "\n".join(lines)
