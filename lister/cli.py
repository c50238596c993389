"""
lister.cli

``file-list`` command: list the files of a directory tree, optionally only
at one depth and only with given extensions, either as names on stdout or
as CSV reports.

Usage examples:
  file-list ./photos -e jpg -e png
  file-list /mnt/media --depth 0 --full-path
  file-list /mnt/media --csv --output-dir ./reports --batch-size 500
  file-list --config configs/config.yaml
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from common.base.logging import get_logger, setup_logging
from common.shared.report import summarize_counts
from common.shared.utils import Progress

from .config import default_config_candidates, load_task_config
from .errors import ConfigError, ListerError
from .report import write_listing
from .scanner import DirectoryScanner

log = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-list",
        description="List the files of a directory tree, filtered by depth and extension.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        help="Root directory to scan (defaults to the first root in the config file).",
    )
    parser.add_argument(
        "--ext",
        "-e",
        dest="extensions",
        action="append",
        metavar="EXT",
        help="Keep only files ending in .EXT (repeatable, case-sensitive).",
    )
    parser.add_argument(
        "--depth",
        "-d",
        type=_non_negative_int,
        help="Keep only files this many directories below the root (0 = directly inside it).",
    )
    parser.add_argument(
        "--full-path",
        action="store_true",
        default=None,
        help="Print full paths instead of base names.",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Write CSV report file(s) instead of printing names.",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        help="Directory for CSV reports (defaults to cwd).",
    )
    parser.add_argument(
        "--base-name",
        "-b",
        help="Base name for CSV reports (timestamp is appended; default: file_list).",
    )
    parser.add_argument(
        "--batch-size",
        type=_non_negative_int,
        help="Split CSV output into parts of at most N rows.",
    )
    parser.add_argument(
        "--skip-unreadable",
        action="store_true",
        default=None,
        help="Skip directories that cannot be read instead of aborting.",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress counter while writing CSV.",
    )
    parser.add_argument(
        "--no-rich",
        action="store_true",
        help="Use plain console logging instead of Rich.",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to YAML configuration (defaults to ./configs/config.yaml when root is omitted).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING, or the config file's level).",
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge command-line flags over the optional ``file_list`` config task."""

    config: Dict[str, Any] = {}
    if args.config:
        config = load_task_config(args.config)
    elif not args.root:
        config_path = next((c for c in default_config_candidates() if c.exists()), None)
        if config_path is None:
            raise ConfigError("No root directory given and no configuration file found. Pass ROOT or --config.")
        config = load_task_config(config_path)

    logging_cfg = dict(config.get("__logging__") or {})
    if args.log_level:
        logging_cfg["level"] = args.log_level
    elif not config:
        logging_cfg["level"] = "WARNING"
    if args.no_rich:
        logging_cfg["use_rich"] = False

    def pick(flag: Any, key: str, default: Any = None) -> Any:
        if flag is not None:
            return flag
        value = config.get(key)
        return default if value is None else value

    root = args.root or config["roots"][0]
    output_dir = pick(args.output_dir, "output_dir")
    return {
        "root": root,
        "extensions": pick(args.extensions, "extensions"),
        "depth": pick(args.depth, "depth"),
        "full_path": bool(pick(args.full_path, "full_path", False)),
        "output_dir": Path(output_dir).expanduser() if output_dir else None,
        "base_name": pick(args.base_name, "base_name", "file_list"),
        "batch_size": pick(args.batch_size, "batch_size"),
        "skip_unreadable": bool(pick(args.skip_unreadable, "skip_unreadable", False)),
        "logging": logging_cfg,
    }


def run(settings: Dict[str, Any], *, csv_output: bool = False, show_progress: bool = True) -> int:
    scanner = DirectoryScanner(skip_unreadable=settings["skip_unreadable"])
    entries = scanner.iter_files(
        settings["root"],
        depth=settings["depth"],
        extensions=settings["extensions"],
    )
    log.info("🔍 Listing files under %s", settings["root"])

    listed = 0
    if csv_output:
        files = list(Progress(entries, desc="Scanning", disable=not show_progress))
        paths = write_listing(
            files,
            base_name=settings["base_name"],
            output_dir=settings["output_dir"],
            batch_size=settings["batch_size"],
        )
        listed = len(files)
        for path in paths:
            print(path)
    else:
        for entry in entries:
            print(entry.path if settings["full_path"] else entry.name)
            listed += 1

    log.info(
        "%s",
        summarize_counts("Listing Summary", {"Files listed": listed, "Skipped directories": len(scanner.skipped)}),
    )
    return EXIT_OK


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Command-line entry point for the file lister."""

    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        settings = resolve_settings(args)
    except ListerError as exc:
        setup_logging(args.log_level or "WARNING", use_rich=not args.no_rich)
        log.error("❌ %s", exc)
        return EXIT_USAGE

    logging_cfg = settings["logging"]
    setup_logging(
        level=logging_cfg.get("level"),
        use_rich=logging_cfg.get("use_rich"),
        log_dir=logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )
    log.debug("Settings: %s", settings)

    try:
        return run(settings, csv_output=args.csv, show_progress=not args.no_progress)
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        return EXIT_INTERRUPTED
    except ListerError as exc:
        log.error("❌ %s", exc)
        return EXIT_USAGE
    except Exception as exc:
        log.error("❌ Unexpected error: %s", exc, exc_info=True)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
