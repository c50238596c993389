"""
lister

Lazy directory-tree listing with depth and extension filters.

Modules:
  scanner.py : DirectoryScanner, Entry, scan / iter_files / list_names, depth_of
  matcher.py : ExtensionMatcher built from literal extensions
  errors.py  : error taxonomy
  config.py  : YAML configuration for the file_list task
  report.py  : CSV export of listed entries
  cli.py     : the file-list command
"""

from .errors import ConfigError, ListerError, NotFoundError, RootNotDirectoryError, ScanPermissionError
from .matcher import ExtensionMatcher, build_matcher
from .scanner import (
    DirectoryScanner,
    Entry,
    depth_of,
    is_regular_file,
    iter_files,
    list_names,
    scan,
)

__all__ = [
    "ConfigError",
    "ListerError",
    "NotFoundError",
    "RootNotDirectoryError",
    "ScanPermissionError",
    "ExtensionMatcher",
    "build_matcher",
    "DirectoryScanner",
    "Entry",
    "depth_of",
    "is_regular_file",
    "iter_files",
    "list_names",
    "scan",
]
