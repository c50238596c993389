"""
lister.errors

Error taxonomy for directory listing. Each error also derives from the
matching builtin so callers catching ``FileNotFoundError``,
``PermissionError`` or ``ValueError`` keep working.
"""

from __future__ import annotations


class ListerError(Exception):
    """Base class for all file lister errors."""


class NotFoundError(ListerError, FileNotFoundError):
    """The scan root does not exist."""


class RootNotDirectoryError(ListerError, NotADirectoryError):
    """The scan root exists but is not a directory."""


class ScanPermissionError(ListerError, PermissionError):
    """A directory below the root could not be read."""


class ConfigError(ListerError, ValueError):
    """Extension set or configuration file is empty or malformed."""
