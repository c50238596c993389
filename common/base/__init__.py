"""Low-level shared utilities for the file lister."""

from .logging import get_logger, setup_logging, ListerLogger

__all__ = [
    "get_logger",
    "setup_logging",
    "ListerLogger",
]
