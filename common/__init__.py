"""Shared infrastructure: logging, file I/O, reporting."""
