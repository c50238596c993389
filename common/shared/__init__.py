"""Reporting and progress helpers shared by the command-line tools."""
