"""Command-line interface package for exploring analysis results."""

from .app import build_parser, configure_logging, criteria_from_args, main, run

__all__ = [
    "build_parser",
    "configure_logging",
    "criteria_from_args",
    "main",
    "run",
]
