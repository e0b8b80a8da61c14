"""Adapter layer package for reading serialized analysis results."""

from .results_loader import ResultsLoader, ResultsLoaderError

__all__ = [
    "ResultsLoader",
    "ResultsLoaderError",
]
