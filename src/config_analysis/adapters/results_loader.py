from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


class ResultsLoaderError(RuntimeError):
    """Exception raised when analysis results cannot be read."""


class ResultsLoader:
    """Load serialized configuration analysis results from a JSON or YAML file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path).resolve()

    def load(self) -> Dict[str, Any]:
        """Return the raw results mapping stored in the file."""

        if not self.path.exists():
            raise ResultsLoaderError(f"Analysis results file not found: {self.path}")
        if not self.path.is_file():
            raise ResultsLoaderError(f"Analysis results path is not a file: {self.path}")

        if self.path.suffix.lower() == ".json":
            data = self._load_json(self.path)
        else:
            data = self._load_yaml(self.path)

        if not isinstance(data, dict):
            raise ResultsLoaderError(f"Analysis results must be a mapping: {self.path}")

        logger.info("Loaded analysis results from %s", self.path)
        return data

    # Format helpers -------------------------------------------------------------
    def _load_json(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            try:
                return json.load(handle)
            except json.JSONDecodeError as exc:
                raise ResultsLoaderError(f"Invalid JSON in analysis results: {path}") from exc
            except UnicodeDecodeError as exc:
                raise ResultsLoaderError(f"Analysis results are not UTF-8 text: {path}") from exc

    def _load_yaml(self, path: Path) -> Any:
        with path.open("r", encoding="utf-8") as handle:
            try:
                return yaml.safe_load(handle)
            except yaml.YAMLError as exc:
                raise ResultsLoaderError(f"Invalid YAML in analysis results: {path}") from exc
            except UnicodeDecodeError as exc:
                raise ResultsLoaderError(f"Analysis results are not UTF-8 text: {path}") from exc


__all__ = ["ResultsLoader", "ResultsLoaderError"]
