"""Utilities for loading and merging named query manifest files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

import yaml

from ..models import InvalidCriteriaError, SearchCriteria


class QueryManifestError(RuntimeError):
    """Raised when query manifests cannot be loaded or a query cannot be resolved."""


class QueryForest(str, Enum):
    """Which forest of the results a named query runs against."""

    ALL = "all"
    VALUE_HOSTS = "value-hosts"
    LOOKUP_KEYS = "lookup-keys"


@dataclass(slots=True)
class NamedQuery:
    """Reusable search criteria defined in a manifest."""

    name: str
    criteria: SearchCriteria = SearchCriteria()
    forest: QueryForest = QueryForest.ALL
    description: str | None = None
    enabled: bool = True


_DEFAULT_MANIFEST = Path(__file__).resolve().parent / "manifests" / "default.yaml"


class QueryManifestManager:
    """Load query manifests and resolve named queries."""

    def __init__(self, default_manifests: Sequence[Path | str] | None = None) -> None:
        manifest_paths: List[Path]
        if default_manifests is None:
            manifest_paths = []
            if _DEFAULT_MANIFEST.exists():
                manifest_paths.append(_DEFAULT_MANIFEST)
        else:
            manifest_paths = [Path(path) for path in default_manifests]

        self._default_manifests = manifest_paths

    # ------------------------------------------------------------------
    def load(self, manifests: Sequence[Path | str] | None = None) -> List[NamedQuery]:
        """Return all queries defined by the provided manifests.

        Later entries with the same name override the fields they set.
        """

        manifest_paths = [Path(path) for path in self._default_manifests]
        if manifests:
            manifest_paths.extend(Path(path) for path in manifests)

        queries: MutableMapping[str, NamedQuery] = {}
        for manifest_path in manifest_paths:
            data = self._load_manifest(manifest_path)
            entries = data.get("queries", []) or []
            if not isinstance(entries, list):
                raise QueryManifestError(f"'queries' must be a list in query manifest {manifest_path}")

            for entry in entries:
                if not isinstance(entry, Mapping):
                    raise QueryManifestError(f"Query entries must be mappings in {manifest_path}")
                if not entry.get("name"):
                    continue
                name = str(entry["name"])

                query = queries.get(name, NamedQuery(name=name))
                if "enabled" in entry:
                    query.enabled = bool(entry["enabled"])
                if entry.get("description"):
                    query.description = str(entry["description"])
                if entry.get("forest"):
                    query.forest = self._forest(entry["forest"], name, manifest_path)
                if "criteria" in entry:
                    query.criteria = self._criteria(entry["criteria"], name, manifest_path)

                queries[name] = query

        return list(queries.values())

    # ------------------------------------------------------------------
    def enabled_queries(self, manifests: Sequence[Path | str] | None = None) -> List[NamedQuery]:
        """Return only the queries that are enabled after merging manifests."""

        return [query for query in self.load(manifests) if query.enabled]

    def get(self, name: str, manifests: Sequence[Path | str] | None = None) -> NamedQuery:
        """Return the enabled query called ``name``."""

        for query in self.load(manifests):
            if query.name == name:
                if not query.enabled:
                    raise QueryManifestError(f"Query is disabled: {name}")
                return query
        raise QueryManifestError(f"Unknown query: {name}")

    # ------------------------------------------------------------------
    def _forest(self, value: Any, name: str, path: Path) -> QueryForest:
        try:
            return QueryForest(str(value).strip().lower())
        except ValueError as exc:
            raise QueryManifestError(f"Unknown forest '{value}' for query {name} in {path}") from exc

    def _criteria(self, value: Any, name: str, path: Path) -> SearchCriteria:
        try:
            return SearchCriteria.from_mapping(value)
        except InvalidCriteriaError as exc:
            raise QueryManifestError(f"Invalid criteria for query {name} in {path}: {exc}") from exc

    def _load_manifest(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise QueryManifestError(f"Query manifest not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise QueryManifestError(f"Failed to read query manifest {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise QueryManifestError(f"Invalid YAML in query manifest {path}") from exc

        if not isinstance(data, Mapping):
            raise QueryManifestError(f"Query manifest must be a mapping: {path}")

        return dict(data)


__all__ = ["NamedQuery", "QueryForest", "QueryManifestError", "QueryManifestManager"]
