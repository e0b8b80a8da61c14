"""Orchestration layer used by the CLI to load and query analysis results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from .adapters import ResultsLoader, ResultsLoaderError
from .explorer import AnalysisErrorsFound, ExplorerFactory, ResultsExplorer
from .models import SearchCriteria
from .normalization import ResultNormalizationError, ResultNormalizer
from .queries import QueryForest, QueryManifestError, QueryManifestManager
from .reporting import ReportData, ReportOutputter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QueryResult:
    """Result returned by :meth:`ExplorerService.query`."""

    report: ReportData
    metadata: Mapping[str, Any]


ResultsLoaderFactory = Callable[[Path], ResultsLoader]


class ExplorerService:
    """High level service responsible for loading results and running queries."""

    def __init__(
        self,
        *,
        loader_factory: ResultsLoaderFactory | None = None,
        normalizer: ResultNormalizer | None = None,
        manifest_manager: QueryManifestManager | None = None,
        explorer_factory: ExplorerFactory | None = None,
    ) -> None:
        self._loader_factory = loader_factory or ResultsLoader
        self._normalizer = normalizer or ResultNormalizer()
        self._manifest_manager = manifest_manager or QueryManifestManager()
        self._explorer_factory = explorer_factory

    # ------------------------------------------------------------------
    def open(self, results_path: Path) -> ResultsExplorer:
        """Load the results file and wrap it in a :class:`ResultsExplorer`."""

        raw = self._loader_factory(Path(results_path)).load()
        results = self._normalizer.normalize(raw)
        return ResultsExplorer(results, self._explorer_factory)

    def query(
        self,
        results_path: Path,
        *,
        criteria: SearchCriteria | None = None,
        query_name: str | None = None,
        manifests: Sequence[str | Path] | None = None,
        forest: QueryForest | None = None,
        include_complete_results: bool = False,
    ) -> QueryResult:
        """Run one query and return its report.

        Explicit ``criteria`` and ``forest`` take precedence over those of the
        named query. Without either, every node matches.
        """

        if query_name:
            named = self._manifest_manager.get(query_name, manifests)
            if criteria is None:
                criteria = named.criteria
            if forest is None:
                forest = named.forest
        forest = forest or QueryForest.ALL

        explorer = self.open(results_path)
        selected: SearchCriteria | bool = True if criteria is None else criteria
        report = explorer.build_report_data(
            selected if forest in (QueryForest.ALL, QueryForest.VALUE_HOSTS) else False,
            selected if forest in (QueryForest.ALL, QueryForest.LOOKUP_KEYS) else False,
            include_complete_results,
        )

        metadata: dict[str, Any] = {
            "results_path": str(results_path),
            "query": query_name,
            "forest": forest.value,
            "value_host_count": len(explorer.results.value_host_results),
            "lookup_key_count": len(explorer.results.lookup_key_results),
            "value_host_matches": len(report.value_host_query_results or []),
            "lookup_key_matches": len(report.lookup_key_query_results or []),
        }
        logger.debug("Query %s on %s: %s", query_name or "<criteria>", results_path, metadata)
        return QueryResult(report=report, metadata=metadata)

    def check(
        self,
        results_path: Path,
        *,
        include_complete_results: bool = False,
        outputter: ReportOutputter | None = None,
    ) -> None:
        """Raise :class:`AnalysisErrorsFound` when the results hold any error."""

        self.open(results_path).throw_on_errors(include_complete_results, outputter)


__all__ = [
    "AnalysisErrorsFound",
    "ExplorerService",
    "QueryManifestError",
    "QueryResult",
    "ResultNormalizationError",
    "ResultsLoaderError",
]
