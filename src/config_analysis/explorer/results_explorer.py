"""Top level API for counting, querying and reporting on analysis results."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..models import (
    AnalysisResults,
    IssueSeverity,
    PathedResult,
    ResultNode,
    ResultPath,
    SearchCriteria,
)
from ..reporting import JsonReportFormatter, NullReportOutputter, ReportData, ReportOutputter
from .factory import ExplorerError, ExplorerFactory
from .searcher import CriteriaSearcher

logger = logging.getLogger(__name__)

CriteriaLike = Union[SearchCriteria, Mapping[str, Any], None]
ReportCriteria = Union[SearchCriteria, Mapping[str, Any], bool, None]

ERROR_CRITERIA = SearchCriteria(severities=(IssueSeverity.ERROR.value,), prune_on_parent_mismatch=False)


class AnalysisErrorsFound(ExplorerError):
    """Raised by :meth:`ResultsExplorer.throw_on_errors` when error results exist."""

    def __init__(self, content: str, report: ReportData) -> None:
        super().__init__("Errors found in configuration analysis\n" + content)
        self.content = content
        self.report = report


def _prepare(criteria: CriteriaLike) -> CriteriaSearcher:
    if criteria is None or isinstance(criteria, SearchCriteria):
        return CriteriaSearcher(criteria)
    return CriteriaSearcher(SearchCriteria.from_mapping(criteria))


class ResultsExplorer:
    """Explore the results of a configuration analysis.

    Holds the value host forest and the lookup key forest, and runs the
    explorers' traversal over every root of a forest. Intended for test code
    and for tooling that reports on an analysis. The results are never modified.
    """

    def __init__(self, results: AnalysisResults, factory: ExplorerFactory | None = None) -> None:
        if results is None:
            raise ValueError("results is required")
        self._results = results
        self._factory = factory or ExplorerFactory()

    @property
    def results(self) -> AnalysisResults:
        return self._results

    @property
    def factory(self) -> ExplorerFactory:
        return self._factory

    # Per forest queries ---------------------------------------------------
    def query_value_host_results(self, criteria: CriteriaLike = None) -> List[PathedResult]:
        """Return every match in the value host forest. ``None`` matches everything."""

        return self._query(self._results.value_host_results, criteria)

    def query_lookup_key_results(self, criteria: CriteriaLike = None) -> List[PathedResult]:
        """Return every match in the lookup key forest. ``None`` matches everything."""

        return self._query(self._results.lookup_key_results, criteria)

    def count_value_host_results(self, criteria: CriteriaLike = None) -> int:
        return len(self.query_value_host_results(criteria))

    def count_lookup_key_results(self, criteria: CriteriaLike = None) -> int:
        return len(self.query_lookup_key_results(criteria))

    def has_match_in_value_host_results(self, criteria: CriteriaLike) -> bool:
        """Like counting but stops at the first match."""

        return self._has_match(self._results.value_host_results, criteria)

    def has_match_in_lookup_key_results(self, criteria: CriteriaLike) -> bool:
        return self._has_match(self._results.lookup_key_results, criteria)

    # Whole tree queries -----------------------------------------------------
    def query_matches(self, criteria: CriteriaLike = None) -> List[PathedResult]:
        """Matches from both forests, value host results first."""

        return self.query_value_host_results(criteria) + self.query_lookup_key_results(criteria)

    def count_matches(self, criteria: CriteriaLike = None) -> int:
        return len(self.query_matches(criteria))

    def has_any_match(self, criteria: CriteriaLike) -> bool:
        return self.has_match_in_value_host_results(criteria) or self.has_match_in_lookup_key_results(
            criteria
        )

    # Path lookups -----------------------------------------------------------
    def get_by_path(
        self, path: ResultPath, found_results: Iterable[PathedResult]
    ) -> Optional[ResultNode]:
        """Return the node of the first entry in ``found_results`` whose path matches ``path``.

        Keys and string values are compared case-insensitively. Paths must have the
        same number of entries to match. Designed for test code reviewing query results.
        """

        found_results = list(found_results)
        index = self.index_of_path(path, found_results)
        if index < 0:
            return None
        return found_results[index].result

    def index_of_path(self, path: ResultPath, found_results: Iterable[PathedResult]) -> int:
        """Index of the first entry whose path matches ``path``, or ``-1``."""

        for index, found in enumerate(found_results):
            if _path_matches(path, found.path):
                return index
        return -1

    # Errors ---------------------------------------------------------------
    def has_errors(self) -> bool:
        """``True`` when any node in either forest has error severity."""

        return self.has_any_match(ERROR_CRITERIA)

    def throw_on_errors(
        self,
        include_complete_results: bool = False,
        outputter: ReportOutputter | None = None,
    ) -> None:
        """Raise :class:`AnalysisErrorsFound` when any node has error severity.

        The error message holds the formatted error results. When an outputter is
        supplied it also receives the report, and its content is used when it is
        a string.
        """

        report = self.build_report_data(ERROR_CRITERIA, ERROR_CRITERIA, include_complete_results)
        if not report.has_matches:
            return

        content: Any = None
        if outputter is not None:
            content = outputter.send(report)
        if not isinstance(content, str):
            content = JsonReportFormatter().format(report)

        logger.error(
            "Configuration analysis has %d value host and %d lookup key errors",
            len(report.value_host_query_results or []),
            len(report.lookup_key_query_results or []),
        )
        raise AnalysisErrorsFound(content, report)

    # Reports --------------------------------------------------------------
    def build_report_data(
        self,
        value_host_criteria: ReportCriteria,
        lookup_key_criteria: ReportCriteria,
        include_complete_results: bool = False,
    ) -> ReportData:
        """Query both forests into a :class:`ReportData`.

        For each forest, ``False`` or ``None`` omits it, ``True`` includes every
        result, and criteria filter it.
        """

        report = ReportData()
        if value_host_criteria is not False and value_host_criteria is not None:
            report.value_host_query_results = self.query_value_host_results(
                None if value_host_criteria is True else value_host_criteria
            )
        if lookup_key_criteria is not False and lookup_key_criteria is not None:
            report.lookup_key_query_results = self.query_lookup_key_results(
                None if lookup_key_criteria is True else lookup_key_criteria
            )
        if include_complete_results:
            report.complete_results = self._results
        return report

    def report(
        self,
        value_host_criteria: ReportCriteria,
        lookup_key_criteria: ReportCriteria,
        include_complete_results: bool,
        outputter: ReportOutputter,
    ) -> Any:
        """Build the report data and send it to ``outputter``, returning its content."""

        if outputter is None:
            raise ValueError("outputter is required")
        report = self.build_report_data(value_host_criteria, lookup_key_criteria, include_complete_results)
        return outputter.send(report)

    def report_into_json(
        self,
        value_host_criteria: ReportCriteria,
        lookup_key_criteria: ReportCriteria,
        include_complete_results: bool = False,
        indent: int | str | None = 4,
    ) -> str:
        outputter = NullReportOutputter(JsonReportFormatter(indent=indent))
        return self.report(value_host_criteria, lookup_key_criteria, include_complete_results, outputter)

    # ------------------------------------------------------------------
    def _query(self, roots: Iterable[ResultNode], criteria: CriteriaLike) -> List[PathedResult]:
        searcher = _prepare(criteria)
        matches: List[PathedResult] = []
        for root in roots:
            self._factory.create(root).collect(searcher, matches, {}, self._factory)
        logger.debug("Query %r collected %d matches", searcher.criteria, len(matches))
        return matches

    def _has_match(self, roots: Iterable[ResultNode], criteria: CriteriaLike) -> bool:
        searcher = _prepare(criteria)
        return any(self._factory.create(root).has_match(searcher, self._factory) for root in roots)


def _path_matches(path: ResultPath, candidate: ResultPath) -> bool:
    if len(path) != len(candidate):
        return False
    lowered_keys = {key.lower(): key for key in candidate}
    for key, value in path.items():
        if key in candidate:
            found_key = key
        else:
            found_key = lowered_keys.get(key.lower())
            if found_key is None:
                return False
        if _lowered(value) != _lowered(candidate[found_key]):
            return False
    return True


def _lowered(value: Optional[str]) -> Optional[str]:
    return value.lower() if isinstance(value, str) else value


__all__ = ["AnalysisErrorsFound", "ERROR_CRITERIA", "ResultsExplorer"]
