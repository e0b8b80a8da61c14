from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from config_analysis.explorer import AnalysisErrorsFound, ResultsExplorer
from config_analysis.models import SearchCriteria
from config_analysis.queries import QueryForest, QueryManifestError
from config_analysis.service import ExplorerService, QueryResult


class DummyResultsLoader:
    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> dict[str, Any]:
        return {
            "valueHostResults": [
                {
                    "feature": "ValueHost",
                    "valueHostName": "age",
                    "properties": [
                        {"feature": "Property", "propertyName": "label", "severity": "warning"}
                    ],
                }
            ],
            "lookupKeyResults": [
                {
                    "feature": "LookupKey",
                    "lookupKey": "Integer",
                    "serviceResults": [{"feature": "Identifier", "severity": "error"}],
                }
            ],
        }


def test_open_returns_explorer() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    explorer = service.open(Path("/workspace/results.json"))

    assert isinstance(explorer, ResultsExplorer)
    assert explorer.count_matches() == 4


def test_query_with_criteria() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    result = service.query(Path("results.json"), criteria=SearchCriteria(severities=("warning",)))

    assert isinstance(result, QueryResult)
    assert [match.path for match in result.report.value_host_query_results] == [
        {"ValueHost": "age", "Property": "label"}
    ]
    assert result.report.lookup_key_query_results == []
    assert result.metadata["forest"] == "all"
    assert result.metadata["value_host_matches"] == 1
    assert result.metadata["lookup_key_count"] == 1


def test_query_without_criteria_matches_everything() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    result = service.query(Path("results.json"), forest=QueryForest.VALUE_HOSTS, include_complete_results=True)

    assert len(result.report.value_host_query_results) == 2
    assert result.report.lookup_key_query_results is None
    assert result.report.complete_results is not None


def test_named_query_supplies_criteria_and_forest() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    result = service.query(Path("results.json"), query_name="errors")

    assert result.report.value_host_query_results == []
    assert [match.path for match in result.report.lookup_key_query_results] == [
        {"LookupKey": "Integer", "Identifier": None}
    ]
    assert result.metadata["query"] == "errors"

    lookup_keys = service.query(Path("results.json"), query_name="lookup-keys")
    assert lookup_keys.report.value_host_query_results is None
    assert len(lookup_keys.report.lookup_key_query_results) == 1


def test_explicit_forest_overrides_named_query() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    result = service.query(Path("results.json"), query_name="errors", forest=QueryForest.VALUE_HOSTS)

    assert result.report.lookup_key_query_results is None


def test_unknown_named_query_raises() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    with pytest.raises(QueryManifestError):
        service.query(Path("results.json"), query_name="missing")


def test_check_raises_on_errors() -> None:
    service = ExplorerService(loader_factory=DummyResultsLoader)

    with pytest.raises(AnalysisErrorsFound):
        service.check(Path("results.json"))
