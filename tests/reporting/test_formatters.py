from __future__ import annotations

import json
import re
from datetime import date

from config_analysis.models import (
    AnalysisResults,
    ConditionResult,
    ErrorResult,
    IssueSeverity,
    PathedResult,
    PropertyResult,
    ResultNode,
    ValueHostResult,
)
from config_analysis.reporting import (
    CleanedObjectReportFormatter,
    JsonReportFormatter,
    ReportData,
    TableReportFormatter,
    clean_for_json,
    format_path,
)


def _report() -> ReportData:
    return ReportData(
        value_host_query_results=[
            PathedResult(
                path={"ValueHost": "startDate", "Property": "dataType"},
                result=PropertyResult(
                    property_name="dataType",
                    severity=IssueSeverity.ERROR,
                    message="Lookup key not found",
                ),
            )
        ],
        lookup_key_query_results=[
            PathedResult(
                path={"LookupKey": "Date", "Identifier": None},
                result=ResultNode(feature="Identifier"),
            )
        ],
    )


def test_clean_for_json_omits_unset_fields() -> None:
    cleaned = clean_for_json(ValueHostResult(value_host_name="age"))

    assert cleaned == {
        "feature": "ValueHost",
        "properties": [],
        "value_host_name": "age",
        "validator_results": [],
    }


def test_clean_for_json_keeps_details_when_present() -> None:
    cleaned = clean_for_json(ResultNode(feature="Tag", details={"tag": "beta"}))

    assert cleaned == {"feature": "Tag", "details": {"tag": "beta"}}


def test_clean_for_json_replaces_unsupported_values() -> None:
    def parse_date() -> None:
        pass

    cleaned = clean_for_json(
        {
            "when": date(2024, 5, 1),
            "pattern": re.compile(r"\d+"),
            "callback": parse_date,
            "severity": IssueSeverity.WARNING,
            "values": (1, 2),
        }
    )

    assert cleaned == {
        "when": "2024-05-01",
        "pattern": r"[RegExp \d+]",
        "callback": "[Function parse_date]",
        "severity": "warning",
        "values": [1, 2],
    }


def test_clean_for_json_drops_circular_references() -> None:
    condition = ConditionResult(condition_type="All")
    condition.children_results.append(condition)
    mapping: dict[str, object] = {"name": "loop"}
    mapping["self"] = mapping

    assert clean_for_json(condition) == {
        "feature": "Condition",
        "properties": [],
        "condition_type": "All",
        "children_results": [],
    }
    assert clean_for_json(mapping) == {"name": "loop"}


def test_clean_for_json_repeats_shared_nodes() -> None:
    shared = ConditionResult(condition_type="RequireText")
    parent = ConditionResult(condition_type="Any", children_results=[shared, shared])

    cleaned = clean_for_json(parent)

    assert [child["condition_type"] for child in cleaned["children_results"]] == ["RequireText", "RequireText"]


def test_error_result_keeps_default_severity() -> None:
    cleaned = clean_for_json(ErrorResult(analyzer_class_name="Analyzer"))

    assert cleaned["severity"] == "error"
    assert cleaned["analyzer_class_name"] == "Analyzer"


def test_format_path() -> None:
    assert format_path({"ValueHost": "startDate", "Property": "dataType"}) == "ValueHost=startDate > Property=dataType"
    assert format_path({"LookupKey": "Date", "Parser": None}) == "LookupKey=Date > Parser"


def test_json_formatter_indents_by_default() -> None:
    content = JsonReportFormatter().format(_report())

    assert content.startswith('{\n    "value_host_query_results"')
    data = json.loads(content)
    assert data["lookup_key_query_results"][0]["path"] == {"LookupKey": "Date", "Identifier": None}
    assert "complete_results" not in data


def test_cleaned_object_formatter_includes_complete_results() -> None:
    report = ReportData(complete_results=AnalysisResults(culture_ids=["en"]))

    assert CleanedObjectReportFormatter().format(report) == {
        "complete_results": {
            "value_host_results": [],
            "lookup_key_results": [],
            "culture_ids": ["en"],
            "value_host_names": [],
        }
    }


def test_table_formatter_renders_rows() -> None:
    table = TableReportFormatter().format(_report())

    lines = table.splitlines()
    assert lines[0].split() == ["Forest", "Path", "Severity", "Message"]
    assert lines[2].startswith("value-hosts")
    assert "ValueHost=startDate > Property=dataType" in lines[2]
    assert lines[2].endswith("error     Lookup key not found")
    assert lines[3].startswith("lookup-keys")
    assert lines[3].endswith("-")


def test_table_formatter_without_matches() -> None:
    assert TableReportFormatter().format(ReportData()) == "No matching results."
