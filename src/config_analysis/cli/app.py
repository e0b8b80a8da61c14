"""Command-line interface for querying configuration analysis results."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Sequence

from ..adapters import ResultsLoaderError
from ..explorer import AnalysisErrorsFound, ExplorerError
from ..models import InvalidCriteriaError, SearchCriteria
from ..normalization import ResultNormalizationError
from ..queries import QueryForest, QueryManifestError
from ..reporting import (
    JsonReportFormatter,
    ReportFormatter,
    StreamReportOutputter,
    TableReportFormatter,
)
from ..service import ExplorerService

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Options collecting values for one criteria dimension.
_CRITERIA_OPTIONS = (
    ("features", "--feature", "Feature to match, such as ValueHost or Condition."),
    ("severities", "--severity", "Severity to match. Use 'none' for nodes without an issue."),
    ("lookup_keys", "--lookup-key", "Lookup key to match."),
    ("service_names", "--service-name", "Service to match: Identifier, Converter, Comparer, Parser or Formatter."),
    ("value_host_names", "--value-host", "Value host name to match."),
    ("error_codes", "--error-code", "Validator error code to match."),
    ("condition_types", "--condition-type", "Condition type to match."),
    ("property_names", "--property", "Property name to match."),
    ("culture_ids", "--culture", "Culture id to match."),
)

_LOAD_ERRORS = (
    ResultsLoaderError,
    ResultNormalizationError,
    QueryManifestError,
    InvalidCriteriaError,
    ExplorerError,
)


def build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""

    parser = argparse.ArgumentParser(
        prog="config-analysis", description="Explore configuration analysis results"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug information to standard error.",
    )
    subparsers = parser.add_subparsers(dest="command")

    query_parser = subparsers.add_parser(
        "query", help="Report the result nodes that match search criteria."
    )
    query_parser.add_argument("results", type=Path, help="Path to a JSON or YAML analysis results file.")
    query_parser.add_argument(
        "--query",
        dest="query_name",
        default=None,
        help="Name of a query defined in the default or supplied manifests.",
    )
    query_parser.add_argument(
        "--manifest",
        dest="manifests",
        action="append",
        default=None,
        type=str,
        help="Path to a query manifest YAML/JSON file defining additional named queries.",
    )
    for dest, flag, help_text in _CRITERIA_OPTIONS:
        query_parser.add_argument(flag, dest=dest, action="append", default=None, help=help_text)
    query_parser.add_argument(
        "--prune",
        action="store_true",
        help="Skip the children of nodes that do not match.",
    )
    query_parser.add_argument(
        "--forest",
        choices=[forest.value for forest in QueryForest],
        default=None,
        help="Which results to search. Defaults to the named query's forest, or all.",
    )
    query_parser.add_argument(
        "--count",
        action="store_true",
        help="Only print the number of matches per forest.",
    )
    query_parser.add_argument(
        "--include-complete-results",
        action="store_true",
        help="Include the complete results in JSON output.",
    )
    query_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format for query results.",
    )

    check_parser = subparsers.add_parser(
        "check", help="Fail when any result node has error severity."
    )
    check_parser.add_argument("results", type=Path, help="Path to a JSON or YAML analysis results file.")
    check_parser.add_argument(
        "--include-complete-results",
        action="store_true",
        help="Include the complete results in the error report.",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    """Send debug records to standard error. Otherwise warnings use logging's default handler."""

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


def criteria_from_args(args: argparse.Namespace) -> SearchCriteria | None:
    """Return criteria built from the query options, or ``None`` when none were given."""

    data: dict[str, Any] = {}
    for dest, _flag, _help in _CRITERIA_OPTIONS:
        values = getattr(args, dest, None)
        if values is None:
            continue
        if dest == "severities":
            values = [None if value.strip().lower() == "none" else value for value in values]
        data[dest] = values
    if args.prune:
        data["prune_on_parent_mismatch"] = True

    if not data:
        return None
    return SearchCriteria.from_mapping(data)


def _formatter(output_format: str) -> ReportFormatter:
    if output_format == "json":
        return JsonReportFormatter(indent=2)
    if output_format == "table":
        return TableReportFormatter()
    raise ValueError("format must be either 'table' or 'json'")


def _handle_query(args: argparse.Namespace, service: ExplorerService) -> int:
    try:
        criteria = criteria_from_args(args)
        result = service.query(
            args.results,
            criteria=criteria,
            query_name=args.query_name,
            manifests=list(args.manifests or []),
            forest=QueryForest(args.forest) if args.forest else None,
            include_complete_results=args.include_complete_results,
        )
    except _LOAD_ERRORS as exc:
        print(f"Error: {exc}")
        return 2

    if args.count:
        counts = {
            "value-hosts": result.metadata["value_host_matches"],
            "lookup-keys": result.metadata["lookup_key_matches"],
        }
        if args.format == "json":
            print(json.dumps(counts, indent=2))
        else:
            for forest, count in counts.items():
                print(f"{forest}: {count}")
        return 0

    StreamReportOutputter(_formatter(args.format)).send(result.report)
    return 0


def _handle_check(args: argparse.Namespace, service: ExplorerService) -> int:
    try:
        service.check(args.results, include_complete_results=args.include_complete_results)
    except AnalysisErrorsFound as exc:
        print(str(exc))
        return 1
    except _LOAD_ERRORS as exc:
        print(f"Error: {exc}")
        return 2

    print("No errors found in configuration analysis.")
    return 0


def main(argv: Sequence[str] | None = None, service: ExplorerService | None = None) -> int:
    """Entry point used by tests and the ``python -m`` invocation."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "query":
        return _handle_query(args, service or ExplorerService())
    if args.command == "check":
        return _handle_check(args, service or ExplorerService())

    parser.print_help()
    return 0


def run() -> None:  # pragma: no cover - thin wrapper for module execution
    """Execute the CLI and exit with the produced status code."""

    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module execution guard
    run()
