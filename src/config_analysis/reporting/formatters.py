"""Formatters turning query results into report content."""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields, is_dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

from ..models import AnalysisResults, PathedResult, ResultPath


@dataclass(slots=True)
class ReportData:
    """Query results handed to formatters and outputters.

    Each part is ``None`` when it was not requested.
    """

    value_host_query_results: Optional[List[PathedResult]] = None
    lookup_key_query_results: Optional[List[PathedResult]] = None
    complete_results: Optional[AnalysisResults] = None

    @property
    def has_matches(self) -> bool:
        return bool(self.value_host_query_results) or bool(self.lookup_key_query_results)


def clean_for_json(value: Any) -> Any:
    """Return a copy of ``value`` built only from JSON compatible types.

    Dataclass fields set to ``None`` are omitted, as is an empty ``details``
    mapping. Values JSON cannot express are replaced by a short note. A
    container that refers back to one of its own ancestors is dropped.
    """

    return _clean(value, set())


# Marks a container already on the branch being cleaned.
_CIRCULAR = object()


def _clean(value: Any, branch: Set[int]) -> Any:
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, Enum):
        return _clean(value.value, branch)
    if isinstance(value, str):
        return str(value)
    if _is_container(value):
        if id(value) in branch:
            return _CIRCULAR
        branch.add(id(value))
        try:
            return _clean_container(value, branch)
        finally:
            branch.discard(id(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, re.Pattern):
        return f"[RegExp {value.pattern}]"
    if callable(value):
        return f"[Function {getattr(value, '__name__', type(value).__name__)}]"
    return str(value)


def _is_container(value: Any) -> bool:
    if is_dataclass(value) and not isinstance(value, type):
        return True
    return isinstance(value, (Mapping, list, tuple, set, frozenset))


def _clean_container(value: Any, branch: Set[int]) -> Any:
    if is_dataclass(value):
        cleaned: Dict[str, Any] = {}
        for item in fields(value):
            field_value = getattr(value, item.name)
            if field_value is None:
                continue
            if item.name == "details" and not field_value:
                continue
            field_cleaned = _clean(field_value, branch)
            if field_cleaned is not _CIRCULAR:
                cleaned[item.name] = field_cleaned
        return cleaned
    if isinstance(value, Mapping):
        cleaned = {}
        for key, item in value.items():
            item_cleaned = _clean(item, branch)
            if item_cleaned is not _CIRCULAR:
                cleaned[str(key)] = item_cleaned
        return cleaned
    items = (_clean(item, branch) for item in value)
    return [item for item in items if item is not _CIRCULAR]


def format_path(path: ResultPath) -> str:
    """Render a path as ``ValueHost=startDate > Property=dataType``."""

    parts = []
    for key, identifier in path.items():
        parts.append(key if identifier is None else f"{key}={identifier}")
    return " > ".join(parts)


class ReportFormatter(ABC):
    """Formats :class:`ReportData` without side effects."""

    @abstractmethod
    def format(self, report: ReportData) -> Any:
        """Return the formatted report content."""


class CleanedObjectReportFormatter(ReportFormatter):
    """Produce a plain mapping that any JSON aware destination can consume."""

    def format(self, report: ReportData) -> Dict[str, Any]:
        return clean_for_json(report)


class JsonReportFormatter(ReportFormatter):
    """Produce a JSON string. ``indent=None`` yields compact output."""

    def __init__(self, indent: int | str | None = 4) -> None:
        self.indent = indent

    def format(self, report: ReportData) -> str:
        return json.dumps(clean_for_json(report), indent=self.indent)


class TableReportFormatter(ReportFormatter):
    """Render matches as a simple text table for terminal output."""

    headers = ("Forest", "Path", "Severity", "Message")

    def format(self, report: ReportData) -> str:
        rows: List[tuple[str, str, str, str]] = []
        rows.extend(self._rows("value-hosts", report.value_host_query_results))
        rows.extend(self._rows("lookup-keys", report.lookup_key_query_results))

        if not rows:
            return "No matching results."

        table = [self.headers, *rows]
        widths = [max(len(row[idx]) for row in table) for idx in range(len(self.headers))]

        def format_row(values: Sequence[str]) -> str:
            return "  ".join(
                value.ljust(width) for value, width in zip(values, widths, strict=True)
            ).rstrip()

        lines = [format_row(self.headers)]
        lines.append("  ".join("=" * width for width in widths))
        for row in rows:
            lines.append(format_row(row))
        return "\n".join(lines)

    def _rows(
        self, forest: str, matches: Optional[Sequence[PathedResult]]
    ) -> List[tuple[str, str, str, str]]:
        rows = []
        for match in matches or []:
            severity = match.result.severity
            rows.append(
                (
                    forest,
                    format_path(match.path),
                    clean_for_json(severity) if severity is not None else "-",
                    match.result.message or "",
                )
            )
        return rows


__all__ = [
    "CleanedObjectReportFormatter",
    "JsonReportFormatter",
    "ReportData",
    "ReportFormatter",
    "TableReportFormatter",
    "clean_for_json",
    "format_path",
]
