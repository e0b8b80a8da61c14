"""Report formatting and delivery for query results."""

from .formatters import (
    CleanedObjectReportFormatter,
    JsonReportFormatter,
    ReportData,
    ReportFormatter,
    TableReportFormatter,
    clean_for_json,
    format_path,
)
from .outputters import (
    LoggingReportOutputter,
    NullReportOutputter,
    ReportOutputError,
    ReportOutputter,
    StreamReportOutputter,
)

__all__ = [
    "CleanedObjectReportFormatter",
    "JsonReportFormatter",
    "LoggingReportOutputter",
    "NullReportOutputter",
    "ReportData",
    "ReportFormatter",
    "ReportOutputError",
    "ReportOutputter",
    "StreamReportOutputter",
    "TableReportFormatter",
    "clean_for_json",
    "format_path",
]
