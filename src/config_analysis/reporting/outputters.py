"""Outputters deliver formatted reports to a destination."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, TextIO

from .formatters import ReportData, ReportFormatter


class ReportOutputError(RuntimeError):
    """Raised when an outputter cannot deliver the formatted content."""


class ReportOutputter(ABC):
    """Format a report with the supplied formatter and send it somewhere."""

    def __init__(self, formatter: ReportFormatter) -> None:
        if formatter is None:
            raise ValueError("formatter is required")
        self.formatter = formatter

    def send(self, report: ReportData) -> Any:
        """Format and output ``report``, returning the formatted content."""

        content = self.format(report)
        self.output(content)
        return content

    def format(self, report: ReportData) -> Any:
        return self.formatter.format(report)

    @abstractmethod
    def output(self, content: Any) -> None:
        """Deliver already formatted content."""


class NullReportOutputter(ReportOutputter):
    """Deliver nothing. ``send`` still returns the formatted content."""

    def output(self, content: Any) -> None:
        return None


class StreamReportOutputter(ReportOutputter):
    """Write content to a text stream, standard output by default."""

    def __init__(self, formatter: ReportFormatter, stream: TextIO | None = None) -> None:
        super().__init__(formatter)
        self.stream = stream

    def output(self, content: Any) -> None:
        print(content, file=self.stream or sys.stdout)


class LoggingReportOutputter(ReportOutputter):
    """Log string content at ``level`` through a :mod:`logging` logger."""

    def __init__(
        self,
        formatter: ReportFormatter,
        logger: logging.Logger | None = None,
        level: int = logging.INFO,
    ) -> None:
        super().__init__(formatter)
        self.logger = logger or logging.getLogger("config_analysis.report")
        self.level = level

    def format(self, report: ReportData) -> Any:
        content = super().format(report)
        if not isinstance(content, str):
            raise ReportOutputError("LoggingReportOutputter requires the formatter to produce a string")
        return content

    def output(self, content: Any) -> None:
        self.logger.log(self.level, "%s", content)


__all__ = [
    "LoggingReportOutputter",
    "NullReportOutputter",
    "ReportOutputError",
    "ReportOutputter",
    "StreamReportOutputter",
]
