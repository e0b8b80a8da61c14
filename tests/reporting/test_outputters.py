from __future__ import annotations

import io
import logging

import pytest

from config_analysis.models import IssueSeverity, PathedResult, PropertyResult
from config_analysis.reporting import (
    CleanedObjectReportFormatter,
    JsonReportFormatter,
    LoggingReportOutputter,
    NullReportOutputter,
    ReportData,
    ReportOutputError,
    StreamReportOutputter,
    TableReportFormatter,
)


def _report() -> ReportData:
    return ReportData(
        value_host_query_results=[
            PathedResult(
                path={"ValueHost": "age", "Property": "label"},
                result=PropertyResult(
                    property_name="label", severity=IssueSeverity.WARNING, message="Label missing"
                ),
            )
        ]
    )


def test_null_outputter_returns_content() -> None:
    content = NullReportOutputter(CleanedObjectReportFormatter()).send(_report())

    assert content["value_host_query_results"][0]["path"] == {"ValueHost": "age", "Property": "label"}


def test_outputter_requires_formatter() -> None:
    with pytest.raises(ValueError):
        NullReportOutputter(None)  # type: ignore[arg-type]


def test_stream_outputter_writes_to_stream() -> None:
    stream = io.StringIO()

    content = StreamReportOutputter(TableReportFormatter(), stream=stream).send(_report())

    assert stream.getvalue() == content + "\n"
    assert "Label missing" in content


def test_stream_outputter_defaults_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    StreamReportOutputter(JsonReportFormatter(indent=None)).send(ReportData())

    assert capsys.readouterr().out == "{}\n"


def test_logging_outputter_logs_content(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("config_analysis.tests.report")

    with caplog.at_level(logging.WARNING, logger="config_analysis.tests.report"):
        LoggingReportOutputter(TableReportFormatter(), logger=logger, level=logging.WARNING).send(_report())

    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.WARNING
    assert "ValueHost=age > Property=label" in caplog.records[0].getMessage()


def test_logging_outputter_requires_string_content() -> None:
    outputter = LoggingReportOutputter(CleanedObjectReportFormatter())

    with pytest.raises(ReportOutputError):
        outputter.send(_report())
