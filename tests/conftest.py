from __future__ import annotations

from pathlib import Path

import pytest

from config_analysis.models import (
    AnalysisResults,
    ConditionResult,
    ErrorResult,
    FormatterServiceResult,
    FormattersByCultureResult,
    IdentifierServiceResult,
    IssueSeverity,
    LocalizedPropertyResult,
    LocalizedTextResult,
    LookupKeyResult,
    ParserFoundResult,
    ParserServiceResult,
    ParsersByCultureResult,
    PropertyResult,
    ValidatorResult,
    ValueHostResult,
)

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def start_date_results() -> AnalysisResults:
    """A single value host with one informational property result."""

    return AnalysisResults(
        value_host_results=[
            ValueHostResult(
                value_host_name="startDate",
                properties=[
                    PropertyResult(
                        property_name="dataType",
                        severity=IssueSeverity.INFO,
                        message="Lookup key 'Date' resolved",
                    )
                ],
            )
        ]
    )


@pytest.fixture
def nested_condition_results() -> AnalysisResults:
    """Conditions All > Any > RequireText under one value host's enabler."""

    return AnalysisResults(
        value_host_results=[
            ValueHostResult(
                value_host_name="endDate",
                enabler_condition_result=ConditionResult(
                    condition_type="All",
                    children_results=[
                        ConditionResult(
                            condition_type="Any",
                            children_results=[ConditionResult(condition_type="RequireText")],
                        )
                    ],
                ),
            )
        ]
    )


@pytest.fixture
def lookup_key_error_results() -> AnalysisResults:
    """No value host issues, one Identifier error below a lookup key."""

    return AnalysisResults(
        value_host_results=[ValueHostResult(value_host_name="quantity")],
        lookup_key_results=[
            LookupKeyResult(
                lookup_key="Integer",
                used_as_data_type=True,
                service_results=[
                    IdentifierServiceResult(
                        severity=IssueSeverity.ERROR,
                        message="No identifier registered",
                    )
                ],
            )
        ],
    )


@pytest.fixture
def sample_results() -> AnalysisResults:
    """Both forests exercising every built-in node kind."""

    return AnalysisResults(
        value_host_results=[
            ValueHostResult(
                value_host_name="startDate",
                properties=[
                    PropertyResult(property_name="dataType", severity=IssueSeverity.INFO, message="Date"),
                    LocalizedPropertyResult(
                        property_name="label",
                        l10n_property_name="labell10n",
                        l10n_key="StartDate",
                        culture_text={
                            "en": LocalizedTextResult(text="Start date"),
                            "fr": LocalizedTextResult(
                                severity=IssueSeverity.WARNING, message="No translation for fr"
                            ),
                        },
                    ),
                ],
                validator_results=[
                    ValidatorResult(
                        error_code="RequireText",
                        condition_result=ConditionResult(
                            condition_type="RequireText",
                            properties=[
                                PropertyResult(
                                    property_name="valueHostName",
                                    severity=IssueSeverity.ERROR,
                                    message="Value host not found",
                                )
                            ],
                        ),
                    ),
                    ValidatorResult(
                        error_code="Range",
                        condition_result=ConditionResult(condition_type="Range"),
                    ),
                ],
            ),
            ValueHostResult(
                value_host_name="endDate",
                properties=[
                    ErrorResult(
                        analyzer_class_name="DataTypePropertyAnalyzer",
                        message="Analyzer failed",
                    )
                ],
                enabler_condition_result=ConditionResult(
                    condition_type="All",
                    children_results=[ConditionResult(condition_type="NotNull")],
                ),
            ),
        ],
        lookup_key_results=[
            LookupKeyResult(
                lookup_key="Date",
                used_as_data_type=True,
                service_results=[
                    IdentifierServiceResult(class_found="DateIdentifier"),
                    ParserServiceResult(
                        results=[
                            ParsersByCultureResult(
                                culture_id="en",
                                parser_results=[ParserFoundResult(class_found="DateParser")],
                            ),
                            ParsersByCultureResult(
                                culture_id="fr",
                                not_found=True,
                                severity=IssueSeverity.WARNING,
                                message="No parser for fr",
                            ),
                        ]
                    ),
                    FormatterServiceResult(
                        results=[
                            FormattersByCultureResult(
                                requested_culture_id="en",
                                actual_culture_id="en",
                                class_found="DateFormatter",
                            )
                        ]
                    ),
                ],
            )
        ],
        culture_ids=["en", "fr"],
        value_host_names=["startDate", "endDate"],
    )
