"""Data models for configuration analysis results and search criteria."""

from .criteria import InvalidCriteriaError, SearchCriteria
from .results import (
    AnalysisResults,
    ComparerServiceResult,
    ConditionResult,
    ConfigObjectResult,
    ConverterServiceResult,
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
    PathedResult,
    PropertyResult,
    ResultFeature,
    ResultNode,
    ResultPath,
    ServiceResult,
    ValidatorResult,
    ValueHostResult,
)

__all__ = [
    "AnalysisResults",
    "ComparerServiceResult",
    "ConditionResult",
    "ConfigObjectResult",
    "ConverterServiceResult",
    "ErrorResult",
    "FormatterServiceResult",
    "FormattersByCultureResult",
    "IdentifierServiceResult",
    "InvalidCriteriaError",
    "IssueSeverity",
    "LocalizedPropertyResult",
    "LocalizedTextResult",
    "LookupKeyResult",
    "ParserFoundResult",
    "ParserServiceResult",
    "ParsersByCultureResult",
    "PathedResult",
    "PropertyResult",
    "ResultFeature",
    "ResultNode",
    "ResultPath",
    "SearchCriteria",
    "ServiceResult",
    "ValidatorResult",
    "ValueHostResult",
]
