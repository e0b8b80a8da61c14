"""Matching, traversal and the top level results explorer."""

from .factory import ExplorerCreator, ExplorerError, ExplorerFactory, UnregisteredFeatureError, base_feature
from .nodes import (
    ComparerServiceResultExplorer,
    ConditionResultExplorer,
    ConverterServiceResultExplorer,
    ErrorResultExplorer,
    FormatterServiceResultExplorer,
    FormattersByCultureResultExplorer,
    IdentifierServiceResultExplorer,
    LocalizedPropertyResultExplorer,
    LookupKeyResultExplorer,
    ParserFoundResultExplorer,
    ParserServiceResultExplorer,
    ParsersByCultureResultExplorer,
    PropertyResultExplorer,
    ResultNodeExplorer,
    ValidatorResultExplorer,
    ValueHostResultExplorer,
)
from .results_explorer import ERROR_CRITERIA, AnalysisErrorsFound, ResultsExplorer
from .searcher import CriteriaSearcher, MatchResult

__all__ = [
    "AnalysisErrorsFound",
    "ComparerServiceResultExplorer",
    "ConditionResultExplorer",
    "ConverterServiceResultExplorer",
    "CriteriaSearcher",
    "ERROR_CRITERIA",
    "ErrorResultExplorer",
    "ExplorerCreator",
    "ExplorerError",
    "ExplorerFactory",
    "FormatterServiceResultExplorer",
    "FormattersByCultureResultExplorer",
    "IdentifierServiceResultExplorer",
    "LocalizedPropertyResultExplorer",
    "LookupKeyResultExplorer",
    "MatchResult",
    "ParserFoundResultExplorer",
    "ParserServiceResultExplorer",
    "ParsersByCultureResultExplorer",
    "PropertyResultExplorer",
    "ResultNodeExplorer",
    "ResultsExplorer",
    "UnregisteredFeatureError",
    "ValidatorResultExplorer",
    "ValueHostResultExplorer",
    "base_feature",
]
