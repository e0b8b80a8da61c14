"""Tools for exploring the results of a configuration analysis."""

from .explorer import (
    AnalysisErrorsFound,
    CriteriaSearcher,
    ExplorerFactory,
    MatchResult,
    ResultsExplorer,
    UnregisteredFeatureError,
)
from .models import (
    AnalysisResults,
    IssueSeverity,
    PathedResult,
    ResultFeature,
    ResultNode,
    SearchCriteria,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisErrorsFound",
    "AnalysisResults",
    "CriteriaSearcher",
    "ExplorerFactory",
    "IssueSeverity",
    "MatchResult",
    "PathedResult",
    "ResultFeature",
    "ResultNode",
    "ResultsExplorer",
    "SearchCriteria",
    "UnregisteredFeatureError",
    "__version__",
]
