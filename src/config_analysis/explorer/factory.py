"""Registry creating the right explorer for each result node."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List

from ..models import ResultFeature, ResultNode
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

logger = logging.getLogger(__name__)

ExplorerCreator = Callable[[ResultNode], ResultNodeExplorer]


class ExplorerError(RuntimeError):
    """Base class for errors raised while exploring analysis results."""


class UnregisteredFeatureError(ExplorerError):
    """Raised when no explorer is registered for a result node's feature."""

    def __init__(self, feature: str) -> None:
        super().__init__(f"Explorer not registered for feature: {feature}")
        self.feature = feature


_BUILT_IN_EXPLORERS: Dict[str, ExplorerCreator] = {
    ResultFeature.VALUE_HOST.value: ValueHostResultExplorer,
    ResultFeature.VALIDATOR.value: ValidatorResultExplorer,
    ResultFeature.CONDITION.value: ConditionResultExplorer,
    ResultFeature.LOOKUP_KEY.value: LookupKeyResultExplorer,
    ResultFeature.IDENTIFIER.value: IdentifierServiceResultExplorer,
    ResultFeature.CONVERTER.value: ConverterServiceResultExplorer,
    ResultFeature.COMPARER.value: ComparerServiceResultExplorer,
    ResultFeature.PARSER.value: ParserServiceResultExplorer,
    ResultFeature.PARSERS_BY_CULTURE.value: ParsersByCultureResultExplorer,
    ResultFeature.PARSER_FOUND.value: ParserFoundResultExplorer,
    ResultFeature.FORMATTER.value: FormatterServiceResultExplorer,
    ResultFeature.FORMATTERS_BY_CULTURE.value: FormattersByCultureResultExplorer,
    ResultFeature.PROPERTY.value: PropertyResultExplorer,
    ResultFeature.L10N_PROPERTY.value: LocalizedPropertyResultExplorer,
    ResultFeature.ERROR.value: ErrorResultExplorer,
}


def base_feature(feature: str) -> str:
    """Strip a ``#N`` suffix, turning ``"Condition#2"`` into ``"Condition"``."""

    feature = getattr(feature, "value", feature)
    return str(feature).split("#", 1)[0]


class ExplorerFactory:
    """Create explorers for result nodes based on their feature.

    Starts with every built-in node kind registered. Register additional
    creators to support custom result nodes.
    """

    def __init__(self) -> None:
        self._creators: Dict[str, ExplorerCreator] = dict(_BUILT_IN_EXPLORERS)

    def register(self, feature: str, creator: ExplorerCreator) -> None:
        """Register ``creator`` for ``feature``, replacing any earlier registration."""

        logger.debug("Registering explorer for feature %s", feature)
        self._creators[base_feature(feature)] = creator

    def create(self, result: ResultNode) -> ResultNodeExplorer:
        """Return a new explorer wrapping ``result``."""

        creator = self._creators.get(base_feature(result.feature))
        if creator is None:
            raise UnregisteredFeatureError(result.feature)
        return creator(result)

    def is_registered(self, feature: str) -> bool:
        return base_feature(feature) in self._creators

    def registered_features(self) -> List[str]:
        return list(self._creators)


__all__ = [
    "ExplorerCreator",
    "ExplorerError",
    "ExplorerFactory",
    "UnregisteredFeatureError",
    "base_feature",
]
