"""Explorers wrapping each kind of result node, plus the shared traversal algorithms."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, List, Optional, Set, TypeVar

from ..models import (
    ComparerServiceResult,
    ConditionResult,
    ConverterServiceResult,
    ErrorResult,
    FormatterServiceResult,
    FormattersByCultureResult,
    IdentifierServiceResult,
    LocalizedPropertyResult,
    LookupKeyResult,
    ParserFoundResult,
    ParserServiceResult,
    ParsersByCultureResult,
    PathedResult,
    PropertyResult,
    ResultFeature,
    ResultNode,
    ResultPath,
    ValidatorResult,
    ValueHostResult,
)
from .searcher import CriteriaSearcher, MatchResult

if TYPE_CHECKING:  # pragma: no cover - imported for type checking only
    from .factory import ExplorerFactory

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=ResultNode)


class ResultNodeExplorer(ABC, Generic[T]):
    """Wraps one result node for matching and traversal.

    Subclasses describe their node: its feature, its identity used in paths,
    the criteria dimensions it supports and its children. The traversal
    algorithms here depend only on that contract and on the factory, so they
    work for any registered node kind.
    """

    def __init__(self, result: T) -> None:
        if result is None:
            raise ValueError("result is required")
        self._result = result

    @property
    def result(self) -> T:
        return self._result

    @abstractmethod
    def feature(self) -> str:
        """The feature string this explorer supports."""

    @abstractmethod
    def identifier(self) -> Optional[str]:
        """Natural key of the node used in paths. May be ``None``."""

    @abstractmethod
    def children(self) -> List[ResultNode]:
        """Child result nodes in traversal order, or ``[]``."""

    @abstractmethod
    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        """Match the dimensions specific to this node kind.

        Feature and severity are already covered by :meth:`match_this`.
        """

    # ------------------------------------------------------------------
    def match_this(self, searcher: CriteriaSearcher) -> MatchResult:
        """Match this node alone against every applicable criteria dimension."""

        if searcher is None or searcher.all_match:
            return MatchResult.MATCH

        feature_match = self._match_feature(searcher)
        if feature_match is MatchResult.MISMATCH:
            return MatchResult.MISMATCH
        severity_match = self._match_severity(searcher)
        if severity_match is MatchResult.MISMATCH:
            return MatchResult.MISMATCH
        own_match = self._match_own_criteria(searcher)
        return MatchResult.combine(feature_match, severity_match, own_match)

    def _match_feature(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_feature(self.feature())

    def _match_severity(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_severity(self.result.severity)

    # ------------------------------------------------------------------
    def extend_path(self, path: ResultPath | None) -> ResultPath:
        """Return a copy of ``path`` with this node's entry appended.

        A feature already present in the path gets ``#2``, ``#3``... appended,
        which happens with conditions nested inside conditions.
        """

        new_path: ResultPath = dict(path or {})
        base_feature = self.feature()
        key = base_feature
        count = 1
        while key in new_path:
            count += 1
            key = f"{base_feature}#{count}"
        new_path[key] = self.identifier()
        return new_path

    def has_match(self, searcher: CriteriaSearcher, factory: "ExplorerFactory") -> bool:
        """``True`` when this node or any descendant matches. Stops at the first match."""

        return self.find_one(searcher, factory) is not None

    def find_one(
        self,
        searcher: CriteriaSearcher,
        factory: "ExplorerFactory",
        path: ResultPath | None = None,
    ) -> PathedResult | None:
        """Depth-first search returning the first match amongst this node and its descendants."""

        return self._find_one(searcher, factory, path, set())

    def collect(
        self,
        searcher: CriteriaSearcher,
        matches: List[PathedResult],
        path: ResultPath | None,
        factory: "ExplorerFactory",
    ) -> None:
        """Append every match amongst this node and its descendants to ``matches``.

        Order is pre-order: a parent before its children, children in order.
        Only a definite match is collected.
        """

        self._collect(searcher, matches, path, factory, set())

    # ------------------------------------------------------------------
    def _find_one(
        self,
        searcher: CriteriaSearcher,
        factory: "ExplorerFactory",
        path: ResultPath | None,
        visiting: Set[int],
    ) -> PathedResult | None:
        new_path = self.extend_path(path)
        match = self.match_this(searcher)
        if match is MatchResult.MATCH:
            return PathedResult(path=new_path, result=self.result)

        if self._should_visit_children(match, searcher):
            visiting.add(id(self.result))
            try:
                for child in self._unvisited_children(visiting, new_path):
                    found = factory.create(child)._find_one(searcher, factory, new_path, visiting)
                    if found is not None:
                        return found
            finally:
                visiting.discard(id(self.result))
        return None

    def _collect(
        self,
        searcher: CriteriaSearcher,
        matches: List[PathedResult],
        path: ResultPath | None,
        factory: "ExplorerFactory",
        visiting: Set[int],
    ) -> None:
        new_path = self.extend_path(path)
        match = self.match_this(searcher)
        if match is MatchResult.MATCH:
            matches.append(PathedResult(path=new_path, result=self.result))

        if not self._should_visit_children(match, searcher):
            return
        visiting.add(id(self.result))
        try:
            for child in self._unvisited_children(visiting, new_path):
                factory.create(child)._collect(searcher, matches, new_path, factory, visiting)
        finally:
            visiting.discard(id(self.result))

    @staticmethod
    def _should_visit_children(match: MatchResult, searcher: CriteriaSearcher) -> bool:
        # Only a definite mismatch prunes; not applicable never does.
        return match is not MatchResult.MISMATCH or not searcher.prune_on_parent_mismatch

    def _unvisited_children(self, visiting: Set[int], path: ResultPath) -> List[ResultNode]:
        children: List[ResultNode] = []
        for child in self.children():
            if id(child) in visiting:
                logger.warning(
                    "Skipping cyclic reference to %s below %s", child.feature, list(path)
                )
                continue
            children.append(child)
        return children

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(feature={self.feature()!r}, id={self.identifier()!r})"


def _properties(result: ResultNode) -> List[ResultNode]:
    return list(getattr(result, "properties", None) or [])


# Config object explorers ----------------------------------------------------
class ValueHostResultExplorer(ResultNodeExplorer[ValueHostResult]):
    """Identity is the value host name. Children: properties, validators, enabler condition."""

    def feature(self) -> str:
        return ResultFeature.VALUE_HOST.value

    def identifier(self) -> Optional[str]:
        return self.result.value_host_name

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_value_host_name(self.result.value_host_name)

    def children(self) -> List[ResultNode]:
        children = _properties(self.result)
        children.extend(self.result.validator_results or [])
        if self.result.enabler_condition_result is not None:
            children.append(self.result.enabler_condition_result)
        return children


class ValidatorResultExplorer(ResultNodeExplorer[ValidatorResult]):
    """Identity is the error code. Children: properties, then the condition."""

    def feature(self) -> str:
        return ResultFeature.VALIDATOR.value

    def identifier(self) -> Optional[str]:
        return self.result.error_code

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_error_code(self.result.error_code)

    def children(self) -> List[ResultNode]:
        children = _properties(self.result)
        if self.result.condition_result is not None:
            children.append(self.result.condition_result)
        return children


class ConditionResultExplorer(ResultNodeExplorer[ConditionResult]):
    """Identity is the condition type.

    Children are properties followed by child conditions, so the same feature
    can repeat along one path.
    """

    def feature(self) -> str:
        return ResultFeature.CONDITION.value

    def identifier(self) -> Optional[str]:
        return self.result.condition_type

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_condition_type(self.result.condition_type)

    def children(self) -> List[ResultNode]:
        children = _properties(self.result)
        children.extend(self.result.children_results or [])
        return children


# Lookup key and service explorers ------------------------------------------
class LookupKeyResultExplorer(ResultNodeExplorer[LookupKeyResult]):
    def feature(self) -> str:
        return ResultFeature.LOOKUP_KEY.value

    def identifier(self) -> Optional[str]:
        return self.result.lookup_key

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_lookup_key(self.result.lookup_key)

    def children(self) -> List[ResultNode]:
        return list(self.result.service_results or [])


class _ServiceResultExplorer(ResultNodeExplorer[T]):
    """Services have no identity of their own and match ``service_names`` on their feature."""

    service_name: str = ""

    def feature(self) -> str:
        return self.service_name

    def identifier(self) -> Optional[str]:
        return None

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_service_name(self.service_name)

    def children(self) -> List[ResultNode]:
        return []


class IdentifierServiceResultExplorer(_ServiceResultExplorer[IdentifierServiceResult]):
    service_name = ResultFeature.IDENTIFIER.value


class ConverterServiceResultExplorer(_ServiceResultExplorer[ConverterServiceResult]):
    service_name = ResultFeature.CONVERTER.value


class ComparerServiceResultExplorer(_ServiceResultExplorer[ComparerServiceResult]):
    service_name = ResultFeature.COMPARER.value


class ParserServiceResultExplorer(_ServiceResultExplorer[ParserServiceResult]):
    service_name = ResultFeature.PARSER.value

    def children(self) -> List[ResultNode]:
        return list(self.result.results or [])


class FormatterServiceResultExplorer(_ServiceResultExplorer[FormatterServiceResult]):
    service_name = ResultFeature.FORMATTER.value

    def children(self) -> List[ResultNode]:
        return list(self.result.results or [])


class ParsersByCultureResultExplorer(ResultNodeExplorer[ParsersByCultureResult]):
    def feature(self) -> str:
        return ResultFeature.PARSERS_BY_CULTURE.value

    def identifier(self) -> Optional[str]:
        return self.result.culture_id

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        # Both must hold when both apply; either alone decides otherwise.
        return MatchResult.combine(
            searcher.match_culture_id(self.result.culture_id),
            searcher.match_service_name(ResultFeature.PARSER.value),
        )

    def children(self) -> List[ResultNode]:
        return list(self.result.parser_results or [])


class ParserFoundResultExplorer(ResultNodeExplorer[ParserFoundResult]):
    """Identity is the class found, since several parsers may serve one culture."""

    def feature(self) -> str:
        return ResultFeature.PARSER_FOUND.value

    def identifier(self) -> Optional[str]:
        return self.result.class_found

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_service_name(ResultFeature.PARSER.value)

    def children(self) -> List[ResultNode]:
        return []


class FormattersByCultureResultExplorer(ResultNodeExplorer[FormattersByCultureResult]):
    def feature(self) -> str:
        return ResultFeature.FORMATTERS_BY_CULTURE.value

    def identifier(self) -> Optional[str]:
        return self.result.requested_culture_id

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return MatchResult.combine(
            searcher.match_culture_id(self.result.requested_culture_id),
            searcher.match_service_name(ResultFeature.FORMATTER.value),
        )

    def children(self) -> List[ResultNode]:
        return []


# Property and error explorers -----------------------------------------------
class PropertyResultExplorer(ResultNodeExplorer[PropertyResult]):
    def feature(self) -> str:
        return ResultFeature.PROPERTY.value

    def identifier(self) -> Optional[str]:
        return self.result.property_name

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return searcher.match_property_name(self.result.property_name)

    def children(self) -> List[ResultNode]:
        return []


class LocalizedPropertyResultExplorer(ResultNodeExplorer[LocalizedPropertyResult]):
    """Identity is the localization property name.

    ``property_names`` criteria match either the property name or the
    localization property name.
    """

    def feature(self) -> str:
        return ResultFeature.L10N_PROPERTY.value

    def identifier(self) -> Optional[str]:
        return self.result.l10n_property_name

    def _match_severity(self, searcher: CriteriaSearcher) -> MatchResult:
        # Any culture entry with a matching severity is enough.
        for text_result in (self.result.culture_text or {}).values():
            if text_result is None:
                continue
            if searcher.match_severity(text_result.severity) is MatchResult.MATCH:
                return MatchResult.MATCH
        return searcher.match_severity(self.result.severity)

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        property_match = searcher.match_property_name(self.result.property_name)
        l10n_match = searcher.match_property_name(self.result.l10n_property_name)
        if MatchResult.MATCH in (property_match, l10n_match):
            return MatchResult.MATCH
        if MatchResult.MISMATCH in (property_match, l10n_match):
            return MatchResult.MISMATCH
        return MatchResult.NOT_APPLICABLE

    def children(self) -> List[ResultNode]:
        return []


class ErrorResultExplorer(ResultNodeExplorer[ErrorResult]):
    """Analyzer failures. Only feature and severity criteria apply."""

    def feature(self) -> str:
        return ResultFeature.ERROR.value

    def identifier(self) -> Optional[str]:
        return None

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return MatchResult.NOT_APPLICABLE

    def children(self) -> List[ResultNode]:
        return []


__all__ = [
    "ComparerServiceResultExplorer",
    "ConditionResultExplorer",
    "ConverterServiceResultExplorer",
    "ErrorResultExplorer",
    "FormatterServiceResultExplorer",
    "FormattersByCultureResultExplorer",
    "IdentifierServiceResultExplorer",
    "LocalizedPropertyResultExplorer",
    "LookupKeyResultExplorer",
    "ParserFoundResultExplorer",
    "ParserServiceResultExplorer",
    "ParsersByCultureResultExplorer",
    "PropertyResultExplorer",
    "ResultNodeExplorer",
    "ValidatorResultExplorer",
    "ValueHostResultExplorer",
]
