"""Conversion helpers that turn raw analysis output into result tree models."""

from __future__ import annotations

import re
from dataclasses import fields
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type

from ..models import (
    AnalysisResults,
    ComparerServiceResult,
    ConditionResult,
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
    PropertyResult,
    ResultFeature,
    ResultNode,
    ValidatorResult,
    ValueHostResult,
)


class ResultNormalizationError(RuntimeError):
    """Raised when raw analysis output does not describe a valid result tree."""


_NODE_TYPES: Dict[str, Type[ResultNode]] = {
    ResultFeature.VALUE_HOST.value: ValueHostResult,
    ResultFeature.VALIDATOR.value: ValidatorResult,
    ResultFeature.CONDITION.value: ConditionResult,
    ResultFeature.LOOKUP_KEY.value: LookupKeyResult,
    ResultFeature.IDENTIFIER.value: IdentifierServiceResult,
    ResultFeature.CONVERTER.value: ConverterServiceResult,
    ResultFeature.COMPARER.value: ComparerServiceResult,
    ResultFeature.PARSER.value: ParserServiceResult,
    ResultFeature.PARSERS_BY_CULTURE.value: ParsersByCultureResult,
    ResultFeature.PARSER_FOUND.value: ParserFoundResult,
    ResultFeature.FORMATTER.value: FormatterServiceResult,
    ResultFeature.FORMATTERS_BY_CULTURE.value: FormattersByCultureResult,
    ResultFeature.PROPERTY.value: PropertyResult,
    ResultFeature.L10N_PROPERTY.value: LocalizedPropertyResult,
    ResultFeature.ERROR.value: ErrorResult,
}

# Fields holding child nodes.
_CHILD_LIST_FIELDS = {
    "properties",
    "validator_results",
    "children_results",
    "service_results",
    "results",
    "parser_results",
}
_CHILD_FIELDS = {"condition_result", "enabler_condition_result"}

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(key: str) -> str:
    """Return ``key`` in snake_case, so ``valueHostName`` becomes ``value_host_name``."""

    return _CAMEL_BOUNDARY.sub("_", key).lower()


class ResultNormalizer:
    """Normalize raw analysis output into :class:`AnalysisResults`.

    Accepts camelCase keys, as written by the analyzers, or snake_case keys.
    """

    def normalize(self, raw: Mapping[str, Any]) -> AnalysisResults:
        """Return the result forests described by ``raw``."""

        if not isinstance(raw, Mapping):
            raise ResultNormalizationError("Analysis results must be a mapping")
        data = {snake_case(str(key)): value for key, value in raw.items()}

        return AnalysisResults(
            value_host_results=self._nodes(data.get("value_host_results"), "value_host_results"),
            lookup_key_results=self._nodes(data.get("lookup_key_results"), "lookup_key_results"),
            culture_ids=[str(item) for item in data.get("culture_ids") or []],
            value_host_names=[str(item) for item in data.get("value_host_names") or []],
        )

    def normalize_node(self, raw: Mapping[str, Any]) -> ResultNode:
        """Return the node described by ``raw`` along with all of its descendants."""

        if not isinstance(raw, Mapping):
            raise ResultNormalizationError(f"Result node must be a mapping, not {type(raw).__name__}")
        feature = raw.get("feature")
        if not feature:
            raise ResultNormalizationError(f"Result node has no feature: {dict(raw)!r}")

        feature = str(feature)
        node_type = _NODE_TYPES.get(feature.split("#", 1)[0])
        if node_type is None:
            return self._extension_node(feature, raw)

        known = {item.name for item in fields(node_type)}
        values: Dict[str, Any] = {"feature": feature}
        details: Dict[str, Any] = {}
        for key, value in raw.items():
            name = snake_case(str(key))
            if name == "feature":
                continue
            if name not in known or name == "details":
                details[str(key)] = value
                continue
            values[name] = self._field_value(name, value)

        values["details"] = details
        return node_type(**values)

    # ------------------------------------------------------------------
    def _nodes(self, raw: Any, name: str) -> List[Any]:
        if raw is None:
            return []
        if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
            raise ResultNormalizationError(f"'{name}' must be a list of result nodes")
        return [self.normalize_node(item) for item in raw]

    def _field_value(self, name: str, value: Any) -> Any:
        if name == "severity":
            return self._severity(value)
        if name in _CHILD_LIST_FIELDS:
            return self._nodes(value, name)
        if name in _CHILD_FIELDS:
            return None if value is None else self.normalize_node(value)
        if name == "culture_text":
            return self._culture_text(value)
        if name == "data_examples":
            return [str(item) for item in value or []]
        return value

    def _severity(self, value: Any) -> Optional[IssueSeverity]:
        if value is None:
            return None
        if isinstance(value, IssueSeverity):
            return value
        try:
            return IssueSeverity(str(value).strip().lower())
        except ValueError as exc:
            raise ResultNormalizationError(f"Unknown severity: {value}") from exc

    def _culture_text(self, value: Any) -> Dict[str, LocalizedTextResult]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ResultNormalizationError("'culture_text' must map culture ids to results")

        culture_text: Dict[str, LocalizedTextResult] = {}
        for culture_id, entry in value.items():
            entry = {snake_case(str(key)): item for key, item in (entry or {}).items()}
            culture_text[str(culture_id)] = LocalizedTextResult(
                text=entry.get("text"),
                severity=self._severity(entry.get("severity")),
                message=entry.get("message"),
            )
        return culture_text

    def _extension_node(self, feature: str, raw: Mapping[str, Any]) -> ResultNode:
        details = {
            str(key): value
            for key, value in raw.items()
            if key not in ("feature", "severity", "message")
        }
        return ResultNode(
            feature=feature,
            severity=self._severity(raw.get("severity")),
            message=raw.get("message"),
            details=details,
        )


__all__ = ["ResultNormalizationError", "ResultNormalizer", "snake_case"]
