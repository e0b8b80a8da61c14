"""Result tree models produced by configuration analyzers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class IssueSeverity(str, Enum):
    """Severity of an issue reported on a result node."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class ResultFeature(str, Enum):
    """Built-in discriminator values stored in :attr:`ResultNode.feature`."""

    VALUE_HOST = "ValueHost"
    VALIDATOR = "Validator"
    CONDITION = "Condition"
    LOOKUP_KEY = "LookupKey"
    IDENTIFIER = "Identifier"
    CONVERTER = "Converter"
    COMPARER = "Comparer"
    PARSER = "Parser"
    PARSERS_BY_CULTURE = "ParsersByCulture"
    PARSER_FOUND = "ParserFound"
    FORMATTER = "Formatter"
    FORMATTERS_BY_CULTURE = "FormattersByCulture"
    PROPERTY = "Property"
    L10N_PROPERTY = "l10nProperty"
    ERROR = "Error"


ResultPath = Dict[str, Optional[str]]


@dataclass(slots=True, kw_only=True)
class ResultNode:
    """Base for every node of the result tree.

    Nodes whose feature has no dedicated class are plain ``ResultNode`` instances
    that keep their remaining fields in ``details``.
    """

    feature: str
    severity: Optional[IssueSeverity] = None
    message: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, kw_only=True)
class PropertyResult(ResultNode):
    """Issue found on one property (or a group of related properties) of a config object."""

    feature: str = ResultFeature.PROPERTY.value
    property_name: str = ""


@dataclass(slots=True, kw_only=True)
class LocalizedTextResult:
    """Localization outcome for one culture."""

    text: Optional[str] = None
    severity: Optional[IssueSeverity] = None
    message: Optional[str] = None


@dataclass(slots=True, kw_only=True)
class LocalizedPropertyResult(PropertyResult):
    """A property paired with its localization property, such as ``label`` and ``labell10n``."""

    feature: str = ResultFeature.L10N_PROPERTY.value
    l10n_key: str = ""
    l10n_property_name: str = ""
    culture_text: Dict[str, LocalizedTextResult] = field(default_factory=dict)


@dataclass(slots=True, kw_only=True)
class ErrorResult(ResultNode):
    """Reported when an analyzer itself fails."""

    feature: str = ResultFeature.ERROR.value
    severity: Optional[IssueSeverity] = IssueSeverity.ERROR
    analyzer_class_name: str = ""


@dataclass(slots=True, kw_only=True)
class ConfigObjectResult(ResultNode):
    """Shared shape of results describing one analysed config object."""

    properties: List[ResultNode] = field(default_factory=list)
    config: Optional[Dict[str, Any]] = None


@dataclass(slots=True, kw_only=True)
class ConditionResult(ConfigObjectResult):
    feature: str = ResultFeature.CONDITION.value
    condition_type: str = ""
    class_found: Optional[str] = None
    children_results: List["ConditionResult"] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class ValidatorResult(ConfigObjectResult):
    feature: str = ResultFeature.VALIDATOR.value
    error_code: str = ""
    condition_result: Optional[ConditionResult] = None


@dataclass(slots=True, kw_only=True)
class ValueHostResult(ConfigObjectResult):
    feature: str = ResultFeature.VALUE_HOST.value
    value_host_name: str = ""
    validator_results: List[ValidatorResult] = field(default_factory=list)
    enabler_condition_result: Optional[ConditionResult] = None


@dataclass(slots=True, kw_only=True)
class ServiceResult(ResultNode):
    """Base for results of a service looked up by a lookup key."""

    try_fallback: Optional[bool] = None
    not_found: Optional[bool] = None
    class_found: Optional[str] = None
    data_examples: List[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class IdentifierServiceResult(ServiceResult):
    feature: str = ResultFeature.IDENTIFIER.value


@dataclass(slots=True, kw_only=True)
class ConverterServiceResult(ServiceResult):
    feature: str = ResultFeature.CONVERTER.value


@dataclass(slots=True, kw_only=True)
class ComparerServiceResult(ServiceResult):
    feature: str = ResultFeature.COMPARER.value


@dataclass(slots=True, kw_only=True)
class ParserFoundResult(ResultNode):
    feature: str = ResultFeature.PARSER_FOUND.value
    class_found: Optional[str] = None
    data_examples: List[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class ParsersByCultureResult(ResultNode):
    feature: str = ResultFeature.PARSERS_BY_CULTURE.value
    culture_id: str = ""
    not_found: Optional[bool] = None
    parser_results: List[ParserFoundResult] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class ParserServiceResult(ServiceResult):
    feature: str = ResultFeature.PARSER.value
    results: List[ParsersByCultureResult] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class FormattersByCultureResult(ResultNode):
    feature: str = ResultFeature.FORMATTERS_BY_CULTURE.value
    requested_culture_id: str = ""
    actual_culture_id: Optional[str] = None
    class_found: Optional[str] = None
    not_found: Optional[bool] = None
    data_examples: List[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class FormatterServiceResult(ServiceResult):
    feature: str = ResultFeature.FORMATTER.value
    results: List[FormattersByCultureResult] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class LookupKeyResult(ResultNode):
    """All services that use one lookup key."""

    feature: str = ResultFeature.LOOKUP_KEY.value
    lookup_key: str = ""
    used_as_data_type: bool = False
    service_results: List[ResultNode] = field(default_factory=list)


@dataclass(slots=True)
class AnalysisResults:
    """Complete output of a configuration analysis: two independent forests plus metadata."""

    value_host_results: List[ValueHostResult] = field(default_factory=list)
    lookup_key_results: List[LookupKeyResult] = field(default_factory=list)
    culture_ids: List[str] = field(default_factory=list)
    value_host_names: List[str] = field(default_factory=list)


@dataclass(slots=True)
class PathedResult:
    """One matching node plus the path leading to it from the root of its forest."""

    path: ResultPath
    result: ResultNode
