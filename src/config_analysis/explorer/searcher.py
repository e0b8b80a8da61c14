"""Criteria matching shared by every result node explorer."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from ..models import SearchCriteria


class MatchResult(Enum):
    """Outcome of testing one node against criteria."""

    MATCH = "match"
    MISMATCH = "mismatch"
    NOT_APPLICABLE = "not-applicable"

    @classmethod
    def of(cls, matched: bool) -> "MatchResult":
        return cls.MATCH if matched else cls.MISMATCH

    @classmethod
    def combine(cls, *results: "MatchResult") -> "MatchResult":
        """AND the results together, treating ``NOT_APPLICABLE`` as neutral.

        Any mismatch wins. When nothing applied, the combination does not apply either.
        """

        if cls.MISMATCH in results:
            return cls.MISMATCH
        if all(result is cls.NOT_APPLICABLE for result in results):
            return cls.NOT_APPLICABLE
        return cls.MATCH


class CriteriaSearcher:
    """Prepared form of :class:`SearchCriteria` answering one query per dimension.

    Strings are lowercased once here so explorers never repeat that work.
    Every ``match_*`` method returns :attr:`MatchResult.MATCH` when no criteria
    were supplied, :attr:`MatchResult.NOT_APPLICABLE` when its dimension is
    unset or empty, and otherwise whether the value is present.
    """

    def __init__(self, criteria: SearchCriteria | None = None) -> None:
        self._all_match = criteria is None or criteria.is_empty
        self._criteria = criteria or SearchCriteria()
        self._features = _lowered(self._criteria.features)
        self._severities = _lowered_severities(self._criteria.severities)
        self._lookup_keys = _lowered(self._criteria.lookup_keys)
        self._service_names = _lowered(self._criteria.service_names)
        self._value_host_names = _lowered(self._criteria.value_host_names)
        self._error_codes = _lowered(self._criteria.error_codes)
        self._condition_types = _lowered(self._criteria.condition_types)
        self._property_names = _lowered(self._criteria.property_names)
        self._culture_ids = _lowered(self._criteria.culture_ids)

    @property
    def criteria(self) -> SearchCriteria:
        return self._criteria

    @property
    def all_match(self) -> bool:
        """``True`` when no criteria were supplied; every node then matches."""

        return self._all_match

    @property
    def prune_on_parent_mismatch(self) -> bool:
        return self._criteria.prune_on_parent_mismatch

    # ------------------------------------------------------------------
    def match_feature(self, feature: Optional[str]) -> MatchResult:
        return self._match_string(feature, self._features)

    def match_severity(self, severity: Optional[str]) -> MatchResult:
        """Match a node's severity. ``None`` means the node has no issue.

        ``None`` in the criteria matches such nodes.
        """

        if self._all_match:
            return MatchResult.MATCH
        if not self._severities:
            return MatchResult.NOT_APPLICABLE
        value = severity.lower() if isinstance(severity, str) else None
        return MatchResult.of(value in self._severities)

    def match_lookup_key(self, lookup_key: Optional[str]) -> MatchResult:
        return self._match_string(lookup_key, self._lookup_keys)

    def match_service_name(self, service_name: Optional[str]) -> MatchResult:
        return self._match_string(service_name, self._service_names)

    def match_value_host_name(self, value_host_name: Optional[str]) -> MatchResult:
        return self._match_string(value_host_name, self._value_host_names)

    def match_error_code(self, error_code: Optional[str]) -> MatchResult:
        return self._match_string(error_code, self._error_codes)

    def match_condition_type(self, condition_type: Optional[str]) -> MatchResult:
        return self._match_string(condition_type, self._condition_types)

    def match_property_name(self, property_name: Optional[str]) -> MatchResult:
        return self._match_string(property_name, self._property_names)

    def match_culture_id(self, culture_id: Optional[str]) -> MatchResult:
        return self._match_string(culture_id, self._culture_ids)

    # ------------------------------------------------------------------
    def _match_string(self, value: Optional[str], candidates: Tuple[str, ...]) -> MatchResult:
        if self._all_match:
            return MatchResult.MATCH
        if not candidates:
            return MatchResult.NOT_APPLICABLE
        if not value:
            return MatchResult.MISMATCH
        return MatchResult.of(value.lower() in candidates)


def _lowered(values: Optional[Tuple[str, ...]]) -> Tuple[str, ...]:
    if not values:
        return ()
    return tuple(value.lower() for value in values)


def _lowered_severities(values: Optional[Tuple[Optional[str], ...]]) -> Tuple[Optional[str], ...]:
    if not values:
        return ()
    return tuple(value.lower() if isinstance(value, str) else None for value in values)


__all__ = ["CriteriaSearcher", "MatchResult"]
