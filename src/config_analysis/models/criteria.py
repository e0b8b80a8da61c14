"""Search criteria used to filter result trees."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Iterable, Mapping, Optional, Tuple

from .results import IssueSeverity


class InvalidCriteriaError(ValueError):
    """Raised when criteria cannot be built from user supplied data."""


# camelCase spellings accepted by :meth:`SearchCriteria.from_mapping`.
_CRITERIA_ALIASES = {
    "lookupKeys": "lookup_keys",
    "serviceNames": "service_names",
    "valueHostNames": "value_host_names",
    "errorCodes": "error_codes",
    "conditionTypes": "condition_types",
    "propertyNames": "property_names",
    "cultureIds": "culture_ids",
    "pruneOnParentMismatch": "prune_on_parent_mismatch",
    "skipChildrenIfParentMismatch": "prune_on_parent_mismatch",
    "skip_children_if_parent_mismatch": "prune_on_parent_mismatch",
}


@dataclass(frozen=True)
class SearchCriteria:
    """Filter over the dimensions of a result node.

    Every dimension is optional. An unset dimension places no constraint and is
    not applicable to nodes that do not expose it. To match, every applicable
    dimension must match. Strings are compared case-insensitively.
    ``severities`` may contain ``None`` to match nodes that have no issue.

    When ``prune_on_parent_mismatch`` is true, children of a node that definitely
    mismatches are not evaluated.
    """

    features: Optional[Tuple[str, ...]] = None
    severities: Optional[Tuple[Optional[str], ...]] = None
    lookup_keys: Optional[Tuple[str, ...]] = None
    service_names: Optional[Tuple[str, ...]] = None
    value_host_names: Optional[Tuple[str, ...]] = None
    error_codes: Optional[Tuple[str, ...]] = None
    condition_types: Optional[Tuple[str, ...]] = None
    property_names: Optional[Tuple[str, ...]] = None
    culture_ids: Optional[Tuple[str, ...]] = None
    prune_on_parent_mismatch: bool = False

    def __post_init__(self) -> None:
        for item in fields(self):
            if item.name == "prune_on_parent_mismatch":
                continue
            value = getattr(self, item.name)
            if value is None:
                continue
            if isinstance(value, str):
                value = (value,)
            object.__setattr__(self, item.name, tuple(value))

    @property
    def is_empty(self) -> bool:
        """``True`` when nothing at all was supplied, which matches every node."""

        return self == SearchCriteria()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SearchCriteria":
        """Build criteria from a mapping using snake_case or camelCase keys."""

        if not data:
            return cls()
        if not isinstance(data, Mapping):
            raise InvalidCriteriaError("Criteria must be a mapping")

        known = {item.name for item in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _CRITERIA_ALIASES.get(key, key)
            if name not in known:
                raise InvalidCriteriaError(f"Unknown criteria field: {key}")
            if name == "prune_on_parent_mismatch":
                values[name] = bool(value)
                continue
            values[name] = _coerce_values(name, value)

        return cls(**values)


def _coerce_values(name: str, value: Any) -> Optional[Tuple[Any, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable):
        raise InvalidCriteriaError(f"Criteria field '{name}' must be a list of values")

    coerced: list[Any] = []
    for item in value:
        if item is None:
            if name != "severities":
                raise InvalidCriteriaError(f"Criteria field '{name}' does not accept null")
            coerced.append(None)
        elif name == "severities":
            try:
                coerced.append(IssueSeverity(str(item).strip().lower()).value)
            except ValueError as exc:
                raise InvalidCriteriaError(f"Unknown severity: {item}") from exc
        else:
            coerced.append(str(item))
    return tuple(coerced)


__all__ = ["InvalidCriteriaError", "SearchCriteria"]
