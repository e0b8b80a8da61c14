import pytest

from config_analysis.models import InvalidCriteriaError, SearchCriteria


def test_default_criteria_is_empty() -> None:
    assert SearchCriteria().is_empty
    assert SearchCriteria.from_mapping({}).is_empty
    assert SearchCriteria.from_mapping(None).is_empty


def test_prune_flag_alone_is_not_empty() -> None:
    assert not SearchCriteria(prune_on_parent_mismatch=True).is_empty
    assert not SearchCriteria(features=()).is_empty


def test_strings_and_lists_become_tuples() -> None:
    criteria = SearchCriteria(features="ValueHost", lookup_keys=["Date", "Integer"])

    assert criteria.features == ("ValueHost",)
    assert criteria.lookup_keys == ("Date", "Integer")


def test_from_mapping_accepts_camel_case_keys() -> None:
    criteria = SearchCriteria.from_mapping(
        {
            "features": ["Condition"],
            "valueHostNames": ["startDate"],
            "conditionTypes": "RequireText",
            "skipChildrenIfParentMismatch": True,
        }
    )

    assert criteria == SearchCriteria(
        features=("Condition",),
        value_host_names=("startDate",),
        condition_types=("RequireText",),
        prune_on_parent_mismatch=True,
    )


def test_from_mapping_normalizes_severities_and_keeps_null() -> None:
    criteria = SearchCriteria.from_mapping({"severities": ["Error", None, " warning "]})

    assert criteria.severities == ("error", None, "warning")


def test_from_mapping_rejects_unknown_severity() -> None:
    with pytest.raises(InvalidCriteriaError, match="Unknown severity: fatal"):
        SearchCriteria.from_mapping({"severities": ["fatal"]})


def test_from_mapping_rejects_unknown_fields() -> None:
    with pytest.raises(InvalidCriteriaError, match="Unknown criteria field: colour"):
        SearchCriteria.from_mapping({"colour": ["red"]})


def test_from_mapping_rejects_null_outside_severities() -> None:
    with pytest.raises(InvalidCriteriaError):
        SearchCriteria.from_mapping({"lookupKeys": [None]})


def test_invalid_criteria_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        SearchCriteria.from_mapping(["features"])  # type: ignore[arg-type]
