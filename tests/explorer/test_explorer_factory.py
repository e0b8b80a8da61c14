from __future__ import annotations

from typing import List, Optional

import pytest

from config_analysis.explorer import (
    ConditionResultExplorer,
    CriteriaSearcher,
    ExplorerError,
    ExplorerFactory,
    MatchResult,
    ResultNodeExplorer,
    UnregisteredFeatureError,
    base_feature,
)
from config_analysis.models import ConditionResult, ResultFeature, ResultNode


class TagResultExplorer(ResultNodeExplorer[ResultNode]):
    """Explorer for a custom node kind keeping its tag in ``details``."""

    def feature(self) -> str:
        return "Tag"

    def identifier(self) -> Optional[str]:
        return self.result.details.get("tag")

    def _match_own_criteria(self, searcher: CriteriaSearcher) -> MatchResult:
        return MatchResult.NOT_APPLICABLE

    def children(self) -> List[ResultNode]:
        return []


def test_every_built_in_feature_is_registered() -> None:
    factory = ExplorerFactory()

    for feature in ResultFeature:
        assert factory.is_registered(feature.value)
    assert len(factory.registered_features()) == len(ResultFeature)


def test_create_strips_collision_suffix() -> None:
    node = ConditionResult(feature="Condition#2", condition_type="Range")

    explorer = ExplorerFactory().create(node)

    assert isinstance(explorer, ConditionResultExplorer)
    assert explorer.feature() == "Condition"


def test_base_feature() -> None:
    assert base_feature("Condition#3") == "Condition"
    assert base_feature("ValueHost") == "ValueHost"
    assert base_feature(ResultFeature.L10N_PROPERTY) == "l10nProperty"


def test_unregistered_feature_raises() -> None:
    with pytest.raises(UnregisteredFeatureError, match="Explorer not registered for feature: Tag") as excinfo:
        ExplorerFactory().create(ResultNode(feature="Tag"))

    assert excinfo.value.feature == "Tag"
    assert isinstance(excinfo.value, ExplorerError)


def test_register_custom_feature() -> None:
    factory = ExplorerFactory()
    factory.register("Tag", TagResultExplorer)

    explorer = factory.create(ResultNode(feature="Tag#2", details={"tag": "beta"}))

    assert isinstance(explorer, TagResultExplorer)
    assert explorer.identifier() == "beta"


def test_registrations_are_per_factory() -> None:
    ExplorerFactory().register("Tag", TagResultExplorer)

    assert not ExplorerFactory().is_registered("Tag")
