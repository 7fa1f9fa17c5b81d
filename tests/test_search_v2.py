"""Tests for the V2 search parameter builder."""

import pytest

from off_client.domain.params import ApiVersion
from off_client.domain.search import CriterionMode, NutrientQualifier
from off_client.errors import OffClientError, UnsupportedOperationError
from off_client.services.search import (
    SearchBuilderV0,
    SearchBuilderV2,
    search_builder,
)


def test_locale_criterion(v2_builder: SearchBuilderV2) -> None:
    builder = v2_builder.criterion("brands", "contains", "Vindija", locale="hr")

    assert builder.params() == [("criteria_tags_hr", "Vindija")]


def test_same_locale_criterion_matches_v0_compact_form(
    v2_builder: SearchBuilderV2,
) -> None:
    v0 = SearchBuilderV0().criterion("brands", "contains", "Vindija", locale="hr")
    v2 = v2_builder.criterion("brands", "contains", "Vindija", locale="hr")

    assert v0.params() == v2.params()


def test_criteria_fold_negation_into_value(v2_builder: SearchBuilderV2) -> None:
    builder = (
        v2_builder.criterion("categories", CriterionMode.CONTAINS, "cereals")
        .criterion("labels", CriterionMode.DOES_NOT_CONTAIN, "kosher")
        .criterion("countries", "not_equals", "france")
    )

    assert builder.params() == [
        ("criteria_tags", "cereals"),
        ("criteria_tags", "-kosher"),
        ("criteria_tags", "-france"),
    ]


def test_nutrients_render_with_unit_suffix(v2_builder: SearchBuilderV2) -> None:
    builder = (
        v2_builder.nutrient("sugars", "eq", 5)
        .nutrient("salt", "lt", 1.5, NutrientQualifier.PER_SERVING)
        .nutrient("fat", "gte", 10.0, "100g")
        .nutrient("energy-kcal", "lte", 200)
        .nutrient("fiber", "gt", 3)
    )

    assert builder.params() == [
        ("sugars_100g", "5"),
        ("salt_serving", "<1.5"),
        ("fat_100g", ">=10"),
        ("energy-kcal_100g", "<=200"),
        ("fiber_100g", ">3"),
    ]


def test_ingredient_is_rejected(v2_builder: SearchBuilderV2) -> None:
    with pytest.raises(UnsupportedOperationError) as exc_info:
        v2_builder.ingredient("additives", "without")

    assert exc_info.value.operation == "ingredient"
    assert exc_info.value.version == ApiVersion.V2
    assert exc_info.value.code == "unsupported_operation"
    assert isinstance(exc_info.value, OffClientError)


def test_rejected_ingredient_leaves_builder_usable(v2_builder: SearchBuilderV2) -> None:
    builder = v2_builder.criterion("brands", "contains", "a")
    with pytest.raises(UnsupportedOperationError):
        builder.ingredient("additives", "with")

    assert builder.params() == [("criteria_tags", "a")]


def test_sort_and_idempotence(v2_builder: SearchBuilderV2) -> None:
    builder = v2_builder.criterion("brands", "contains", "a").sort_by("popularity")

    assert builder.params() == [
        ("criteria_tags", "a"),
        ("sort_by", "popularity"),
    ]
    assert builder.params() == builder.params()
    assert builder.sort_by(None).params() == [("criteria_tags", "a")]


def test_search_builder_factory() -> None:
    assert isinstance(search_builder("v0"), SearchBuilderV0)
    assert isinstance(search_builder(ApiVersion.V2), SearchBuilderV2)
    with pytest.raises(ValueError):
        search_builder("v666")
