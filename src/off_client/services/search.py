"""Search parameter builders for the V0 and V2 search APIs.

Both builders share one interface but render independently: V0 uses
indexed parameter groups, V2 uses flat ``criteria_tags`` style keys.
Builders are immutable; every mutator returns a new builder.
"""

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from off_client.domain.params import ApiVersion, Params
from off_client.domain.search import (
    Criterion,
    CriterionMode,
    Disposition,
    IngredientFilter,
    NutrientFilter,
    NutrientOperator,
    NutrientQualifier,
    SortSpec,
    format_quantity,
)
from off_client.errors import UnsupportedOperationError

_logger = logging.getLogger(__name__)

_V2_OPERATOR_PREFIXES = {
    NutrientOperator.LESS_THAN: "<",
    NutrientOperator.LESS_THAN_OR_EQUAL: "<=",
    NutrientOperator.GREATER_THAN: ">",
    NutrientOperator.GREATER_THAN_OR_EQUAL: ">=",
    NutrientOperator.EQUALS: "",
}

SearchEntry = Criterion | IngredientFilter | NutrientFilter


class SearchParams(Protocol):
    """Interface shared by the version-specific search builders."""

    @property
    def version(self) -> ApiVersion:
        """API version this builder renders for."""

    def criterion(
        self,
        field: str,
        mode: CriterionMode | str,
        value: str,
        locale: str | None = None,
    ) -> "SearchParams":
        """Return a builder with one more tag criterion."""

    def ingredient(self, field: str, disposition: Disposition | str) -> "SearchParams":
        """Return a builder with one more ingredient filter."""

    def nutrient(
        self,
        field: str,
        operator: NutrientOperator | str,
        quantity: int | float,
        qualifier: NutrientQualifier | str = NutrientQualifier.UNSPECIFIED,
    ) -> "SearchParams":
        """Return a builder with one more nutrient filter."""

    def sort_by(self, field: str | None) -> "SearchParams":
        """Return a builder sorted by ``field``; ``None`` or ``""`` clears it."""

    def params(self) -> Params:
        """Render the accumulated filters as ordered query parameters."""


def _compact_criterion(criterion: Criterion) -> tuple[str, str]:
    key = "criteria_tags"
    if criterion.locale:
        key = f"{key}_{criterion.locale}"
    value = f"-{criterion.value}" if criterion.negated else criterion.value
    return key, value


def _sort_params(sort: SortSpec) -> Params:
    if sort.field:
        return [("sort_by", sort.field)]
    return []


@dataclass(frozen=True)
class SearchBuilderV0:
    """Builds parameters for ``/cgi/search.pl``.

    Criteria without a locale serialize to an indexed triplet::

        tagtype_N=<field>
        tag_contains_N=<mode>
        tag_N=<value>

    Criteria with a locale use the compact ``criteria_tags_<locale>`` form.
    Nutrients serialize to ``nutriment_N``, ``nutriment_compare_N`` and
    ``nutriment_value_N``. Criteria and nutrients are numbered separately,
    starting at 1, in the order they were added.
    """

    entries: tuple[SearchEntry, ...] = ()
    sort: SortSpec = SortSpec()

    @property
    def version(self) -> ApiVersion:
        return ApiVersion.V0

    def criterion(
        self,
        field: str,
        mode: CriterionMode | str,
        value: str,
        locale: str | None = None,
    ) -> "SearchBuilderV0":
        return self._append(Criterion(field, mode, value, locale))

    def ingredient(
        self, field: str, disposition: Disposition | str
    ) -> "SearchBuilderV0":
        return self._append(IngredientFilter(field, disposition))

    def nutrient(
        self,
        field: str,
        operator: NutrientOperator | str,
        quantity: int | float,
        qualifier: NutrientQualifier | str = NutrientQualifier.UNSPECIFIED,
    ) -> "SearchBuilderV0":
        return self._append(NutrientFilter(field, operator, quantity, qualifier))

    def sort_by(self, field: str | None) -> "SearchBuilderV0":
        return replace(self, sort=SortSpec(field or None))

    def params(self) -> Params:
        pairs: Params = []
        criteria_index = 0
        nutrient_index = 0
        for entry in self.entries:
            if isinstance(entry, Criterion):
                if entry.locale:
                    pairs.append(_compact_criterion(entry))
                    continue
                criteria_index += 1
                pairs.extend(
                    [
                        (f"tagtype_{criteria_index}", entry.field),
                        (f"tag_contains_{criteria_index}", str(entry.mode)),
                        (f"tag_{criteria_index}", entry.value),
                    ]
                )
            elif isinstance(entry, IngredientFilter):
                pairs.append((entry.field, _ingredient_value(entry)))
            else:
                nutrient_index += 1
                pairs.extend(
                    [
                        (f"nutriment_{nutrient_index}", entry.field),
                        (f"nutriment_compare_{nutrient_index}", str(entry.operator)),
                        (
                            f"nutriment_value_{nutrient_index}",
                            format_quantity(entry.quantity),
                        ),
                    ]
                )
        pairs.extend(_sort_params(self.sort))
        return pairs

    def _append(self, entry: SearchEntry) -> "SearchBuilderV0":
        return replace(self, entries=(*self.entries, entry))


def _ingredient_value(entry: IngredientFilter) -> str:
    """``additives`` takes suffixed values such as ``without_additives``."""
    if entry.field == "additives":
        return f"{entry.disposition}_additives"
    return str(entry.disposition)


@dataclass(frozen=True)
class SearchBuilderV2:
    """Builds parameters for ``/api/v2/search``.

    Criteria render as ``criteria_tags[_<locale>]=<value>``, with negated
    modes prefixing the value with ``-``. Nutrients render as
    ``<field>_<unit>=<value>``; non-equality operators prefix the value
    with their symbol (``<``, ``<=``, ``>``, ``>=``). Ingredient filters
    have no V2 form and raise ``UnsupportedOperationError``.
    """

    entries: tuple[Criterion | NutrientFilter, ...] = ()
    sort: SortSpec = SortSpec()

    @property
    def version(self) -> ApiVersion:
        return ApiVersion.V2

    def criterion(
        self,
        field: str,
        mode: CriterionMode | str,
        value: str,
        locale: str | None = None,
    ) -> "SearchBuilderV2":
        return replace(
            self, entries=(*self.entries, Criterion(field, mode, value, locale))
        )

    def ingredient(
        self, field: str, disposition: Disposition | str
    ) -> "SearchBuilderV2":
        _logger.debug("Rejected ingredient filter on v2: field=%s", field)
        raise UnsupportedOperationError("ingredient", ApiVersion.V2)

    def nutrient(
        self,
        field: str,
        operator: NutrientOperator | str,
        quantity: int | float,
        qualifier: NutrientQualifier | str = NutrientQualifier.UNSPECIFIED,
    ) -> "SearchBuilderV2":
        entry = NutrientFilter(field, operator, quantity, qualifier)
        return replace(self, entries=(*self.entries, entry))

    def sort_by(self, field: str | None) -> "SearchBuilderV2":
        return replace(self, sort=SortSpec(field or None))

    def params(self) -> Params:
        pairs: Params = [
            _compact_criterion(entry)
            if isinstance(entry, Criterion)
            else _v2_nutrient(entry)
            for entry in self.entries
        ]
        pairs.extend(_sort_params(self.sort))
        return pairs


def _v2_nutrient(entry: NutrientFilter) -> tuple[str, str]:
    unit = entry.qualifier or NutrientQualifier.PER_100G
    prefix = _V2_OPERATOR_PREFIXES.get(entry.operator, str(entry.operator))
    return f"{entry.field}_{unit}", f"{prefix}{format_quantity(entry.quantity)}"


def search_builder(version: ApiVersion | str) -> SearchParams:
    """Return an empty builder for ``version``."""
    if ApiVersion(version) is ApiVersion.V0:
        return SearchBuilderV0()
    return SearchBuilderV2()
