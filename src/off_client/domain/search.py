"""Search filter models."""

from dataclasses import dataclass
from enum import StrEnum


class CriterionMode(StrEnum):
    """How a tag criterion compares against its value."""

    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "does_not_contain"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"


NEGATED_MODES = frozenset({CriterionMode.DOES_NOT_CONTAIN, CriterionMode.NOT_EQUALS})


class Disposition(StrEnum):
    """Presence filter for ingredient-derived tags."""

    WITH = "with"
    WITHOUT = "without"
    INDIFFERENT = "indifferent"


class NutrientOperator(StrEnum):
    """Numeric comparison for nutrient filters."""

    LESS_THAN = "lt"
    LESS_THAN_OR_EQUAL = "lte"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUAL = "gte"
    EQUALS = "eq"


class NutrientQualifier(StrEnum):
    """Basis a nutrient quantity is expressed in."""

    PER_100G = "100g"
    PER_SERVING = "serving"
    UNSPECIFIED = ""


@dataclass(frozen=True)
class Criterion:
    """Tag-based filter on a product attribute.

    ``mode`` and the other enum-typed fields also accept raw strings, which
    are sent as given.
    """

    field: str
    mode: CriterionMode | str
    value: str
    locale: str | None = None

    @property
    def negated(self) -> bool:
        return self.mode in NEGATED_MODES


@dataclass(frozen=True)
class IngredientFilter:
    """Ingredient presence filter, e.g. ``additives=without``."""

    field: str
    disposition: Disposition | str


@dataclass(frozen=True)
class NutrientFilter:
    """Numeric comparison on a nutrient quantity."""

    field: str
    operator: NutrientOperator | str
    quantity: int | float
    qualifier: NutrientQualifier | str = NutrientQualifier.UNSPECIFIED


@dataclass(frozen=True)
class SortSpec:
    """Sort order. ``field=None`` means no explicit sort."""

    field: str | None = None


def format_quantity(quantity: int | float) -> str:
    """Render a quantity without a trailing ``.0`` for whole numbers."""
    if isinstance(quantity, float) and quantity.is_integer():
        return str(int(quantity))
    return str(quantity)
