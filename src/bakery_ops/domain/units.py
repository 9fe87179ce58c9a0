"""Domain models for ingredient quantities and unit conversion."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedIngredient:
    """Quantity, unit and name parsed from a free-text ingredient line."""

    quantity: float | None
    unit: str
    ingredient: str


@dataclass(frozen=True)
class Converted:
    """A quantity that was converted into the requested unit."""

    value: float
    unit: str


@dataclass(frozen=True)
class Unchanged:
    """A quantity left as-is because no conversion applied."""

    value: float
    unit: str


ConversionResult = Converted | Unchanged


@dataclass(frozen=True)
class PackagedIngredient:
    """An ingredient as bought, used for costing."""

    name: str
    unit: str
    package_size: float
    package_price: float
