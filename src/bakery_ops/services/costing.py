"""Ingredient costing for recipes."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from bakery_ops.domain.units import Converted, PackagedIngredient, ParsedIngredient
from bakery_ops.services.units import convert_quantity


@dataclass(frozen=True)
class RecipeCost:
    """Total cost of the priced lines and the names that couldn't be priced."""

    total: float
    unpriced: list[str] = field(default_factory=list)


def price_per_unit(package_price: float, package_size: float) -> float:
    """Return the price of one unit of a package."""
    if package_size <= 0:
        return 0.0
    return package_price / package_size


def line_cost(
    line: ParsedIngredient, catalog: dict[str, PackagedIngredient]
) -> float | None:
    """Return the cost of one recipe line, or None if it can't be priced.

    ``catalog`` is keyed by lower-cased ingredient name.
    """
    packaged = catalog.get(line.ingredient.lower())
    if packaged is None or line.quantity is None:
        return None

    quantity = line.quantity
    if line.unit != packaged.unit:
        result = convert_quantity(quantity, line.unit, packaged.unit)
        if not isinstance(result, Converted):
            return None
        quantity = result.value
    return quantity * price_per_unit(packaged.package_price, packaged.package_size)


def recipe_cost(
    lines: Iterable[ParsedIngredient], catalog: Iterable[PackagedIngredient]
) -> RecipeCost:
    """Sum the cost of all recipe lines that can be priced."""
    by_name = {item.name.lower(): item for item in catalog}
    total = 0.0
    unpriced: list[str] = []
    for line in lines:
        cost = line_cost(line, by_name)
        if cost is None:
            unpriced.append(line.ingredient)
            continue
        total += cost
    return RecipeCost(total=round(total, 2), unpriced=unpriced)
