"""Baker's math for dough formulas."""

import math
from collections.abc import Iterable
from dataclasses import replace

from bakery_ops.domain.recipes import (
    HydrationCalculation,
    Ingredient,
    Recipe,
    RecipeYield,
)


def calculate_hydration(ingredients: Iterable[Ingredient]) -> HydrationCalculation:
    """Return flour and liquid totals and the hydration percentage.

    Hydration is 0 when the formula has no flour.
    """
    total_flour = 0.0
    total_liquid = 0.0
    for ingredient in ingredients:
        if ingredient.is_flour:
            total_flour += ingredient.weight
        if ingredient.is_liquid:
            total_liquid += ingredient.weight

    hydration = total_liquid / total_flour * 100 if total_flour > 0 else 0.0
    return HydrationCalculation(
        total_flour_weight=total_flour,
        total_liquid_weight=total_liquid,
        hydration_percentage=round_one_decimal(hydration),
    )


def bakers_percentages(
    ingredients: list[Ingredient],
) -> list[tuple[Ingredient, float]]:
    """Pair each ingredient line with its weight as a percentage of total flour.

    Lines are kept in order, so repeated names (two water additions) each get
    their own entry.
    """
    total_flour = sum(item.weight for item in ingredients if item.is_flour)
    if total_flour <= 0:
        return [(item, 0.0) for item in ingredients]
    return [
        (item, round_one_decimal(item.weight / total_flour * 100))
        for item in ingredients
    ]


def scale_recipe(recipe: Recipe, factor: float) -> Recipe:
    """Scale ingredient weights and yield, rounding to one decimal place."""
    scaled_ingredients = [
        replace(item, weight=round_one_decimal(item.weight * factor))
        for item in recipe.ingredients
    ]
    scaled_yield = RecipeYield(
        quantity=round_one_decimal(recipe.recipe_yield.quantity * factor),
        unit=recipe.recipe_yield.unit,
    )
    return replace(recipe, ingredients=scaled_ingredients, recipe_yield=scaled_yield)


def round_one_decimal(value: float) -> float:
    """Round half up to one decimal place (75.25 -> 75.3).

    Infinities, NaN and values too large to shift are returned unchanged.
    """
    shifted = value * 10 + 0.5
    if not math.isfinite(shifted):
        return value
    return math.floor(shifted) / 10
