"""Free-text ingredient parsing and kitchen unit conversion.

Everything here is best-effort: ingredient lines are typed by hand or pulled
from imports, so malformed text and unknown units come back unchanged
instead of raising.
"""

import math
import re
from dataclasses import replace

from bakery_ops.domain.units import (
    ConversionResult,
    Converted,
    ParsedIngredient,
    Unchanged,
)
from bakery_ops.services.hydration import round_one_decimal

# Multipliers to the base unit of each family: grams and milliliters.
WEIGHT_UNITS: dict[str, float] = {
    "g": 1.0,
    "kg": 1000.0,
    "oz": 28.35,
    "lb": 453.59,
}

VOLUME_UNITS: dict[str, float] = {
    "ml": 1.0,
    "l": 1000.0,
    "tsp": 4.93,
    "tbsp": 14.79,
    "cup": 236.59,
    "floz": 29.57,
    "pint": 473.18,
    "quart": 946.35,
    "gallon": 3785.41,
}

# "500g flour", "2 cups water", "1.5 tbsp salt"
_INGREDIENT_PATTERN = re.compile(r"([0-9.]+)\s*([a-zA-Z%]+)?\s+(.+)")
_NUMBER_PREFIX = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
# Quantities at or above this print in exponent form ("1e+21").
_MAX_PLAIN_INTEGER = 1e21


def parse_ingredient(text: str) -> ParsedIngredient:
    """Split an ingredient line into quantity, unit and name.

    Lines that don't start with a number come back as a bare ingredient name
    with no quantity.
    """
    match = _INGREDIENT_PATTERN.fullmatch(text)
    quantity = _parse_number(match.group(1)) if match else None
    if match is None or quantity is None:
        return ParsedIngredient(quantity=None, unit="", ingredient=text.strip())

    unit = match.group(2) or ""
    return ParsedIngredient(
        quantity=quantity,
        unit=unit.lower(),
        ingredient=match.group(3).strip(),
    )


def format_ingredient(quantity: float | None, unit: str, ingredient: str) -> str:
    """Render a quantity, unit and name back into an ingredient line."""
    if _is_missing(quantity):
        return ingredient

    if abs(quantity) >= _MAX_PLAIN_INTEGER:
        formatted = str(float(quantity))
    elif quantity % 1 == 0:
        formatted = str(int(quantity))
    else:
        formatted = f"{round_one_decimal(quantity):.1f}"
    unit_part = f" {unit}" if unit else ""
    return f"{formatted}{unit_part} {ingredient}"


def convert_weight(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between weight units, returning value unchanged if unknown."""
    return _convert(value, from_unit, to_unit, WEIGHT_UNITS).value


def convert_volume(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between volume units, returning value unchanged if unknown."""
    return _convert(value, from_unit, to_unit, VOLUME_UNITS).value


def is_weight_unit(unit: str) -> bool:
    return unit in WEIGHT_UNITS


def is_volume_unit(unit: str) -> bool:
    return unit in VOLUME_UNITS


def convert_quantity(value: float, from_unit: str, to_unit: str) -> ConversionResult:
    """Convert within the weight or volume family.

    Returns ``Unchanged`` when the units are unknown or belong to different
    families, so callers can tell a real conversion from a no-op.
    """
    if is_weight_unit(from_unit) and is_weight_unit(to_unit):
        return _convert(value, from_unit, to_unit, WEIGHT_UNITS)
    if is_volume_unit(from_unit) and is_volume_unit(to_unit):
        return _convert(value, from_unit, to_unit, VOLUME_UNITS)
    return Unchanged(value=value, unit=from_unit)


def convert_ingredient(parsed: ParsedIngredient, to_unit: str) -> ParsedIngredient:
    """Convert a parsed ingredient to another unit of the same family.

    The same instance is returned when nothing was converted.
    """
    if _is_missing(parsed.quantity) or not parsed.quantity or not parsed.unit:
        return parsed

    result = convert_quantity(parsed.quantity, parsed.unit, to_unit)
    if isinstance(result, Unchanged):
        return parsed
    return replace(parsed, quantity=result.value, unit=result.unit)


def scale_quantity(quantity: float | None, factor: float) -> float | None:
    """Multiply a quantity by factor; missing quantities pass through."""
    if _is_missing(quantity):
        return quantity
    return quantity * factor


def scale_ingredient(parsed: ParsedIngredient, factor: float) -> ParsedIngredient:
    """Scale the quantity of a parsed ingredient, keeping unit and name."""
    if _is_missing(parsed.quantity) or not parsed.quantity:
        return parsed
    return replace(parsed, quantity=scale_quantity(parsed.quantity, factor))


def _convert(
    value: float, from_unit: str, to_unit: str, table: dict[str, float]
) -> ConversionResult:
    from_factor = table.get(from_unit)
    to_factor = table.get(to_unit)
    if not from_factor or not to_factor:
        return Unchanged(value=value, unit=from_unit)
    return Converted(value=value * from_factor / to_factor, unit=to_unit)


def _parse_number(raw: str) -> float | None:
    """Read the leading decimal number of a digit/dot run ("1.5.2" -> 1.5)."""
    match = _NUMBER_PREFIX.match(raw)
    if match is None:
        return None
    return float(match.group(0))


def _is_missing(quantity: float | None) -> bool:
    return quantity is None or math.isnan(quantity)
