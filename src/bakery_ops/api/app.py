"""FastAPI application factory."""

import logging
import math
from dataclasses import asdict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from bakery_ops.api.models import (
    ConvertIngredientRequest,
    FormatIngredientRequest,
    HydrationRequest,
    ParseIngredientRequest,
    RecipeCostRequest,
    ScaleIngredientRequest,
    ScaleRecipeRequest,
)
from bakery_ops.api.starters import router as starters_router
from bakery_ops.app_logging import configure_logging
from bakery_ops.containers import AppContainer
from bakery_ops.domain.recipes import Recipe
from bakery_ops.services.costing import recipe_cost
from bakery_ops.services.hydration import (
    bakers_percentages,
    calculate_hydration,
    scale_recipe,
)
from bakery_ops.services.starters import StarterNotFoundError
from bakery_ops.services.units import (
    convert_ingredient,
    format_ingredient,
    parse_ingredient,
    scale_ingredient,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(starters_router)

    @app.exception_handler(StarterNotFoundError)
    async def starter_not_found(
        request: Request, exc: StarterNotFoundError
    ) -> JSONResponse:
        logger.info("Starter lookup failed: %s", exc.starter_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Starter not found"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/recipes/hydration")
    async def hydration(payload: HydrationRequest) -> dict[str, object]:
        """Return flour and liquid totals and hydration for a formula."""
        result = calculate_hydration(item.to_domain() for item in payload.ingredients)
        _require_finite(
            result.total_flour_weight,
            result.total_liquid_weight,
            result.hydration_percentage,
        )
        return asdict(result)

    @app.post("/recipes/bakers-percentages")
    async def percentages(payload: HydrationRequest) -> dict[str, object]:
        """Return each ingredient as a percentage of total flour weight."""
        ingredients = [item.to_domain() for item in payload.ingredients]
        lines = bakers_percentages(ingredients)
        _require_finite(*(percentage for _, percentage in lines))
        return {
            "percentages": [
                {"name": item.name, "weight": item.weight, "percentage": percentage}
                for item, percentage in lines
            ]
        }

    @app.post("/recipes/scale")
    async def scale(payload: ScaleRecipeRequest) -> dict[str, object]:
        """Scale a recipe and report the hydration of the result."""
        scaled = scale_recipe(payload.recipe.to_domain(), payload.factor)
        hydration = calculate_hydration(scaled.ingredients)
        _require_finite(
            scaled.recipe_yield.quantity,
            hydration.total_flour_weight,
            hydration.total_liquid_weight,
            hydration.hydration_percentage,
            *(item.weight for item in scaled.ingredients),
        )
        return {"recipe": _recipe_payload(scaled), "hydration": asdict(hydration)}

    @app.post("/ingredients/parse")
    async def parse(payload: ParseIngredientRequest) -> dict[str, object]:
        """Parse a free-text ingredient line."""
        parsed = parse_ingredient(payload.text)
        _require_finite(parsed.quantity)
        return asdict(parsed)

    @app.post("/ingredients/format")
    async def format_line(payload: FormatIngredientRequest) -> dict[str, str]:
        """Format a quantity, unit and name into an ingredient line."""
        return {
            "text": format_ingredient(
                payload.quantity, payload.unit, payload.ingredient
            )
        }

    @app.post("/ingredients/convert")
    async def convert(payload: ConvertIngredientRequest) -> dict[str, object]:
        """Convert an ingredient line to another unit of the same family."""
        parsed = parse_ingredient(payload.text)
        converted = convert_ingredient(parsed, payload.to_unit)
        _require_finite(converted.quantity)
        return {
            "converted": converted is not parsed,
            "ingredient": asdict(converted),
            "text": format_ingredient(
                converted.quantity, converted.unit, converted.ingredient
            ),
        }

    @app.post("/ingredients/scale")
    async def scale_line(payload: ScaleIngredientRequest) -> dict[str, object]:
        """Scale the quantity of an ingredient line."""
        scaled = scale_ingredient(parse_ingredient(payload.text), payload.factor)
        _require_finite(scaled.quantity)
        return {
            "ingredient": asdict(scaled),
            "text": format_ingredient(scaled.quantity, scaled.unit, scaled.ingredient),
        }

    @app.post("/ingredients/cost")
    async def cost(payload: RecipeCostRequest) -> dict[str, object]:
        """Price a list of ingredient lines against a package catalog."""
        result = recipe_cost(
            (parse_ingredient(line) for line in payload.lines),
            [item.to_domain() for item in payload.catalog],
        )
        _require_finite(result.total)
        if result.unpriced:
            logger.info("Could not price ingredients: %s", result.unpriced)
        return asdict(result)

    return app


def _require_finite(*values: float | None) -> None:
    """Reject results JSON can't carry (overflowed or NaN numbers)."""
    if any(value is not None and not math.isfinite(value) for value in values):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Result is out of range",
        )


def _recipe_payload(recipe: Recipe) -> dict[str, object]:
    return {
        "name": recipe.name,
        "category": recipe.category,
        "description": recipe.description,
        "ingredients": [asdict(item) for item in recipe.ingredients],
        "yield_quantity": recipe.recipe_yield.quantity,
        "yield_unit": recipe.recipe_yield.unit,
        "instructions": recipe.instructions,
    }
