"""Pydantic request models for the bakery API."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from bakery_ops.domain.recipes import Ingredient, Recipe, RecipeYield
from bakery_ops.domain.units import PackagedIngredient


class IngredientIn(BaseModel):
    """A weighed recipe ingredient."""

    name: str
    weight: float = Field(ge=0, allow_inf_nan=False)
    is_flour: bool = False
    is_liquid: bool = False

    @model_validator(mode="after")
    def _flour_or_liquid(self) -> "IngredientIn":
        if self.is_flour and self.is_liquid:
            raise ValueError("an ingredient cannot be both flour and liquid")
        return self

    def to_domain(self) -> Ingredient:
        return Ingredient(
            name=self.name,
            weight=self.weight,
            is_flour=self.is_flour,
            is_liquid=self.is_liquid,
        )


class HydrationRequest(BaseModel):
    ingredients: list[IngredientIn]


class RecipeIn(BaseModel):
    """Recipe payload used for scaling."""

    name: str
    category: str = ""
    description: str = ""
    ingredients: list[IngredientIn]
    yield_quantity: float = Field(ge=0, allow_inf_nan=False)
    yield_unit: str
    instructions: list[str] = Field(default_factory=list)

    def to_domain(self) -> Recipe:
        return Recipe(
            name=self.name,
            category=self.category,
            description=self.description,
            ingredients=[item.to_domain() for item in self.ingredients],
            recipe_yield=RecipeYield(
                quantity=self.yield_quantity, unit=self.yield_unit
            ),
            instructions=list(self.instructions),
        )


class ScaleRecipeRequest(BaseModel):
    recipe: RecipeIn
    factor: float = Field(gt=0, allow_inf_nan=False)


class ParseIngredientRequest(BaseModel):
    text: str


class FormatIngredientRequest(BaseModel):
    quantity: float | None = Field(default=None, allow_inf_nan=False)
    unit: str = ""
    ingredient: str


class ConvertIngredientRequest(BaseModel):
    text: str
    to_unit: str


class ScaleIngredientRequest(BaseModel):
    text: str
    factor: float = Field(allow_inf_nan=False)


class PackagedIngredientIn(BaseModel):
    """An ingredient as bought: package size and price."""

    name: str
    unit: str
    package_size: float = Field(allow_inf_nan=False)
    package_price: float = Field(ge=0, allow_inf_nan=False)

    def to_domain(self) -> PackagedIngredient:
        return PackagedIngredient(
            name=self.name,
            unit=self.unit.lower(),
            package_size=self.package_size,
            package_price=self.package_price,
        )


class RecipeCostRequest(BaseModel):
    lines: list[str]
    catalog: list[PackagedIngredientIn]


class FeedingIn(BaseModel):
    """A starter feeding."""

    date: datetime
    flour_type: str
    flour_amount: float = Field(ge=0, allow_inf_nan=False)
    water_amount: float = Field(ge=0, allow_inf_nan=False)
    starter_amount: float = Field(ge=0, allow_inf_nan=False)
    temperature: float | None = None
    notes: str | None = None
    activity_rating: int | None = Field(default=None, ge=1, le=5)
