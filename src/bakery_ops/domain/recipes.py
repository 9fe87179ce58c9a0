"""Recipe domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ingredient:
    """A weighed recipe line used for baker's math."""

    name: str
    weight: float
    is_flour: bool = False
    is_liquid: bool = False

    def __post_init__(self) -> None:
        if self.is_flour and self.is_liquid:
            raise ValueError(f"Ingredient {self.name!r} cannot be flour and liquid")


@dataclass(frozen=True)
class HydrationCalculation:
    """Flour and liquid totals for a dough formula."""

    total_flour_weight: float
    total_liquid_weight: float
    hydration_percentage: float


@dataclass(frozen=True)
class RecipeYield:
    quantity: float
    unit: str


@dataclass(frozen=True)
class Recipe:
    """A recipe with weighed ingredients and a yield."""

    name: str
    ingredients: list[Ingredient]
    recipe_yield: RecipeYield
    category: str = ""
    description: str = ""
    id: str | None = None
    instructions: list[str] = field(default_factory=list)
