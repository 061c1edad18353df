"""
Data models for the meal planner.

These models define the core entities used throughout the system:
- ParsedIngredient: One free-text ingredient line split into quantity/unit/item
- ImportedRecipe: A validated recipe from an import file (no id yet)
- Recipe: A stored recipe with its generated id
- ShoppingListItem: One merged row of the shopping list
- PlannedMeal / DayItinerary / PlanOutputs: Results for a date range
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..units import format_number

# Meal plan snapshot: {"2025-10-20": {"breakfast": "recipe-abc", "lunch": None, ...}}
DayPlan = Dict[str, Optional[str]]
MealPlan = Dict[str, DayPlan]


@dataclass(frozen=True)
class ParsedIngredient:
    """Structured view of one ingredient line.

    Built on demand by the ingredient parser and never persisted.
    """
    raw: str  # Trimmed original line
    quantity: Optional[float]  # None when no leading number was recognised
    unit: Optional[str]  # Lower-cased unit token (e.g., "cup", "cloves")
    item: str  # Lower-cased remaining text (e.g., "basmati rice")

    def __str__(self) -> str:
        """Human-readable ingredient string."""
        parts = []
        if self.quantity is not None:
            parts.append(format_number(self.quantity))
        if self.unit:
            parts.append(self.unit)
        parts.append(self.item)
        return " ".join(parts)


@dataclass
class ImportedRecipe:
    """Recipe that passed import validation.

    Every string field is non-empty and trimmed, ingredients is non-empty
    and servings is positive.
    """

    name: str
    prep_time: str
    instructions: str
    meal: str  # "breakfast", "lunch", "dinner", "snack"
    ingredients: List[str]
    servings: float

    def to_recipe(self, recipe_id: str) -> "Recipe":
        """Attach a generated id to produce a storable Recipe."""
        return Recipe(
            id=recipe_id,
            name=self.name.strip(),
            prep_time=self.prep_time.strip(),
            ingredients=[ingredient.strip() for ingredient in self.ingredients],
            meal=self.meal,
            servings=self.servings,
            instructions=self.instructions.strip(),
        )


@dataclass
class Recipe:
    """Recipe in the user's collection."""

    id: str
    name: str
    prep_time: str
    ingredients: List[str]  # Free-text lines, quantity first (e.g., "2 cups rice")
    meal: str
    servings: float
    instructions: str

    def to_export_dict(self) -> Dict:
        """Convert to the export file shape (no id, same keys as import)."""
        return {
            "name": self.name,
            "prep_time": self.prep_time,
            "meal": self.meal,
            "servings": self.servings,
            "ingredients": list(self.ingredients),
            "instructions": self.instructions,
        }

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        data = self.to_export_dict()
        data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Recipe":
        """Create Recipe from dictionary.

        Accepts the older camelCase "prepTime" key written by earlier versions.
        """
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            prep_time=data.get("prep_time", data.get("prepTime", "")),
            ingredients=list(data.get("ingredients", [])),
            meal=data.get("meal", "dinner"),
            servings=data.get("servings"),
            instructions=data.get("instructions", ""),
        )


@dataclass(frozen=True)
class ShoppingListItem:
    """Single merged row on the shopping list."""

    ingredient: str  # Title-cased item text ("Basmati Rice")
    quantity: float  # Rounded to 2 decimals
    unit: Optional[str] = None

    def display_quantity(self) -> str:
        """Quantity with unit for display ("3 cup", "0.5")."""
        text = format_number(self.quantity)
        if self.unit:
            text = f"{text} {self.unit}"
        return text.strip()

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization (overflowed totals become null)."""
        return {
            "ingredient": self.ingredient,
            "quantity": self.quantity if math.isfinite(self.quantity) else None,
            "unit": self.unit,
        }


@dataclass
class PlannedMeal:
    """A recipe assigned to one meal slot of a day."""

    meal: str
    recipe: Recipe

    def to_dict(self) -> Dict:
        return {"meal": self.meal, "recipe": self.recipe.to_dict()}


@dataclass
class DayItinerary:
    """All resolvable meals of one date, in meal-type order."""

    date: str  # ISO format: "2025-10-20"
    meals: List[PlannedMeal] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {"date": self.date, "meals": [meal.to_dict() for meal in self.meals]}


@dataclass
class PlanOutputs:
    """Shopping list, itinerary and recipe anthology for a date range."""

    shopping_list: List[ShoppingListItem]
    itinerary: List[DayItinerary]
    recipes: List[Recipe]  # Distinct recipes used, sorted by name
    planned_meals: int

    def get_summary(self) -> str:
        """
        Get a concise summary of the outputs.

        Returns:
            Summary string with key counts
        """
        return (
            f"{self.planned_meals} meals over {len(self.itinerary)} days, "
            f"{len(self.shopping_list)} shopping items"
        )

    def __str__(self) -> str:
        """Human-readable string."""
        return self.get_summary()

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "shopping_list": [item.to_dict() for item in self.shopping_list],
            "itinerary": [day.to_dict() for day in self.itinerary],
            "recipes": [recipe.to_dict() for recipe in self.recipes],
            "planned_meals": self.planned_meals,
        }
