"""
Shopping list and itinerary generation for a date range.

Walks every assigned meal slot in the range, parses each ingredient line of
the referenced recipe and merges lines with the same item and unit into one
shopping list row. The itinerary and the list are built in the same pass and
share one emptiness check: a range with no resolvable meals has no outputs.

Quantities are rounded to 2 decimals after every addition, not once at the
end, so long chains can drift from a single final rounding (three
"1/3 cup" lines give 0.99, not 1.0).
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from .data.models import (
    DayItinerary,
    MealPlan,
    ParsedIngredient,
    PlannedMeal,
    PlanOutputs,
    Recipe,
    ShoppingListItem,
)
from .ingredient_parser import parse_ingredient
from .meal_plan import date_range_inclusive, format_date_label
from .units import MEAL_TYPES, UNITLESS_KEY, format_number, round_quantity

logger = logging.getLogger(__name__)

WORD_START_PATTERN = re.compile(r'\b\w', re.ASCII)


def to_title_case(value: str) -> str:
    """Upper-case the first character of every word, leaving the rest alone."""
    return WORD_START_PATTERN.sub(lambda match: match.group(0).upper(), value)


def shopping_key(parsed: ParsedIngredient) -> str:
    """Identity key for merging: item plus unit ("rice__cup", "eggs__each")."""
    return f"{parsed.item}__{parsed.unit or UNITLESS_KEY}"


class ShoppingListBuilder:
    """Accumulates parsed ingredients into merged shopping list rows."""

    def __init__(self):
        self._rows: Dict[str, Dict] = {}

    def add_line(self, line: str):
        """Parse one ingredient line and merge it in."""
        self.add(parse_ingredient(line))

    def add(self, parsed: ParsedIngredient):
        """
        Merge a parsed ingredient.

        A missing quantity counts as 1. The running total is rounded after
        each addition.
        """
        quantity = parsed.quantity if parsed.quantity is not None else 1.0
        key = shopping_key(parsed)

        row = self._rows.get(key)
        if row:
            row["quantity"] = round_quantity(row["quantity"] + quantity)
        else:
            self._rows[key] = {
                "ingredient": to_title_case(parsed.item),
                "quantity": round_quantity(quantity),
                "unit": parsed.unit,
            }

    def keys(self) -> List[str]:
        return list(self._rows)

    def build(self) -> List[ShoppingListItem]:
        """Rows sorted by ingredient name (case-sensitive)."""
        items = [ShoppingListItem(**row) for row in self._rows.values()]
        return sorted(items, key=lambda item: item.ingredient)


def build_plan_outputs(
    meal_plan: MealPlan,
    recipes: Iterable[Recipe],
    start: Optional[str],
    end: Optional[str],
) -> Optional[PlanOutputs]:
    """
    Build the shopping list, itinerary and recipe anthology for a range.

    Args:
        meal_plan: Plan snapshot (date -> meal type -> recipe id)
        recipes: Recipe collection snapshot
        start: Start date YYYY-MM-DD (inclusive)
        end: End date YYYY-MM-DD (inclusive)

    Returns:
        PlanOutputs, or None when the range is empty/invalid or holds no
        meal whose recipe still exists
    """
    dates = date_range_inclusive(start, end)
    if not dates:
        return None

    recipe_map = {recipe.id: recipe for recipe in recipes}
    builder = ShoppingListBuilder()
    itinerary: List[DayItinerary] = []
    used_recipes: Dict[str, Recipe] = {}
    planned_meals = 0

    for date_str in dates:
        day = meal_plan.get(date_str)
        if not day:
            continue

        meals_for_day = []
        for meal in MEAL_TYPES:
            recipe_id = day.get(meal)
            if not recipe_id:
                continue
            recipe = recipe_map.get(recipe_id)
            if recipe is None:
                logger.debug(f"Skipping {date_str} {meal}: recipe {recipe_id} no longer exists")
                continue

            meals_for_day.append(PlannedMeal(meal=meal, recipe=recipe))
            planned_meals += 1
            used_recipes[recipe.id] = recipe

            for ingredient in recipe.ingredients:
                builder.add_line(ingredient)

        if meals_for_day:
            itinerary.append(DayItinerary(date=date_str, meals=meals_for_day))

    if not itinerary:
        return None

    return PlanOutputs(
        shopping_list=builder.build(),
        itinerary=itinerary,
        recipes=sorted(used_recipes.values(), key=lambda recipe: recipe.name),
        planned_meals=planned_meals,
    )


def build_shopping_list(
    meal_plan: MealPlan,
    recipes: Iterable[Recipe],
    start: Optional[str],
    end: Optional[str],
) -> Optional[List[ShoppingListItem]]:
    """Shopping list for a range, or None when the range has no meals."""
    outputs = build_plan_outputs(meal_plan, recipes, start, end)
    if outputs is None:
        return None
    return outputs.shopping_list


# ============== Text rendering ==============


def shopping_list_text(items: Iterable[ShoppingListItem]) -> str:
    """Tab-separated table for pasting into notes or spreadsheets."""
    rows = [["Ingredient", "Quantity"]]
    rows.extend([item.ingredient, item.display_quantity()] for item in items)
    return "\n".join("\t".join(row) for row in rows)


def itinerary_text(outputs: PlanOutputs) -> str:
    """
    Printable day-by-day plan.

    Example:
        Monday, Oct 20
          Breakfast: Overnight Oats (serves 2 · 10 min)
    """
    lines = []
    for day in outputs.itinerary:
        lines.append(format_date_label(day.date))
        for planned in day.meals:
            recipe = planned.recipe
            lines.append(
                f"  {planned.meal.capitalize()}: {recipe.name} "
                f"(serves {format_number(recipe.servings)} · {recipe.prep_time})"
            )
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
