"""
Meal planner recipe ingestion and ingredient aggregation.

Exports the pure core used by the storage, API and CLI layers:
- parse_ingredient: free-text ingredient line -> quantity/unit/item
- validate_imported_recipes: loosely shaped import JSON -> ImportedRecipe list
- build_plan_outputs: meal plan + recipes + date range -> shopping list and itinerary
- dedupe_recipes: merge an imported batch into an existing collection
"""

from .ingredient_parser import parse_ingredient
from .meal_classifier import classify_meal
from .recipe_import import (
    coerce_recipe_payload,
    validate_imported_recipes,
    build_export_payload,
)
from .plan_outputs import build_plan_outputs, build_shopping_list
from .recipe_merge import dedupe_recipes

__all__ = [
    'parse_ingredient',
    'classify_meal',
    'coerce_recipe_payload',
    'validate_imported_recipes',
    'build_export_payload',
    'build_plan_outputs',
    'build_shopping_list',
    'dedupe_recipes',
]

__version__ = "1.0.0"
