"""
Merge imported recipes into an existing collection.

Recipes are matched by case-insensitive name. A match keeps the existing
recipe's id and slot but takes every other field from the incoming recipe;
anything unmatched is appended in input order. Records are replaced, never
mutated, so a Recipe referenced elsewhere does not change underneath its holder.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Set

from .data.models import Recipe

logger = logging.getLogger(__name__)


def name_key(name: str) -> str:
    """Case-insensitive identity of a recipe name."""
    return name.lower()


def dedupe_recipes(existing: Iterable[Recipe], incoming: Iterable[Recipe]) -> List[Recipe]:
    """
    Merge an incoming batch into a collection.

    Args:
        existing: Current collection, in display order
        incoming: Newly imported recipes with fresh ids

    Returns:
        New list: existing recipes in their original order (updated where an
        incoming recipe shares the name), then new recipes in input order.
        Applying the same batch twice leaves the result unchanged.
    """
    merged = list(existing)
    index: Dict[str, int] = {}
    for position, recipe in enumerate(merged):
        index.setdefault(name_key(recipe.name), position)

    updated = 0
    for recipe in incoming:
        key = name_key(recipe.name)
        position = index.get(key)
        if position is None:
            index[key] = len(merged)
            merged.append(recipe)
        else:
            merged[position] = replace(recipe, id=merged[position].id)
            updated += 1

    if updated:
        logger.info(f"Merged {updated} imported recipes into existing entries")
    return merged


def create_duplicate_name(existing_names: Set[str], base_name: str) -> str:
    """
    Pick a free name for a copy of a recipe.

    Args:
        existing_names: Lower-cased names already in the collection
        base_name: Name of the recipe being duplicated

    Returns:
        "<base> (Copy)", or "<base> (Copy N)" for the first unused N >= 2
    """
    attempt = f"{base_name} (Copy)"
    counter = 2
    while name_key(attempt) in existing_names:
        attempt = f"{base_name} (Copy {counter})"
        counter += 1
    return attempt


def duplicate_recipe(recipes: List[Recipe], recipe: Recipe, new_id: str) -> Recipe:
    """Copy a recipe under a fresh id and an unused "(Copy)" name."""
    names = {name_key(existing.name) for existing in recipes}
    return replace(
        recipe,
        id=new_id,
        name=create_duplicate_name(names, recipe.name),
        ingredients=list(recipe.ingredients),
    )
