"""
Validate loosely structured recipe import files.

Import payloads are either {"recipes": [...]} or a bare list of records.
Each record is reconciled field by field (aliases, free-text meal labels,
servings as numbers or strings, ingredients as a list or one block of text)
and either becomes an ImportedRecipe or is dropped. Nothing here raises for
bad input; callers only see how many recipes survived.
"""

import logging
import math
import re
import uuid
from typing import Any, Dict, Iterable, List, Optional

from .data.models import ImportedRecipe, Recipe
from .field_lookup import create_field_lookup, get_field, pick_string_field
from .meal_classifier import classify_meal
from .units import MEAL_TYPES, round_quantity

logger = logging.getLogger(__name__)

# Candidate spellings per canonical field, in priority order
NAME_FIELDS = ["name"]
PREP_TIME_FIELDS = ["prep_time", "prep time", "preptime"]
INSTRUCTION_FIELDS = ["instructions", "instruction", "directions", "method"]
MEAL_FIELDS = ["meal", "meal type", "meal_type", "course", "category"]
INGREDIENTS_FIELD = "ingredients"
SERVINGS_FIELD = "servings"

# Leading number the way JavaScript's parseFloat reads it ("4 people" -> 4)
LEADING_NUMBER_PATTERN = re.compile(
    r'^[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)'
)
INGREDIENT_SPLIT_PATTERN = re.compile(r'\r?\n|[,;•]')
BULLET_PATTERN = re.compile(r'^[\-•*]\s*')

NO_RECIPES_MESSAGE = "No recipes found in file—please verify the format."
UNREADABLE_FILE_MESSAGE = (
    "Sorry, we could not process that file. Please confirm the JSON structure."
)


# ============== Field normalizers ==============


def parse_leading_float(text: str) -> Optional[float]:
    """Parse the numeric prefix of a string, or None if there is none."""
    match = LEADING_NUMBER_PATTERN.match(text.strip())
    if not match:
        return None
    return float(match.group(0).replace("Infinity", "inf"))


def normalize_servings(raw: Any) -> Optional[float]:
    """
    Normalize a servings value of unknown type.

    Args:
        raw: Number, string ("4", " 2.5 ", "6 people") or anything else

    Returns:
        Positive float rounded to 2 decimals, or None when the value is
        missing, non-numeric, non-finite, zero or negative
    """
    if isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            # JSON integers have no size limit
            return None
    elif isinstance(raw, str):
        trimmed = raw.strip()
        if not trimmed:
            return None
        value = parse_leading_float(trimmed)
        if value is None:
            return None
    else:
        return None

    if not math.isfinite(value) or value <= 0:
        return None
    return round_quantity(value)


def normalize_imported_ingredients(raw: Any) -> List[str]:
    """
    Normalize an ingredients value of unknown shape into clean lines.

    A list keeps its non-blank strings in order. A single string is split on
    newlines, commas, semicolons and bullets, with leading "-", "*" or bullet
    markers removed. Non-empty text is never discarded: if splitting leaves
    nothing, the whole string comes back as one line.
    """
    if isinstance(raw, (list, tuple)):
        return [item.strip() for item in raw if isinstance(item, str) and item.strip()]

    if isinstance(raw, str):
        trimmed = raw.strip()
        if not trimmed:
            return []

        candidates = []
        for segment in INGREDIENT_SPLIT_PATTERN.split(trimmed):
            cleaned = BULLET_PATTERN.sub("", segment).strip()
            if cleaned:
                candidates.append(cleaned)

        return candidates or [trimmed]

    return []


# ============== Payload validation ==============


def coerce_recipe_payload(data: Any) -> Dict[str, list]:
    """
    Coerce parsed JSON into the {"recipes": [...]} shape.

    A bare list is wrapped; anything else becomes an empty payload.
    """
    if isinstance(data, dict) and isinstance(data.get("recipes"), list):
        return data

    if isinstance(data, list):
        return {"recipes": data}

    logger.debug(f"Import payload has no recipes array (got {type(data).__name__})")
    return {"recipes": []}


def validate_imported_record(candidate: Any) -> Optional[ImportedRecipe]:
    """
    Validate one raw record.

    Args:
        candidate: One element of the payload's recipes array

    Returns:
        ImportedRecipe, or None if any required field is missing or invalid
    """
    if not isinstance(candidate, dict):
        return None

    lookup = create_field_lookup(candidate)
    name = pick_string_field(lookup, NAME_FIELDS)
    prep_time = pick_string_field(lookup, PREP_TIME_FIELDS)
    instructions = pick_string_field(lookup, INSTRUCTION_FIELDS)
    meal = classify_meal(pick_string_field(lookup, MEAL_FIELDS))
    ingredients = normalize_imported_ingredients(get_field(lookup, INGREDIENTS_FIELD))
    servings = normalize_servings(get_field(lookup, SERVINGS_FIELD))

    if (
        not name
        or not prep_time
        or not instructions
        or not meal
        or not ingredients
        or servings is None
    ):
        logger.debug(f"Dropping import record {name or '<unnamed>'!r}")
        return None

    return ImportedRecipe(
        name=name,
        prep_time=prep_time,
        instructions=instructions,
        meal=meal,
        ingredients=ingredients,
        servings=servings,
    )


def validate_imported_recipes(payload: Any) -> List[ImportedRecipe]:
    """
    Validate every record of an import payload.

    Args:
        payload: Result of coerce_recipe_payload()

    Returns:
        Valid recipes in input order; invalid records are silently dropped
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("recipes"), list):
        return []

    validated = []
    for candidate in payload["recipes"]:
        recipe = validate_imported_record(candidate)
        if recipe is not None:
            validated.append(recipe)

    dropped = len(payload["recipes"]) - len(validated)
    if dropped:
        logger.info(f"Validated {len(validated)} recipes, dropped {dropped}")
    return validated


# ============== Ids and export ==============


def generate_id(prefix: str) -> str:
    """Generate a short unique id such as "recipe-3f9a1c2"."""
    return f"{prefix}-{uuid.uuid4().hex[:7]}"


def assign_recipe_ids(imported: Iterable[ImportedRecipe]) -> List[Recipe]:
    """Turn validated imports into Recipes with fresh ids."""
    return [recipe.to_recipe(generate_id("recipe")) for recipe in imported]


def build_export_payload(recipes: Iterable[Recipe]) -> Dict[str, List[Dict]]:
    """
    Build the export file body.

    Uses the same keys the importer reads, so an export re-imports cleanly.
    """
    return {"recipes": [recipe.to_export_dict() for recipe in recipes]}


def import_feedback_message(count: int, filename: str) -> str:
    """User-facing summary of an import."""
    if not count:
        return NO_RECIPES_MESSAGE
    plural = "" if count == 1 else "s"
    return f"Imported {count} recipe{plural} from “{filename}”."


# ============== Recipe drafts ==============


def validate_recipe_draft(
    name: str,
    servings: str,
    ingredients_text: str,
    instructions: str,
) -> Optional[str]:
    """
    Check a hand-entered recipe form.

    Returns:
        The first problem as a user-facing message, or None if valid
    """
    if not name.strip():
        return "Please provide a recipe name."
    if not servings.strip():
        return "Specify how many servings this recipe makes."
    servings_value = parse_leading_float(servings)
    if servings_value is None or not math.isfinite(servings_value) or servings_value <= 0:
        return "Servings must be a positive number."
    if not ingredients_text.strip():
        return "List at least one ingredient."
    if not instructions.strip():
        return "Include preparation instructions."
    return None


def draft_to_recipe_fields(
    name: str,
    prep_time: str,
    meal: str,
    servings: str,
    ingredients_text: str,
    instructions: str,
) -> Dict[str, Any]:
    """
    Convert a validated draft into Recipe keyword arguments (without id).

    Ingredients are entered one per line; blank lines are dropped.
    """
    if meal not in MEAL_TYPES:
        meal = classify_meal(meal) or "breakfast"

    ingredients = [line.strip() for line in re.split(r'\r?\n', ingredients_text)]

    return {
        "name": name.strip(),
        "prep_time": prep_time.strip(),
        "meal": meal,
        "servings": normalize_servings(servings),
        "ingredients": [line for line in ingredients if line],
        "instructions": instructions.strip(),
    }
