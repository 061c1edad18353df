#!/usr/bin/env python3
"""
Main orchestrator for the meal planner.

Coordinates storage with the import, merge and shopping list logic. Used by
both the CLI below and the HTTP API.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import LOG_FORMAT, get_settings
from .data.database import DatabaseInterface
from .data.models import MealPlan, PlanOutputs, Recipe
from .meal_plan import (
    assign_meal,
    clear_dates,
    count_assignments,
    create_empty_day_plan,
    default_week_anchor,
    format_date_label,
    format_date_range_display,
    remove_recipe_from_plan,
    week_dates,
)
from .plan_outputs import build_plan_outputs, itinerary_text, shopping_list_text
from .recipe_import import (
    assign_recipe_ids,
    build_export_payload,
    coerce_recipe_payload,
    draft_to_recipe_fields,
    generate_id,
    import_feedback_message,
    validate_imported_recipes,
    validate_recipe_draft,
)
from .recipe_merge import dedupe_recipes, duplicate_recipe
from .units import MEAL_TYPES

logger = logging.getLogger(__name__)


class MealPlanner:
    """Main orchestrator for recipes, the meal plan and shopping lists."""

    def __init__(self, db_dir: Optional[str] = None):
        """
        Initialize the meal planner.

        Args:
            db_dir: Directory containing the database (defaults to settings)
        """
        self.db = DatabaseInterface(db_dir=db_dir or get_settings().db_dir)
        logger.info(f"Meal planner initialized (db={self.db.db_path})")

    # ==================== Recipes ====================

    def list_recipes(self) -> List[Recipe]:
        return self.db.get_recipes()

    def import_recipes(self, data: Any, source_name: str = "import") -> Dict[str, Any]:
        """
        Import parsed JSON into the collection.

        Args:
            data: Parsed import file ({"recipes": [...]} or a bare list)
            source_name: File name shown in the feedback message

        Returns:
            Result dictionary with the number of imported recipes and a
            user-facing message
        """
        validated = validate_imported_recipes(coerce_recipe_payload(data))
        message = import_feedback_message(len(validated), source_name)
        if not validated:
            return {"success": False, "imported": 0, "error": message}

        incoming = assign_recipe_ids(validated)
        merged = dedupe_recipes(self.db.get_recipes(), incoming)
        self.db.save_recipes(merged)

        logger.info(f"Imported {len(validated)} recipes ({len(merged)} in collection)")
        return {
            "success": True,
            "imported": len(validated),
            "total": len(merged),
            "message": message,
        }

    def seed_if_empty(self, seed_file: Optional[str] = None) -> int:
        """
        Import a default cookbook once, into an empty collection only.

        Returns:
            Number of recipes imported
        """
        seed_file = seed_file or get_settings().seed_file
        if not seed_file or self.db.is_seeded() or self.db.get_recipes():
            return 0

        try:
            data = json.loads(Path(seed_file).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read seed cookbook {seed_file}: {e}")
            return 0

        result = self.import_recipes(data, source_name=Path(seed_file).name)
        self.db.mark_seeded()
        return result["imported"]

    def export_recipes(self) -> Dict[str, List[Dict]]:
        return build_export_payload(self.db.get_recipes())

    def create_recipe(self, draft: Dict[str, str]) -> Dict[str, Any]:
        """
        Add a hand-entered recipe.

        Args:
            draft: Form fields (name, prep_time, meal, servings, ingredients_text,
                   instructions), all as strings

        Returns:
            Result dictionary with the new recipe or a validation error
        """
        error = validate_recipe_draft(
            draft["name"], draft["servings"], draft["ingredients_text"], draft["instructions"]
        )
        if error:
            return {"success": False, "error": error}

        recipe = Recipe(id=generate_id("recipe"), **draft_to_recipe_fields(**draft))
        recipes = self.db.get_recipes()
        recipes.append(recipe)
        self.db.save_recipes(recipes)
        return {"success": True, "recipe": recipe}

    def update_recipe(self, recipe_id: str, draft: Dict[str, str]) -> Dict[str, Any]:
        """Replace the fields of an existing recipe, keeping its id."""
        error = validate_recipe_draft(
            draft["name"], draft["servings"], draft["ingredients_text"], draft["instructions"]
        )
        if error:
            return {"success": False, "error": error}

        recipes = self.db.get_recipes()
        for position, recipe in enumerate(recipes):
            if recipe.id == recipe_id:
                updated = Recipe(id=recipe_id, **draft_to_recipe_fields(**draft))
                recipes[position] = updated
                self.db.save_recipes(recipes)
                return {"success": True, "recipe": updated}

        return {"success": False, "error": f"Recipe '{recipe_id}' not found"}

    def delete_recipe(self, recipe_id: str) -> bool:
        """Delete a recipe and clear it from every planned slot."""
        recipes = self.db.get_recipes()
        remaining = [recipe for recipe in recipes if recipe.id != recipe_id]
        if len(remaining) == len(recipes):
            return False

        self.db.save_recipes(remaining)
        self.db.save_meal_plan(remove_recipe_from_plan(self.db.get_meal_plan(), recipe_id))
        logger.info(f"Deleted recipe {recipe_id}")
        return True

    def duplicate_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Copy a recipe under a "(Copy)" name."""
        recipes = self.db.get_recipes()
        existing = next((recipe for recipe in recipes if recipe.id == recipe_id), None)
        if existing is None:
            return None

        clone = duplicate_recipe(recipes, existing, generate_id("recipe"))
        recipes.append(clone)
        self.db.save_recipes(recipes)
        return clone

    # ==================== Meal plan ====================

    def get_meal_plan(self) -> MealPlan:
        return self.db.get_meal_plan()

    def assign_meal(self, date: str, meal: str, recipe_id: Optional[str]) -> MealPlan:
        """
        Assign a recipe to a slot (or clear it with recipe_id=None).

        Raises:
            ValueError: If date is not YYYY-MM-DD or meal is not a meal type
        """
        plan = assign_meal(self.db.get_meal_plan(), date, meal, recipe_id)
        self.db.save_meal_plan(plan)
        return plan

    def clear_plan(self, dates: Optional[List[str]] = None) -> MealPlan:
        """Clear the given dates, or the whole plan when dates is None."""
        plan = {} if dates is None else clear_dates(self.db.get_meal_plan(), dates)
        self.db.save_meal_plan(plan)
        return plan

    def get_week(self, anchor: Optional[str] = None) -> Dict[str, Any]:
        """
        Seven days of the plan starting at anchor.

        Args:
            anchor: First date YYYY-MM-DD (defaults to this week's Monday)

        Returns:
            Dictionary with start, end, display label, every day's slots and
            the number of assigned slots

        Raises:
            ValueError: If anchor is not a valid date
        """
        dates = week_dates(anchor or default_week_anchor())
        plan = self.db.get_meal_plan()
        return {
            "start": dates[0],
            "end": dates[-1],
            "label": format_date_range_display(dates[0], dates[-1]),
            "days": {date: plan.get(date, create_empty_day_plan()) for date in dates},
            "assigned": count_assignments(plan, dates),
        }

    # ==================== Outputs ====================

    def build_outputs(self, start: str, end: str) -> Optional[PlanOutputs]:
        """
        Shopping list, itinerary and recipes for an inclusive date range.

        Returns:
            PlanOutputs, or None when nothing is planned in the range
        """
        logger.info(f"Building plan outputs for {start} to {end}")
        return build_plan_outputs(self.db.get_meal_plan(), self.db.get_recipes(), start, end)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Meal Planner")
    parser.add_argument(
        "--db-dir",
        type=str,
        default=None,
        help="Database directory (default: FOODPLANNER_DB_DIR or data)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import recipes from a JSON file")
    import_parser.add_argument("file", type=str, help="Recipe JSON file")

    export_parser = subparsers.add_parser("export", help="Export recipes as JSON")
    export_parser.add_argument("--output", type=str, help="Output file (default: stdout)")

    assign_parser = subparsers.add_parser("assign", help="Assign a recipe to a meal slot")
    assign_parser.add_argument("--date", type=str, required=True, help="Date (YYYY-MM-DD)")
    assign_parser.add_argument("--meal", type=str, required=True, choices=MEAL_TYPES)
    assign_parser.add_argument("--recipe-id", type=str, help="Recipe ID (omit to clear)")

    shop_parser = subparsers.add_parser("shop", help="Shopping list for a date range")
    shop_parser.add_argument("--start", type=str, required=True, help="Start date (YYYY-MM-DD)")
    shop_parser.add_argument("--end", type=str, required=True, help="End date (YYYY-MM-DD)")
    shop_parser.add_argument("--text", action="store_true", help="Print tab-separated text")

    week_parser = subparsers.add_parser("week", help="Show seven days of the meal plan")
    week_parser.add_argument("--anchor", type=str, help="First date (default: this Monday)")

    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
    )

    planner = MealPlanner(db_dir=args.db_dir)

    if args.command == "import":
        try:
            data = json.loads(Path(args.file).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Import failed: {e}")
            return 1

        result = planner.import_recipes(data, source_name=Path(args.file).name)
        if not result["success"]:
            logger.error(result["error"])
            return 1
        print(f"✓ {result['message']} ({result['total']} in collection)")

    elif args.command == "export":
        text = json.dumps(planner.export_recipes(), indent=2, ensure_ascii=False)
        if args.output:
            Path(args.output).write_text(text + "\n", encoding="utf-8")
            print(f"✓ Exported recipes to {args.output}")
        else:
            print(text)

    elif args.command == "assign":
        if args.recipe_id and planner.db.get_recipe(args.recipe_id) is None:
            logger.error(f"Recipe '{args.recipe_id}' not found")
            return 1
        try:
            planner.assign_meal(args.date, args.meal, args.recipe_id)
        except ValueError as e:
            logger.error(str(e))
            return 1
        print(f"✓ {args.date} {args.meal}: {args.recipe_id or 'cleared'}")

    elif args.command == "shop":
        outputs = planner.build_outputs(args.start, args.end)
        if outputs is None:
            logger.error(f"No meals planned between {args.start} and {args.end}")
            return 1

        if args.text:
            print(shopping_list_text(outputs.shopping_list))
        else:
            print(f"Meal plan {format_date_range_display(args.start, args.end)}\n")
            print(itinerary_text(outputs))
            for item in outputs.shopping_list:
                print(f"  • {item.ingredient}: {item.display_quantity()}")
            print(f"\n✓ {outputs.get_summary()}")

    elif args.command == "week":
        try:
            week = planner.get_week(args.anchor)
        except ValueError as e:
            logger.error(f"Invalid anchor date: {e}")
            return 1

        print(f"Week {week['label']}")
        for date, day in week["days"].items():
            print(format_date_label(date))
            for meal in MEAL_TYPES:
                print(f"  {meal.capitalize()}: {day.get(meal) or '-'}")
        print(f"\n✓ {week['assigned']} meals assigned")

    return 0


if __name__ == "__main__":
    sys.exit(main())
