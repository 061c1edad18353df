"""
Database interface for the meal planner.

Keeps the recipe collection and the meal plan as JSON documents in a small
SQLite key-value table (data/foodplanner.db). Reads that hit missing or
unreadable documents fall back to an empty collection / empty plan.
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from .models import MealPlan, Recipe
from ..recipe_import import normalize_servings

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "recipes": "foodplanner.recipes.v1",
    "plan": "foodplanner.plan.v1",
}
SEEDED_KEY = "foodplanner.seeded"


class DatabaseInterface:
    """Interface for the SQLite key-value store."""

    def __init__(self, db_dir: str = "data"):
        """
        Initialize database interface.

        Args:
            db_dir: Directory containing the database file
        """
        self.db_dir = Path(db_dir)
        self.db_dir.mkdir(parents=True, exist_ok=True)

        self.db_path = self.db_dir / "foodplanner.db"

        self._init_database()

    def _init_database(self):
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS storage (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

        logger.debug(f"Storage ready at {self.db_path}")

    # ==================== Raw key-value Operations ====================

    def get_value(self, key: str) -> Optional[str]:
        """Get a stored document by key."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM storage WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set_value(self, key: str, value: str):
        """Store a document under key."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO storage (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )
            conn.commit()

    def _load_json(self, key: str, default: Any) -> Any:
        stored = self.get_value(key)
        if not stored:
            return default
        try:
            return json.loads(stored)
        except json.JSONDecodeError as e:
            logger.warning(f"Unable to parse stored value for key '{key}': {e}")
            return default

    # ==================== Recipe Operations ====================

    def get_recipes(self) -> List[Recipe]:
        """
        Load the recipe collection.

        Servings are re-normalized on the way out; a stored value that is no
        longer valid becomes 1. Entries that are not recipe objects are skipped.

        Returns:
            Recipes in stored order
        """
        data = self._load_json(STORAGE_KEYS["recipes"], [])
        if not isinstance(data, list):
            logger.warning("Stored recipes are not a list, ignoring")
            return []

        recipes = []
        upgraded = False
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry:
                logger.warning(f"Skipping malformed stored recipe: {entry!r}")
                continue

            recipe = Recipe.from_dict(entry)
            servings = normalize_servings(recipe.servings)
            if servings is None:
                servings = 1.0
            if servings != recipe.servings or "prep_time" not in entry:
                recipe.servings = servings
                upgraded = True
            recipes.append(recipe)

        if upgraded:
            logger.info("Upgraded stored recipes to normalized servings")
            self.save_recipes(recipes)

        return recipes

    def save_recipes(self, recipes: List[Recipe]):
        """Replace the stored recipe collection."""
        payload = json.dumps([recipe.to_dict() for recipe in recipes])
        self.set_value(STORAGE_KEYS["recipes"], payload)

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Get one recipe by id."""
        for recipe in self.get_recipes():
            if recipe.id == recipe_id:
                return recipe
        return None

    # ==================== Meal Plan Operations ====================

    def get_meal_plan(self) -> MealPlan:
        """Load the meal plan snapshot."""
        data = self._load_json(STORAGE_KEYS["plan"], {})
        if not isinstance(data, dict):
            logger.warning("Stored meal plan is not an object, ignoring")
            return {}
        return data

    def save_meal_plan(self, plan: MealPlan):
        """Replace the stored meal plan."""
        self.set_value(STORAGE_KEYS["plan"], json.dumps(plan))

    # ==================== Seeding ====================

    def is_seeded(self) -> bool:
        """Check if the default cookbook was already offered."""
        return self.get_value(SEEDED_KEY) == "true"

    def mark_seeded(self):
        self.set_value(SEEDED_KEY, "true")
