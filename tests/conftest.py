"""
Pytest configuration and shared fixtures.

Fixtures are reusable test setup that can be injected into tests.
"""

import shutil
import tempfile

import pytest

from foodplanner.data.database import DatabaseInterface
from foodplanner.data.models import Recipe
from foodplanner.main import MealPlanner


@pytest.fixture
def temp_db_dir():
    """
    Create a temporary database directory for testing.

    This fixture is automatically cleaned up after each test.
    """
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def db(temp_db_dir):
    """
    Create a fresh DatabaseInterface for each test.

    Usage in tests:
        def test_something(db):
            db.save_recipes([...])
    """
    return DatabaseInterface(db_dir=temp_db_dir)


@pytest.fixture
def planner(temp_db_dir):
    """MealPlanner backed by a temporary database."""
    return MealPlanner(db_dir=temp_db_dir)


@pytest.fixture
def pancakes():
    """Sample breakfast recipe."""
    return Recipe(
        id="recipe-pan0001",
        name="Fluffy Pancakes",
        prep_time="20 min",
        ingredients=["2 cups flour", "2 eggs", "1 1/2 cups milk", "1 tbsp sugar"],
        meal="breakfast",
        servings=4.0,
        instructions="Whisk, rest for 5 minutes, fry in batches.",
    )


@pytest.fixture
def fried_rice():
    """Sample dinner recipe."""
    return Recipe(
        id="recipe-ric0002",
        name="Egg Fried Rice",
        prep_time="25 min",
        ingredients=["2 cup rice", "3 eggs", "2 cloves garlic", "soy sauce"],
        meal="dinner",
        servings=2.0,
        instructions="Cook rice the day before. Fry garlic, add rice, push aside, scramble eggs.",
    )


@pytest.fixture
def sample_recipes(pancakes, fried_rice):
    return [pancakes, fried_rice]


@pytest.fixture
def sample_meal_plan(pancakes, fried_rice):
    """Two days: pancakes + fried rice on the 20th, fried rice on the 21st."""
    return {
        "2025-10-20": {
            "breakfast": pancakes.id,
            "lunch": None,
            "dinner": fried_rice.id,
            "snack": None,
        },
        "2025-10-21": {
            "breakfast": None,
            "lunch": None,
            "dinner": fried_rice.id,
            "snack": None,
        },
    }


@pytest.fixture
def import_payload():
    """Import file with assorted field spellings and one invalid record."""
    return {
        "recipes": [
            {
                "name": "Overnight Oats",
                "prep_time": "10 min",
                "meal": "Breakfast",
                "servings": 2,
                "ingredients": ["1 cup oats", "1 cup milk", "1 tbsp honey"],
                "instructions": "Mix and chill overnight.",
            },
            {
                "Name": "Campfire Chili",
                "Prep Time": "45 min",
                "Course": "Dinner / Supper",
                "Servings": "6 people",
                "Ingredients": "1 can beans\n500 g beef\n- 1 onion",
                "Method": "Brown beef, add everything, simmer.",
            },
            {
                "name": "Mystery Dish",
                "prep_time": "5 min",
                "meal": "Main course",
                "servings": 1,
                "ingredients": ["something"],
                "instructions": "Unclear.",
            },
        ]
    }
