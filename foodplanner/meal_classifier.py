"""
Map free-text meal and course labels onto the four meal types.

Import files label recipes with whatever the author had in mind ("Brunch",
"Main course / Dinner", "Sweet treats"). Rules are checked top to bottom and
the first match wins:

1. "breakfast" anywhere                  -> breakfast
2. "snack" anywhere                      -> snack
3. "dessert", "sweet" or "treat"         -> snack
4. "lunch" without "dinner"              -> lunch
5. "dinner" or "supper"                  -> dinner

Anything else is unclassifiable (None).
"""

from typing import Optional

SNACK_KEYWORDS = ("dessert", "sweet", "treat")
DINNER_KEYWORDS = ("dinner", "supper")


def classify_meal(raw: Optional[str]) -> Optional[str]:
    """
    Classify a meal/category label.

    Args:
        raw: Free-text label or None

    Returns:
        "breakfast", "lunch", "dinner", "snack", or None
    """
    if not raw:
        return None
    value = raw.strip().lower()
    if not value:
        return None

    if "breakfast" in value:
        return "breakfast"
    if "snack" in value:
        return "snack"
    if any(word in value for word in SNACK_KEYWORDS):
        return "snack"
    # "Lunch and dinner" resolves to dinner
    if "lunch" in value and "dinner" not in value:
        return "lunch"
    if any(word in value for word in DINNER_KEYWORDS):
        return "dinner"
    return None
