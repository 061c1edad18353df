"""
Quantity and unit vocabulary for ingredient parsing.

This file provides the static tables the ingredient parser and shopping list
aggregation are built on:
- Common fraction literals and their fixed decimal values
- Measurement-unit tokens recognised after a leading quantity
- The four meal types, in display order

Quantities are never converted between units. "2 cup rice" and "200 g rice"
stay separate shopping list rows.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, FrozenSet, List

# =============================================================================
# FRACTIONS
# =============================================================================
# Table values win over computed division ("1/3" is 0.333, not 0.3333...)
FRACTIONS: Dict[str, float] = {
    "1/2": 0.5,
    "1/3": 0.333,
    "2/3": 0.666,
    "1/4": 0.25,
    "3/4": 0.75,
    "1/8": 0.125,
}

# =============================================================================
# UNITS
# =============================================================================
MASS_UNITS = ("g", "kg", "mg")
IMPERIAL_MASS_UNITS = ("oz", "lb", "lbs")
VOLUME_UNITS = ("ml", "l", "cup", "cups", "tsp", "tbsp")
COUNT_UNITS = (
    "clove", "cloves",
    "slice", "slices",
    "piece", "pieces",
    "can", "cans",
    "packet", "packets",
    "bunch", "bunches",
)

# Exact-token match only, no plural/singular folding beyond the entries above
KNOWN_UNITS: FrozenSet[str] = frozenset(
    MASS_UNITS + IMPERIAL_MASS_UNITS + VOLUME_UNITS + COUNT_UNITS
)

# Key suffix for ingredients parsed without a unit
UNITLESS_KEY = "each"

# =============================================================================
# MEAL TYPES
# =============================================================================
MEAL_TYPES: List[str] = ["breakfast", "lunch", "dinner", "snack"]

_CENTS = Decimal("0.01")
# Enough digits for the integer part of any finite float plus 2 decimals
_ROUNDING_PRECISION = 400


def is_known_unit(token: str) -> bool:
    """Check if a token (any case) is a recognised measurement unit."""
    return token.lower() in KNOWN_UNITS


def round_quantity(value: float) -> float:
    """
    Round to 2 decimal places, halves away from zero.

    Works on the exact binary value of the float, so 0.125 becomes 0.13
    while 4.005 (stored as 4.00499...) becomes 4.0.

    Args:
        value: Float to round

    Returns:
        Rounded float; inf and nan come back unchanged
    """
    if not math.isfinite(value):
        return value
    with localcontext() as context:
        context.prec = _ROUNDING_PRECISION
        return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Render a quantity without a trailing '.0' for whole numbers."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)
