"""
Parse free-text ingredient lines into quantity, unit and item.

Rule-based parser - no LLM or NLP model required.
Uses the vocabulary from units.py.

Examples:
    "2 cups basmati rice"  -> quantity=2.0, unit="cups", item="basmati rice"
    "1/3 cup rice"         -> quantity=0.333, unit="cup", item="rice"
    "(2) cloves garlic"    -> quantity=2.0, unit="cloves", item="garlic"
    "salt to taste"        -> quantity=None, unit=None, item="salt to taste"
"""

import logging
import math
import re
from typing import Optional

from .data.models import ParsedIngredient
from .units import FRACTIONS, KNOWN_UNITS

logger = logging.getLogger(__name__)

# Patterns (ASCII digits only)
INTEGER_PATTERN = re.compile(r'^[0-9]+$')
FRACTION_PATTERN = re.compile(r'^[0-9]+/[0-9]+$')
DECIMAL_PATTERN = re.compile(r'^[0-9]+\.[0-9]+$')


def parse_ingredient(raw: str) -> ParsedIngredient:
    """
    Parse one ingredient line.

    Args:
        raw: Free-text line (e.g., "2 tbsp olive oil")

    Returns:
        ParsedIngredient. quantity is None when the first token is not a
        number, and item falls back to the whole line when nothing is left
        after the quantity and unit.
    """
    trimmed = raw.strip()
    tokens = trimmed.split()

    quantity, start = _parse_quantity(tokens)

    unit = None
    if start < len(tokens):
        candidate = tokens[start].lower()
        if candidate in KNOWN_UNITS:
            unit = candidate
            start += 1

    item = " ".join(tokens[start:]) or trimmed

    return ParsedIngredient(
        raw=trimmed,
        quantity=quantity,
        unit=unit,
        item=item.lower(),
    )


def _parse_quantity(tokens: list) -> tuple:
    """Read a leading quantity token. Returns (quantity, tokens consumed)."""
    if not tokens:
        return None, 0

    first = tokens[0].replace("(", "").replace(")", "")

    if INTEGER_PATTERN.match(first):
        return _finite_or_none(float(first)), 1
    if FRACTION_PATTERN.match(first):
        if first in FRACTIONS:
            return FRACTIONS[first], 1
        return evaluate_fraction(first), 1
    if DECIMAL_PATTERN.match(first):
        return _finite_or_none(float(first)), 1

    return None, 0


def evaluate_fraction(expression: str) -> Optional[float]:
    """
    Divide a "numerator/denominator" expression.

    Args:
        expression: Fraction text such as "5/8"

    Returns:
        The quotient, or None for a zero or non-finite operand
    """
    numerator_text, _, denominator_text = expression.partition("/")
    try:
        numerator = float(numerator_text)
        denominator = float(denominator_text)
    except ValueError:
        return None

    if not math.isfinite(numerator) or not math.isfinite(denominator):
        return None
    if denominator == 0:
        logger.debug(f"Zero denominator in quantity '{expression}'")
        return None

    return numerator / denominator


def _finite_or_none(value: float) -> Optional[float]:
    return value if math.isfinite(value) else None
