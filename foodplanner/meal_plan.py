"""
Meal plan snapshot editing and date helpers.

A meal plan is a plain mapping of ISO date -> {meal type -> recipe id or None}.
Days with no assignments are not kept. Every editing function returns a new
mapping and leaves its input untouched, so snapshots handed to the shopping
list builder stay stable.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from .data.models import DayPlan, MealPlan
from .units import MEAL_TYPES

DATE_FORMAT = "%Y-%m-%d"


def _parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD date string."""
    return datetime.strptime(date_str, DATE_FORMAT).date()


def _format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def is_valid_date(date_str: str) -> bool:
    """Check for a real calendar date written exactly as YYYY-MM-DD."""
    try:
        return _format_date(_parse_date(date_str)) == date_str
    except (TypeError, ValueError):
        return False


# ============== Dates ==============


def date_range_inclusive(start: Optional[str], end: Optional[str]) -> List[str]:
    """
    List every date from start to end, both included.

    Args:
        start: Start date YYYY-MM-DD
        end: End date YYYY-MM-DD

    Returns:
        ISO date strings; empty when either date is missing or invalid,
        or when end is before start
    """
    if not start or not end:
        return []
    try:
        start_date = _parse_date(start)
        end_date = _parse_date(end)
    except ValueError:
        return []

    dates = []
    cursor = start_date
    while cursor <= end_date:
        dates.append(_format_date(cursor))
        cursor += timedelta(days=1)
    return dates


def add_days(date_str: str, days: int) -> str:
    """Shift a YYYY-MM-DD date by a number of days."""
    return _format_date(_parse_date(date_str) + timedelta(days=days))


def week_dates(anchor: str) -> List[str]:
    """Seven consecutive dates starting at anchor."""
    return [add_days(anchor, index) for index in range(7)]


def default_week_anchor(today: Optional[date] = None) -> str:
    """Monday of the week containing today."""
    today = today or date.today()
    return _format_date(today - timedelta(days=today.weekday()))


def format_date_range_display(start: str, end: str) -> str:
    """Render a range as "20/10/2025–26/10/2025"."""
    if not start or not end:
        return ""
    start_year, start_month, start_day = start.split("-")
    end_year, end_month, end_day = end.split("-")
    return f"{start_day}/{start_month}/{start_year}–{end_day}/{end_month}/{end_year}"


def format_date_label(date_str: str) -> str:
    """Render a date as "Monday, Oct 20"."""
    value = _parse_date(date_str)
    return f"{value.strftime('%A, %b')} {value.day}"


# ============== Plan editing ==============


def create_empty_day_plan() -> DayPlan:
    """A day with every meal slot unassigned."""
    return {meal: None for meal in MEAL_TYPES}


def is_day_empty(day: DayPlan) -> bool:
    """Check if no meal slot of the day holds a recipe."""
    return all(not day.get(meal) for meal in MEAL_TYPES)


def assign_meal(plan: MealPlan, date_str: str, meal: str, recipe_id: Optional[str]) -> MealPlan:
    """
    Assign (or clear, with recipe_id=None) one meal slot.

    Args:
        plan: Current plan snapshot
        date_str: Date YYYY-MM-DD
        meal: One of MEAL_TYPES
        recipe_id: Recipe to assign, or None to clear the slot

    Returns:
        New plan; the day is dropped if it ends up empty

    Raises:
        ValueError: If the date is not YYYY-MM-DD or meal is not a known meal type
    """
    if not is_valid_date(date_str):
        raise ValueError(f"Invalid date '{date_str}'. Expected YYYY-MM-DD")
    if meal not in MEAL_TYPES:
        raise ValueError(f"Invalid meal type '{meal}'. Must be one of: {MEAL_TYPES}")

    next_plan = dict(plan)
    day = {**create_empty_day_plan(), **next_plan.get(date_str, {})}
    day[meal] = recipe_id or None

    if is_day_empty(day):
        next_plan.pop(date_str, None)
    else:
        next_plan[date_str] = day
    return next_plan


def clear_dates(plan: MealPlan, dates: Iterable[str]) -> MealPlan:
    """Remove every assignment on the given dates."""
    to_clear = set(dates)
    return {day: meals for day, meals in plan.items() if day not in to_clear}


def remove_recipe_from_plan(plan: MealPlan, recipe_id: str) -> MealPlan:
    """
    Clear every slot pointing at a recipe (used when it is deleted).

    Returns:
        The same plan object when nothing referenced the recipe, else a new plan
    """
    changed = False
    next_plan = {}

    for date_str, day in plan.items():
        if recipe_id not in day.values():
            next_plan[date_str] = day
            continue

        changed = True
        updated = {meal: (None if value == recipe_id else value) for meal, value in day.items()}
        if not is_day_empty(updated):
            next_plan[date_str] = updated

    return next_plan if changed else plan


def count_assignments(plan: MealPlan, dates: Optional[Iterable[str]] = None) -> int:
    """Count assigned slots, optionally restricted to some dates."""
    selected = plan.keys() if dates is None else dates
    total = 0
    for date_str in selected:
        day = plan.get(date_str)
        if not day:
            continue
        total += sum(1 for meal in MEAL_TYPES if day.get(meal))
    return total
