"""
Meal plan routes for the FastAPI application.

Provides endpoints for:
- Reading the meal plan, whole or one week at a time
- Assigning or clearing a meal slot
- Clearing dates or the whole plan
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ...main import MealPlanner
from .deps import get_planner

logger = logging.getLogger(__name__)

router = APIRouter()


class AssignMealRequest(BaseModel):
    """Request body for assigning a meal slot."""
    recipe_id: Optional[str] = None


@router.get("/plan")
def get_plan(planner: MealPlanner = Depends(get_planner)):
    """Get the meal plan (date -> meal type -> recipe id)."""
    return planner.get_meal_plan()


@router.get("/plan/week")
def get_week(
    anchor: Optional[str] = None,
    planner: MealPlanner = Depends(get_planner),
):
    """Seven days of the plan from anchor (default: this week's Monday)."""
    try:
        return planner.get_week(anchor)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/plan/{date}/{meal}")
def assign_meal(
    date: str,
    meal: str,
    body: AssignMealRequest,
    planner: MealPlanner = Depends(get_planner),
):
    """Assign a recipe to a slot, or clear it with a null recipe_id."""
    if body.recipe_id and planner.db.get_recipe(body.recipe_id) is None:
        raise HTTPException(status_code=404, detail=f"Recipe '{body.recipe_id}' not found")

    try:
        return planner.assign_meal(date, meal, body.recipe_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/plan")
def clear_plan(
    dates: Optional[List[str]] = Query(default=None),
    planner: MealPlanner = Depends(get_planner),
):
    """Clear the given dates, or everything when no dates are passed."""
    return planner.clear_plan(dates)
