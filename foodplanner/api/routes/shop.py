"""
Shop routes for the FastAPI application.

Provides the shopping list, itinerary and recipe anthology for a date range.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from ...main import MealPlanner
from ...plan_outputs import shopping_list_text
from .deps import get_planner

logger = logging.getLogger(__name__)

router = APIRouter()

NO_MEALS_MESSAGE = "No meals planned in this date range"


@router.get("/shop")
def get_plan_outputs(start: str, end: str, planner: MealPlanner = Depends(get_planner)):
    """
    Build outputs for an inclusive date range.

    Args:
        start: Start date YYYY-MM-DD
        end: End date YYYY-MM-DD

    Returns:
        Shopping list, itinerary, recipes used and planned meal count
    """
    outputs = planner.build_outputs(start, end)
    if outputs is None:
        raise HTTPException(status_code=404, detail=NO_MEALS_MESSAGE)
    return outputs.to_dict()


@router.get("/shop/text", response_class=PlainTextResponse)
def get_shopping_list_text(start: str, end: str, planner: MealPlanner = Depends(get_planner)):
    """Shopping list as tab-separated text."""
    outputs = planner.build_outputs(start, end)
    if outputs is None:
        raise HTTPException(status_code=404, detail=NO_MEALS_MESSAGE)
    return shopping_list_text(outputs.shopping_list)
