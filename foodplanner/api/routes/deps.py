"""Shared route dependencies."""
from fastapi import Request

from ...main import MealPlanner


def get_planner(request: Request) -> MealPlanner:
    """Dependency to get the meal planner."""
    return request.app.state.planner
