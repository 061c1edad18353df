"""
Recipe routes for the FastAPI application.

Provides endpoints for:
- Listing, creating, updating, deleting and duplicating recipes
- Importing a recipe file (any supported shape)
- Exporting the collection
"""
import asyncio
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from ...main import MealPlanner
from ...recipe_import import UNREADABLE_FILE_MESSAGE
from .deps import get_planner

logger = logging.getLogger(__name__)

router = APIRouter()


class RecipeDraftRequest(BaseModel):
    """Request body for creating or updating a recipe (form fields as text)."""
    name: str
    prep_time: str = ""
    meal: str = "breakfast"
    servings: str
    ingredients_text: str
    instructions: str


class RecipeResponse(BaseModel):
    """One recipe."""
    id: str
    name: str
    prep_time: str
    meal: str
    servings: float
    ingredients: List[str]
    instructions: str


class ImportResponse(BaseModel):
    """Response from the import endpoint."""
    success: bool
    imported: int
    total: int
    message: str


@router.get("/recipes", response_model=List[RecipeResponse])
def list_recipes(planner: MealPlanner = Depends(get_planner)):
    """List the recipe collection in stored order."""
    return [recipe.to_dict() for recipe in planner.list_recipes()]


@router.post("/recipes", response_model=RecipeResponse, status_code=201)
def create_recipe(
    draft: RecipeDraftRequest,
    planner: MealPlanner = Depends(get_planner),
):
    """Add a hand-entered recipe."""
    result = planner.create_recipe(draft.model_dump())
    if not result["success"]:
        raise HTTPException(status_code=400, detail=result["error"])
    return result["recipe"].to_dict()


@router.put("/recipes/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: str,
    draft: RecipeDraftRequest,
    planner: MealPlanner = Depends(get_planner),
):
    """Replace a recipe's fields."""
    if planner.db.get_recipe(recipe_id) is None:
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")

    result = planner.update_recipe(recipe_id, draft.model_dump())
    if not result["success"]:
        raise HTTPException(status_code=400, detail=result["error"])
    return result["recipe"].to_dict()


@router.delete("/recipes/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: str, planner: MealPlanner = Depends(get_planner)):
    """Delete a recipe and clear it from the plan."""
    if not planner.delete_recipe(recipe_id):
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")


@router.post("/recipes/{recipe_id}/duplicate", response_model=RecipeResponse, status_code=201)
def duplicate_recipe(recipe_id: str, planner: MealPlanner = Depends(get_planner)):
    """Copy a recipe under a "(Copy)" name."""
    clone = planner.duplicate_recipe(recipe_id)
    if clone is None:
        raise HTTPException(status_code=404, detail=f"Recipe '{recipe_id}' not found")
    return clone.to_dict()


@router.post("/recipes/import", response_model=ImportResponse)
async def import_recipes(
    request: Request,
    filename: str = "import",
    planner: MealPlanner = Depends(get_planner),
):
    """
    Import a recipe file.

    The body is the file's JSON: {"recipes": [...]} or a bare list. Records
    that fail validation are skipped. filename is only used in the message.
    """
    try:
        data = await request.json()
    except ValueError as e:
        logger.warning(f"Import failed: {e}")
        raise HTTPException(status_code=400, detail=UNREADABLE_FILE_MESSAGE)

    loop = asyncio.get_event_loop()
    result = await loop.run_in_executor(
        None,
        lambda: planner.import_recipes(data, source_name=filename),
    )
    if not result["success"]:
        raise HTTPException(status_code=422, detail=result["error"])
    return result


@router.get("/recipes/export")
def export_recipes(planner: MealPlanner = Depends(get_planner)):
    """Export the collection in the import file format."""
    return planner.export_recipes()
