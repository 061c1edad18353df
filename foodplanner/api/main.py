"""
FastAPI application for the meal planner.

Exposes recipe management, import/export, meal plan editing and shopping
list generation over JSON. The MealPlanner instance is created in the
lifespan handler and shared through app.state.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config import LOG_FORMAT, get_settings
from ..main import MealPlanner
from .routes import plan, recipes, shop

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format=LOG_FORMAT,
)
logger = logging.getLogger(__name__)


def create_app(db_dir: Optional[str] = None) -> FastAPI:
    """
    Build the application.

    Args:
        db_dir: Database directory (defaults to settings)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open storage and seed the default cookbook on startup."""
        logger.info("Starting meal planner API...")
        app.state.planner = MealPlanner(db_dir=db_dir)

        seeded = app.state.planner.seed_if_empty()
        if seeded:
            logger.info(f"Seeded {seeded} recipes from default cookbook")

        yield

        logger.info("Meal planner API shutdown complete")

    app = FastAPI(
        title="Meal Planner API",
        description="Recipe import, meal planning and shopping lists",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(recipes.router, prefix="/api", tags=["recipes"])
    app.include_router(plan.router, prefix="/api", tags=["planning"])
    app.include_router(shop.router, prefix="/api", tags=["shopping"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "foodplanner.api.main:app",
        host="0.0.0.0",
        port=get_settings().port,
        log_level="debug" if get_settings().debug else "info",
    )
