"""HTTP API for the meal planner."""
