"""Domain models and persistence."""
