"""
Runtime settings.

Values come from environment variables, optionally loaded from a .env file
in the working directory:
- FOODPLANNER_DB_DIR: Directory for the SQLite store (default: data)
- FOODPLANNER_SEED_FILE: Cookbook JSON imported once into an empty collection
- DEBUG: "true" for debug logging
- PORT: API port (default: 5000)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Settings for the storage, API and CLI layers."""

    db_dir: str = "data"
    seed_file: Optional[str] = None
    debug: bool = False
    port: int = 5000


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def load_settings() -> Settings:
    """
    Read settings from the environment (and .env, if present).

    Returns:
        Fresh Settings instance
    """
    load_dotenv()
    return Settings(
        db_dir=os.getenv("FOODPLANNER_DB_DIR", "data"),
        seed_file=os.getenv("FOODPLANNER_SEED_FILE") or None,
        debug=os.getenv("DEBUG", "false").lower() == "true",
        port=int(os.getenv("PORT", 5000)),
    )


def get_settings() -> Settings:
    """Get the cached settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings():
    """Drop the cached settings (tests, reconfiguration)."""
    global _settings
    _settings = None
