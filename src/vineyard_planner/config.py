"""
Application settings and user preferences.

``Settings`` is read from the environment (prefix ``VINEYARD_``) and an
optional ``.env`` file. ``Preferences`` hold what the dashboard used to keep in
browser storage; they are loaded and saved explicitly at the CLI boundary and
passed into whatever needs them.

Usage::

    from vineyard_planner.config import get_settings

    settings = get_settings()
    print(settings.db_path)
"""

from __future__ import annotations

import json
from datetime import date
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vineyard_planner.errors import InvalidInputFile

DEFAULT_PREFERENCES_PATH = Path("data/preferences.json")


class Settings(BaseSettings):
    """Runtime configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VINEYARD_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "vineyard-planner"
    app_env: str = "development"
    debug: bool = False

    # Default site: Napa Valley, CA
    location_id: str = "default"
    lat: float = Field(default=38.2975, ge=-90, le=90)
    lon: float = Field(default=-122.4581, ge=-180, le=180)
    timezone: str = "America/Los_Angeles"

    db_path: Path = Path("data/weather.sqlite")
    site_dir: Path = Path("site")
    api_port: int = 8000

    # GDD and unit handling
    base_temp: float = 50.0
    temperature_unit: str = "fahrenheit"
    precipitation_unit: str = "inch"

    archive_host: str = "https://archive-api.open-meteo.com"
    forecast_host: str = "https://api.open-meteo.com"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings (cached)."""
    return Settings()


class Preferences(BaseModel):
    """User preferences persisted between runs."""

    season_start: date = Field(default_factory=lambda: date(date.today().year, 3, 1))
    default_location_id: str | None = None
    show_forecast: bool = True


def load_preferences(path: Path = DEFAULT_PREFERENCES_PATH) -> Preferences:
    """Load preferences from a JSON file, falling back to defaults if missing.

    Raises:
        InvalidInputFile: If the file is not valid JSON or fails validation.
    """
    if not path.exists():
        return Preferences()
    try:
        with path.open() as f:
            return Preferences.model_validate(json.load(f))
    except (json.JSONDecodeError, ValidationError) as e:
        raise InvalidInputFile(path, str(e)) from e


def save_preferences(prefs: Preferences, path: Path = DEFAULT_PREFERENCES_PATH) -> Path:
    """Write preferences as JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        f.write(prefs.model_dump_json(indent=2))
    return path
