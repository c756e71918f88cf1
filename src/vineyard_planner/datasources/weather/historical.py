"""Historical daily weather from Open-Meteo Archive API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vineyard_planner.config import get_settings
from vineyard_planner.datasources.weather.client import ARCHIVE_PATH, daily_params, get_json

if TYPE_CHECKING:
    from datetime import date

    from vineyard_planner.config import Settings


def fetch_historical_daily(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Fetch historical daily weather from Open-Meteo Archive API.

    Args:
        lat: Latitude.
        lon: Longitude.
        start: First day (inclusive).
        end: Last day (inclusive).
        settings: Host and unit configuration (defaults to ``get_settings()``).

    Returns:
        Raw API response dict with ``daily`` key containing arrays.
    """
    settings = settings or get_settings()
    params = daily_params(lat, lon, settings)
    params["start_date"] = start.isoformat()
    params["end_date"] = end.isoformat()
    return get_json(settings.archive_host.rstrip("/") + ARCHIVE_PATH, params)
