"""Daily weather forecast from Open-Meteo Forecast API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from vineyard_planner.config import get_settings
from vineyard_planner.datasources.weather.client import FORECAST_PATH, daily_params, get_json

if TYPE_CHECKING:
    from datetime import date

    from vineyard_planner.config import Settings


def fetch_forecast_daily(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    settings: Settings | None = None,
) -> dict[str, Any]:
    """
    Fetch a daily forecast for an explicit date window.

    Open-Meteo serves at most 16 days ahead; asking beyond that is answered
    with an HTTP 400, which surfaces as ``UpstreamUnavailable``.

    Args:
        lat: Latitude.
        lon: Longitude.
        start: First day (inclusive), normally today.
        end: Last day (inclusive).
        settings: Host and unit configuration (defaults to ``get_settings()``).

    Returns:
        Raw API response dict with ``daily`` key containing arrays.
    """
    settings = settings or get_settings()
    params = daily_params(lat, lon, settings)
    params["start_date"] = start.isoformat()
    params["end_date"] = end.isoformat()
    return get_json(settings.forecast_host.rstrip("/") + FORECAST_PATH, params)
